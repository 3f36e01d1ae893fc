"""Budget summary command."""

import click

from wedplan.cli.display import format_money
from wedplan.cli.error_handling import handle_domain_error
from wedplan.domain.budget import BudgetService
from wedplan.domain.money import to_positive_money
from wedplan.utils.amount_parser import parse_amount


@click.group()
def budget_group():
    """Budget overview."""
    pass


@budget_group.command("summary")
@click.option(
    "--total-budget",
    help="Overall budget to compare payments against (defaults to WEDPLAN_TOTAL_BUDGET)",
)
@click.pass_context
def budget_summary(ctx, total_budget: str | None) -> None:
    """Show planned and paid totals per category."""
    db = ctx.obj["db"]
    settings = ctx.obj["settings"]

    try:
        budget = settings.TOTAL_BUDGET
        if total_budget is not None:
            budget = to_positive_money(parse_amount(total_budget), "total budget")
        summary = BudgetService(db).summarize(total_budget=budget)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not summary.categories:
        click.echo("No costs found.")
        return

    click.echo("\nBudget by category (paid / planned):")
    click.echo("-" * 70)
    for group in summary.categories:
        click.echo(
            f"{group.category_name:24s} | {format_money(group.paid):>12s} / "
            f"{format_money(group.planned):>12s} | {group.cost_count} cost"
            f"{'s' if group.cost_count != 1 else ''}"
        )
    click.echo("-" * 70)
    click.echo(f"{'Total':24s} | {format_money(summary.paid):>12s} / {format_money(summary.planned):>12s}")
    click.echo(f"Outstanding: {format_money(summary.outstanding)}")
    if summary.total_budget is not None:
        click.echo(
            f"Budget: {format_money(summary.total_budget)} | "
            f"remaining {format_money(summary.budget_remaining)} | "
            f"{summary.percent_used}% used"
        )
    counts = ", ".join(f"{status.value}: {n}" for status, n in summary.status_counts.items())
    click.echo(f"Payment status: {counts}")


def register_commands(cli):
    """Register budget commands with main CLI."""
    cli.add_command(budget_group, name="budget")
