"""Cost management commands."""

import click

from wedplan.cli.display import echo_cost_line, echo_payment_line, format_money
from wedplan.cli.error_handling import handle_domain_error
from wedplan.domain.category import CategoryService
from wedplan.domain.cost import CostService
from wedplan.domain.entities import PaymentStatus
from wedplan.domain.payment import PaymentLedger
from wedplan.utils.amount_parser import parse_amount
from wedplan.utils.date_parser import parse_date


@click.group()
def cost_group():
    """Manage costs."""
    pass


@cost_group.command("add")
@click.argument("name")
@click.option("--value", required=True, help="Amount of this cost (may be a deposit)")
@click.option("--total", help="Full price when --value is only a deposit")
@click.option("--category", help="Category name or ID")
@click.option("--due", help="Due date (YYYY-MM-DD or relative like 'next month')")
@click.option("--paid-date", help="Date the cost was settled")
@click.option("--notes", help="Notes")
@click.pass_context
def add_cost(
    ctx,
    name: str,
    value: str,
    total: str | None,
    category: str | None,
    due: str | None,
    paid_date: str | None,
    notes: str | None,
) -> None:
    """Add a new cost.

    Examples:
        wedplan cost add "Venue" --value 1000 --total 10000 --category Venue
        wedplan cost add "Photographer" --value 3500 --due "2025-05-01"
    """
    db = ctx.obj["db"]
    service = CostService(db)

    try:
        category_id = CategoryService(db).resolve_category(category) if category else None
        cost = service.create_cost(
            name=name,
            value=parse_amount(value),
            total_amount=parse_amount(total) if total else None,
            category_id=category_id,
            due_date=parse_date(due) if due else None,
            paid_date=parse_date(paid_date) if paid_date else None,
            notes=notes,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created cost '{cost.name}' (ID: {cost.id})")
    click.echo(f"Target amount: {format_money(cost.target_amount)}")


@cost_group.command("list")
@click.option("--category", help="Only costs in this category (name or ID)")
@click.option(
    "--status",
    type=click.Choice([s.value for s in PaymentStatus], case_sensitive=False),
    help="Only costs with this payment status",
)
@click.pass_context
def list_costs(ctx, category: str | None, status: str | None) -> None:
    """List costs, newest first."""
    db = ctx.obj["db"]
    service = CostService(db)
    category_service = CategoryService(db)

    try:
        category_id = category_service.resolve_category(category) if category else None
    except ValueError as e:
        handle_domain_error(ctx, e)

    costs = service.list_costs(
        category_id=category_id,
        status=PaymentStatus(status.lower()) if status else None,
    )
    if not costs:
        click.echo("No costs found.")
        return

    names = {c.id: c.name for c in category_service.list_categories()}
    click.echo("\nCosts (paid / target):")
    click.echo("-" * 80)
    for cost in costs:
        echo_cost_line(cost, names.get(cost.category_id))


@cost_group.command("show")
@click.argument("cost_id", type=int)
@click.pass_context
def show_cost(ctx, cost_id: int) -> None:
    """Show a cost with its payment history."""
    db = ctx.obj["db"]

    try:
        cost = CostService(db).get_cost(cost_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\n{cost.name} (ID: {cost.id})")
    click.echo(f"  Value:        {format_money(cost.value)}")
    click.echo(f"  Total amount: {format_money(cost.total_amount)}")
    click.echo(f"  Paid:         {format_money(cost.amount_paid)}")
    click.echo(f"  Remaining:    {format_money(cost.remaining_amount)}")
    click.echo(f"  Status:       {cost.payment_status.value}")
    if cost.due_date:
        click.echo(f"  Due:          {cost.due_date.isoformat()}")
    if cost.paid_date:
        click.echo(f"  Paid on:      {cost.paid_date.isoformat()}")
    if cost.notes:
        click.echo(f"  Notes:        {cost.notes}")

    payments = PaymentLedger(db).list_payments(cost_id)
    if not payments:
        click.echo("\nNo payments recorded.")
        return
    click.echo("\nPayments:")
    for payment in payments:
        echo_payment_line(payment)


@cost_group.command("update")
@click.argument("cost_id", type=int)
@click.option("--name", help="New name")
@click.option("--value", help="New value")
@click.option("--total", help="New full price, or empty string to clear")
@click.option("--category", help="Category name or ID, or empty string to clear")
@click.option("--due", help="Due date, or empty string to clear")
@click.option("--paid-date", help="Paid date, or empty string to clear")
@click.option("--notes", help="Notes, or empty string to clear")
@click.pass_context
def update_cost(
    ctx,
    cost_id: int,
    name: str | None,
    value: str | None,
    total: str | None,
    category: str | None,
    due: str | None,
    paid_date: str | None,
    notes: str | None,
) -> None:
    """Update a cost.

    Updates only the fields that are provided. Changing --value or --total
    reconciles the cost against its payments.

    Examples:
        wedplan cost update 1 --total 12000
        wedplan cost update 1 --category ""  # Clear category
    """
    db = ctx.obj["db"]
    service = CostService(db)

    fields = {}
    try:
        if name is not None:
            fields["name"] = name
        if value is not None:
            fields["value"] = parse_amount(value)
        if total is not None:
            fields["total_amount"] = parse_amount(total) if total else None
        if category is not None:
            fields["category_id"] = (
                CategoryService(db).resolve_category(category) if category else None
            )
        if due is not None:
            fields["due_date"] = parse_date(due) if due else None
        if paid_date is not None:
            fields["paid_date"] = parse_date(paid_date) if paid_date else None
        if notes is not None:
            fields["notes"] = notes or None

        cost = service.update_cost(cost_id, fields)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated cost {cost_id}")
    click.echo(
        f"Paid {format_money(cost.amount_paid)} of {format_money(cost.target_amount)} "
        f"({cost.payment_status.value})"
    )


@cost_group.command("delete")
@click.argument("cost_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_cost(ctx, cost_id: int, yes: bool) -> None:
    """Delete a cost and its payment history."""
    db = ctx.obj["db"]
    service = CostService(db)

    try:
        cost = service.get_cost(cost_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm(
        f"Are you sure you want to delete cost '{cost.name}' (ID: {cost_id}) and its payments?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        removed = service.delete_cost(cost_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted cost '{cost.name}' and {removed} payment{'s' if removed != 1 else ''}")


@cost_group.command("reconcile")
@click.argument("cost_id", type=int, required=False)
@click.option("--all", "all_costs", is_flag=True, help="Reconcile every cost")
@click.pass_context
def reconcile_cost(ctx, cost_id: int | None, all_costs: bool) -> None:
    """Recompute paid amounts and statuses from payment history.

    Examples:
        wedplan cost reconcile 3
        wedplan cost reconcile --all
    """
    db = ctx.obj["db"]
    service = CostService(db)

    if all_costs == (cost_id is not None):
        click.echo("Error: Provide either COST_ID or --all", err=True)
        ctx.exit(1)

    try:
        if all_costs:
            changed = service.reconcile_all()
            click.echo(f"Reconciled all costs; {changed} had stale totals.")
            return
        summary = service.reconcile(cost_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(
        f"Cost {cost_id}: paid {format_money(summary.amount_paid)} of "
        f"{format_money(summary.target_amount)} ({summary.payment_status.value})"
    )


def register_commands(cli):
    """Register cost commands with main CLI."""
    cli.add_command(cost_group, name="cost")
