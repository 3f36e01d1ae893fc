"""Payment commands."""

from datetime import datetime, time, UTC

import click

from wedplan.cli.display import echo_payment_line, format_money
from wedplan.cli.error_handling import handle_domain_error
from wedplan.domain.payment import PaymentLedger
from wedplan.utils.amount_parser import parse_amount
from wedplan.utils.date_parser import parse_date


@click.group()
def payment_group():
    """Record and remove payments."""
    pass


@payment_group.command("add")
@click.argument("cost_id", type=int)
@click.argument("amount")
@click.option("--note", help="Note for this payment")
@click.option("--date", "payment_date", help="Payment date (defaults to now)")
@click.pass_context
def add_payment(ctx, cost_id: int, amount: str, note: str | None, payment_date: str | None) -> None:
    """Record a payment against a cost.

    Examples:
        wedplan payment add 1 3000 --note "Deposit"
        wedplan payment add 1 "1 500,00" --date yesterday
    """
    ledger = PaymentLedger(ctx.obj["db"])

    try:
        when = None
        if payment_date is not None:
            when = datetime.combine(parse_date(payment_date), time(12, 0), tzinfo=UTC)
        payment = ledger.add_payment(
            cost_id=cost_id,
            amount=parse_amount(amount),
            note=note,
            payment_date=when,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    cost = ledger.db.get_cost(cost_id)
    click.echo(f"Recorded payment of {format_money(payment.amount)} (ID: {payment.id})")
    click.echo(
        f"Cost {cost_id}: paid {format_money(cost.amount_paid)} of "
        f"{format_money(cost.target_amount)} ({cost.payment_status.value})"
    )


@payment_group.command("list")
@click.argument("cost_id", type=int)
@click.pass_context
def list_payments(ctx, cost_id: int) -> None:
    """List payments for a cost, most recent first."""
    payments = PaymentLedger(ctx.obj["db"]).list_payments(cost_id)
    if not payments:
        click.echo("No payments found.")
        return

    click.echo(f"\nPayments for cost {cost_id}:")
    click.echo("-" * 60)
    for payment in payments:
        echo_payment_line(payment)


@payment_group.command("delete")
@click.argument("payment_id", type=int)
@click.pass_context
def delete_payment(ctx, payment_id: int) -> None:
    """Delete a payment and reconcile its cost."""
    ledger = PaymentLedger(ctx.obj["db"])

    try:
        summary = ledger.delete_payment(payment_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted payment {payment_id}")
    click.echo(
        f"Cost {summary.cost_id}: paid {format_money(summary.amount_paid)} of "
        f"{format_money(summary.target_amount)} ({summary.payment_status.value})"
    )


def register_commands(cli):
    """Register payment commands with main CLI."""
    cli.add_command(payment_group, name="payment")
