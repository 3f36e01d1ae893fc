"""Shared output helpers for CLI commands."""

from decimal import Decimal
from typing import Optional

import click

from wedplan.domain.entities import CostRecord, PaymentEntry


def format_money(amount: Optional[Decimal]) -> str:
    """Format an amount with thousands separators and two decimals."""
    if amount is None:
        return "-"
    return f"{amount:,.2f}"


def echo_cost_line(cost: CostRecord, category_name: Optional[str] = None) -> None:
    """Print a one-line cost summary."""
    category = f" | {category_name}" if category_name else ""
    click.echo(
        f"ID: {cost.id:3d} | {cost.name:24s} | "
        f"{format_money(cost.amount_paid):>12s} / {format_money(cost.target_amount):>12s} | "
        f"{cost.payment_status.value:7s}{category}"
    )


def echo_payment_line(payment: PaymentEntry) -> None:
    """Print a one-line payment summary."""
    note = f" | {payment.note}" if payment.note else ""
    click.echo(
        f"ID: {payment.id:3d} | {payment.payment_date:%Y-%m-%d %H:%M} | "
        f"{format_money(payment.amount):>12s}{note}"
    )
