"""CLI error handling helpers."""

import click

from wedplan.cli.display import format_money
from wedplan.domain.errors import DomainError, ExceedsRemainingError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Print the error, plus the remaining balance for overpayments, and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    if isinstance(error, ExceedsRemainingError):
        click.echo(f"Remaining balance: {format_money(error.remaining)}", err=True)
    ctx.exit(1)
