"""Main CLI entry point."""

import click

from wedplan.config import get_settings
from wedplan.database.factories import create_configured_database
from wedplan.logging_config import configure_logging

# Import and register all commands at module level
from wedplan.cli.commands import (
    budget,
    category,
    cost,
    init_categories,
    payment,
    serve,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides WEDPLAN_DB_PATH environment variable)",
    envvar="WEDPLAN_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level (defaults to WEDPLAN_LOG_LEVEL or INFO)",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str | None):
    """Wedplan - Wedding budget and payment tracking.

    Record wedding costs, pay them in installments, and keep every cost's
    paid amount and payment status in line with its payment history.
    """
    ctx.ensure_object(dict)
    settings = get_settings()
    configure_logging(log_level or settings.LOG_LEVEL)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_configured_database(database_path=db_path, settings=settings)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["settings"] = settings
        ctx.call_on_close(db.disconnect)


# Register all commands
cost.register_commands(cli)
payment.register_commands(cli)
category.register_commands(cli)
init_categories.register_commands(cli)
budget.register_commands(cli)
serve.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
