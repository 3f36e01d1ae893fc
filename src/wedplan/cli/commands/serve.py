"""Run the HTTP API."""

import click
import uvicorn

from wedplan.api.app import create_app


@click.command("serve")
@click.option("--host", default=None, help="Interface to bind (defaults to WEDPLAN_HOST)")
@click.option("--port", type=int, default=None, help="Port to listen on (defaults to WEDPLAN_PORT)")
@click.pass_context
def serve(ctx, host: str | None, port: int | None) -> None:
    """Serve the REST API for costs, payments and categories."""
    settings = ctx.obj["settings"]
    app = create_app(db=ctx.obj["db"], settings=settings)
    uvicorn.run(
        app,
        host=host or settings.HOST,
        port=port or settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


def register_commands(cli):
    """Register serve command with main CLI."""
    cli.add_command(serve)
