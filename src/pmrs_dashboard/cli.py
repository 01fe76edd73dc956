"""Command-line entry point: run the dashboard API or the echo test server."""

import click
import uvicorn
from pydantic import ValidationError

from pmrs_dashboard.config import EchoSettings, get_settings
from pmrs_dashboard.echo_server import run_echo_server


@click.group()
def cli():
    """Dashboard backend for the pmrs process manager."""
    pass


@cli.command()
@click.option("--host", default=None, help="Bind address (defaults to HOST setting).")
@click.option("--port", type=int, default=None, help="Bind port (defaults to PORT setting).")
@click.option("--reload", is_flag=True, help="Restart on code changes (development only).")
def serve(host: str | None, port: int | None, reload: bool):
    """Run the dashboard API with uvicorn."""
    settings = get_settings()
    try:
        settings.validate_runtime()
    except ValueError as e:
        click.echo(f"✗ Invalid configuration: {e}", err=True)
        raise SystemExit(1)

    uvicorn.run(
        "pmrs_dashboard.main:app",
        host=settings.host if host is None else host,
        port=settings.port if port is None else port,
        reload=reload,
        log_config=None,
    )


@cli.command()
@click.option("--port", type=int, default=None, help="Port to listen on (defaults to $PORT).")
def echo(port: int | None):
    """Run the echo test server; it exits after ten requests."""
    try:
        settings = EchoSettings() if port is None else EchoSettings(port=port)
    except ValidationError as e:
        if any(err["loc"] == ("port",) and err["type"] == "missing" for err in e.errors()):
            click.echo("✗ No port given. Pass --port or set PORT.", err=True)
        else:
            click.echo(f"✗ Invalid configuration: {e}", err=True)
        raise SystemExit(1)

    run_echo_server(settings)


if __name__ == "__main__":
    cli()
