"""Typer CLI for devports - Main entry point."""

import typer

from . import __version__
from .commands import (
    allocate,
    check,
    info,
    list_cmd,
    release,
    render,
    reserve,
    status,
    unreserve,
)

app = typer.Typer(
    name="devports",
    help="Port allocation for concurrently running development projects",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"devports version {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Port allocation for concurrently running development projects."""
    pass

# Register all commands
app.command()(allocate)
app.command()(release)
app.command()(reserve)
app.command()(unreserve)
app.command()(status)
app.command(name="list")(list_cmd)
app.command()(check)
app.command()(render)
app.command()(info)


def main() -> None:
    """Main entry point."""
    app()
