"""Status command - show port usage per service type."""

from dataclasses import asdict

import typer
from rich.table import Table

from .common import console, get_allocator, handle_errors, print_json


def status(
    quiet: bool = typer.Option(False, "-q", "--quiet", help="Output type:next-port lines"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show available ports by type.

    Examples:
        devports status
        devports status --json
    """
    with handle_errors():
        types = get_allocator().status()

    if json_output:
        print_json({name: asdict(stats) for name, stats in types.items()})
        return

    if quiet:
        for name, stats in types.items():
            if stats.next is not None:
                print(f"{name}:{stats.next}")
        return

    table = Table(title="Port Status")
    table.add_column("Type", style="green")
    table.add_column("Used", style="yellow")
    table.add_column("Available", style="yellow")
    table.add_column("Next", style="cyan")

    for name, stats in types.items():
        next_port = str(stats.next) if stats.next is not None else "[red]none[/red]"
        table.add_row(name, str(stats.used), str(stats.available), next_port)

    console.print(table)
