"""Info command - show configuration and registry details."""

from dataclasses import asdict

import typer

from ..config import get_config_path
from .common import console, get_allocator, handle_errors, print_json


def info(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show devports configuration and registry information.

    Examples:
        devports info
        devports info --json
    """
    with handle_errors():
        allocator = get_allocator()
        config_path = get_config_path()
        total = len(allocator.list_allocations())
        stats = allocator.status()

    ranges = allocator.config.ranges

    if json_output:
        print_json(
            {
                "configPath": str(config_path),
                "registryPath": str(allocator.registry_path),
                "totalAllocations": total,
                "portRanges": {
                    name: {"start": r.start, "end": r.end} for name, r in ranges.items()
                },
                "stats": {name: asdict(s) for name, s in stats.items()},
            }
        )
        return

    console.print("[bold]devports Configuration[/bold]\n")
    console.print(f"  [dim]Config:[/dim]      {config_path}")
    console.print(f"  [dim]Registry:[/dim]    {allocator.registry_path}")
    console.print(f"  [dim]Allocations:[/dim] {total} ports in use\n")
    console.print("[bold]Port Ranges[/bold]")
    for name, port_range in ranges.items():
        console.print(f"  [green]{name:<10}[/green] {port_range.start}-{port_range.end}")
