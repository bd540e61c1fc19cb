"""List command - show port allocations and reservations."""

from itertools import groupby

import typer
from rich.table import Table

from .common import console, get_allocator, handle_errors, print_json


def list_cmd(
    project: str | None = typer.Option(None, "-p", "--project", help="Filter by project"),
    type: str | None = typer.Option(None, "-t", "--type", help="Filter by service type"),
    quiet: bool = typer.Option(False, "-q", "--quiet", help="Output only port numbers"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List all port allocations.

    Examples:
        devports list
        devports list --project myapp
        devports list --type postgres --json
    """
    with handle_errors():
        allocator = get_allocator()
        allocations = allocator.list_allocations(project=project, service_type=type)
        reservations = allocator.list_reservations()

    if quiet:
        for alloc in allocations:
            print(alloc.port)
        return

    if json_output:
        print_json(
            {
                "allocations": [a.to_dict() for a in allocations],
                "reservations": [r.to_dict() for r in reservations],
            }
        )
        return

    if not allocations and not reservations:
        console.print("[yellow]No port allocations or reservations found[/yellow]")
        return

    by_project = sorted(allocations, key=lambda a: (a.project, a.port))
    for project_name, group in groupby(by_project, key=lambda a: a.project):
        table = Table(title=project_name, title_style="bold cyan")
        table.add_column("Port", style="green")
        table.add_column("Service")
        table.add_column("Type", style="yellow")
        table.add_column("Allocated", style="dim")
        for alloc in group:
            table.add_row(str(alloc.port), alloc.service, alloc.type, alloc.allocated_at)
        console.print(table)

    if reservations:
        table = Table(title="Reserved", title_style="bold magenta")
        table.add_column("Port", style="red")
        table.add_column("Reason")
        table.add_column("Reserved", style="dim")
        for reservation in sorted(reservations, key=lambda r: r.port):
            table.add_row(str(reservation.port), reservation.reason, reservation.reserved_at)
        console.print(table)
