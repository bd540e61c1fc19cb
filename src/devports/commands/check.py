"""Check command - see whether a port is free in the registry."""

import typer

from .common import console, get_allocator, handle_errors, print_json


def check(
    port: int = typer.Argument(..., min=1, max=65535, help="Port to check"),
    quiet: bool = typer.Option(False, "-q", "--quiet", help="No output, exit status only"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Check if a port is available (non-destructive).

    Exits 0 when the port is free, 1 when it is allocated.

    Examples:
        devports check 5434
        devports check 5434 -q && echo free
    """
    with handle_errors():
        allocation = get_allocator().check(port)

    if json_output:
        print_json(
            {
                "port": port,
                "available": allocation is None,
                "allocation": allocation.to_dict() if allocation else None,
            }
        )
    elif not quiet:
        if allocation is None:
            console.print(f"[green]Port {port} is available[/green]")
        else:
            console.print(
                f"[red]Port {port} is allocated to "
                f"{allocation.project}/{allocation.service}[/red]"
            )

    if allocation is not None:
        raise typer.Exit(1)
