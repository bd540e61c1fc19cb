"""Release command - free up port allocations."""

import typer

from .common import console, get_allocator, handle_errors


def release(
    target: str = typer.Argument(..., help="Project name, or port number with --port"),
    service: str | None = typer.Argument(None, help="Service to release"),
    all: bool = typer.Option(False, "--all", help="Release all ports for the project"),
    port: bool = typer.Option(False, "--port", help="Treat TARGET as a port number"),
) -> None:
    """Release port allocation(s).

    Without a service, every allocation of the project is released.

    Examples:
        devports release myapp db
        devports release myapp --all
        devports release 5434 --port
    """
    with handle_errors():
        allocator = get_allocator()

    if port:
        try:
            port_number = int(target)
        except ValueError:
            raise typer.BadParameter(f"Invalid port number: {target}") from None
        with handle_errors():
            released = allocator.release_by_port(port_number)
        if not released:
            console.print(f"[yellow]No allocation found for port {port_number}[/yellow]")
            raise typer.Exit(1)
        console.print(f"[green]Released port {port_number}[/green]")
        return

    with handle_errors():
        if all or not service:
            count = allocator.release(target, all=True)
        else:
            count = allocator.release(target, service)

    if count == 0:
        what = f"{target}/{service}" if service and not all else f'project "{target}"'
        console.print(f"[yellow]No allocations found for {what}[/yellow]")
        raise typer.Exit(1)
    console.print(f"[green]Released {count} allocation(s)[/green]")
