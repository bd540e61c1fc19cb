"""Reserve and unreserve commands - block ports from allocation."""

import typer

from .common import console, get_allocator, handle_errors


def reserve(
    port: int = typer.Argument(..., min=1, max=65535, help="Port to reserve"),
    reason: str = typer.Argument(..., help="Why the port is reserved"),
) -> None:
    """Reserve a port so it is never allocated.

    Examples:
        devports reserve 9000 "Local MinIO"
    """
    with handle_errors():
        get_allocator().reserve(port, reason)
    console.print(f"[green]Reserved port {port}[/green]")


def unreserve(
    port: int = typer.Argument(..., min=1, max=65535, help="Port to unreserve"),
) -> None:
    """Remove a port reservation.

    Examples:
        devports unreserve 9000
    """
    with handle_errors():
        removed = get_allocator().unreserve(port)
    if not removed:
        console.print(f"[yellow]Port {port} is not reserved[/yellow]")
        raise typer.Exit(1)
    console.print(f"[green]Unreserved port {port}[/green]")
