"""Allocate command - claim a port for a project service."""

import typer

from .common import console, get_allocator, handle_errors, print_json


def allocate(
    project: str = typer.Argument(..., help="Project name"),
    service: str = typer.Argument(..., help="Service name within the project"),
    type: str = typer.Option(..., "-t", "--type", help="Service type (e.g., postgres, api)"),
    quiet: bool = typer.Option(False, "-q", "--quiet", help="Output only the port number"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Allocate a port for a project/service.

    Examples:
        devports allocate myapp db --type postgres
        PGPORT=$(devports allocate myapp db -t postgres -q)
    """
    with handle_errors():
        port = get_allocator().allocate(project, service, type)

    if quiet:
        print(port)
    elif json_output:
        print_json({"port": port, "project": project, "service": service, "type": type})
    else:
        console.print(f"[green]{project}/{service}[/green] ({type}): {port}")
