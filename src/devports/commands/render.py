"""Render command - fill devports placeholders in a template."""

from pathlib import Path

import typer

from ..render import render_file
from .common import console, get_allocator, handle_errors, print_json


def render(
    template: Path = typer.Argument(
        ..., exists=True, dir_okay=False, readable=True, help="Template file"
    ),
    project: str | None = typer.Option(
        None, "-p", "--project", help="Project name (overrides DEVPORTS_PROJECT_NAME)"
    ),
    output: Path | None = typer.Option(None, "-o", "--output", help="Write result to file"),
    json_output: bool = typer.Option(False, "--json", help="Output result as JSON"),
) -> None:
    """Render a template, allocating ports for {devports:type:service} placeholders.

    Existing allocations are reused, so re-rendering is safe.

    Examples:
        devports render .env.devports -o .env
        devports render docker-compose.yml.devports --project myapp
    """
    with handle_errors():
        result = render_file(get_allocator(), template, project_name=project, output_file=output)

    if json_output:
        print_json(
            {
                "project": result.project_name,
                "ports": result.allocated_ports,
                "output": str(output) if output else None,
            }
        )
    elif output:
        console.print(f"[green]Rendered {template} -> {output}[/green]")
        for service, port in result.allocated_ports.items():
            console.print(f"  [dim]{service}:[/dim] {port}")
    else:
        print(result.content, end="")
