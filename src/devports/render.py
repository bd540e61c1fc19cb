"""Template rendering for devports."""

from dataclasses import dataclass
from pathlib import Path

from .allocator import PortAllocator
from .console import debug
from .errors import NoProjectNameError
from .template import detect_services, extract_project_name, make_url_safe, substitute


@dataclass
class RenderResult:
    """Result of rendering a template."""

    content: str
    allocated_ports: dict[str, int]
    project_name: str


def render_file(
    allocator: PortAllocator,
    path: Path,
    project_name: str | None = None,
    output_file: Path | None = None,
) -> RenderResult:
    """Render a template, allocating ports for the services it references.

    Existing allocations are reused, so rendering the same template twice
    yields the same ports.

    Args:
        allocator: Allocator used to get or allocate ports
        path: Template file
        project_name: Project name, overriding DEVPORTS_PROJECT_NAME in the template
        output_file: Where to write the rendered content, if anywhere

    Returns:
        RenderResult with content, ports per service and the project name

    Raises:
        NoProjectNameError: If no project name can be determined
    """
    template = path.read_text(encoding="utf-8")

    name = project_name or extract_project_name(template)
    name = make_url_safe(name) if name else None
    if not name:
        raise NoProjectNameError()

    allocated_ports: dict[str, int] = {}
    for entry in detect_services(template, path.name):
        service, service_type = entry.split(":", 1)
        allocated_ports[service] = allocator.get_or_allocate(name, service, service_type)
        debug(f"{service} ({service_type}) -> {allocated_ports[service]}")

    content = substitute(template, allocated_ports, name, path.name)

    if output_file is not None:
        output_file.write_text(content, encoding="utf-8")
        debug(f"Wrote {output_file}")

    return RenderResult(content=content, allocated_ports=allocated_ports, project_name=name)
