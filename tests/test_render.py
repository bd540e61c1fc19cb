"""Tests for render module."""

import pytest

from devports.errors import NoProjectNameError
from devports.registry import load_registry
from devports.render import render_file

ENV_TEMPLATE = """\
DEVPORTS_PROJECT_NAME=My_App
# Old database: {devports:postgres:legacy}
DATABASE_URL=postgres://localhost:{devports:postgres:db}/app
API_PORT={devports:api:web}
COMPOSE_PROJECT_NAME={devports:project}
"""


def test_render_allocates_and_substitutes(allocator, temp_dir):
    """Test rendering a template end to end."""
    template = temp_dir / ".env.devports"
    template.write_text(ENV_TEMPLATE)

    result = render_file(allocator, template)

    assert result.project_name == "my-app"
    assert result.allocated_ports == {"db": 5434, "web": 3002}
    assert "DATABASE_URL=postgres://localhost:5434/app" in result.content
    assert "API_PORT=3002" in result.content
    assert "COMPOSE_PROJECT_NAME=my-app" in result.content
    assert "# Old database: {devports:postgres:legacy}" in result.content
    assert allocator.get_existing("my-app", "legacy") is None


def test_render_is_idempotent(allocator, temp_dir):
    """Test rendering twice reuses the same ports."""
    template = temp_dir / ".env.devports"
    template.write_text(ENV_TEMPLATE)

    first = render_file(allocator, template)
    second = render_file(allocator, template)

    assert first.allocated_ports == second.allocated_ports
    assert first.content == second.content
    assert len(load_registry(allocator.registry_path).allocations) == 2


def test_render_project_name_option_wins(allocator, temp_dir):
    """Test the project name option overrides the template."""
    template = temp_dir / ".env.devports"
    template.write_text(ENV_TEMPLATE)

    result = render_file(allocator, template, project_name="Other Project")

    assert result.project_name == "other-project"
    assert allocator.get_existing("other-project", "db") == 5434


def test_render_without_project_name(allocator, temp_dir):
    """Test rendering fails when no project name is available."""
    template = temp_dir / ".env.devports"
    template.write_text("DEVPORTS_PROJECT_NAME={devports:project}\nPORT={devports:api:web}\n")

    with pytest.raises(NoProjectNameError):
        render_file(allocator, template)

    assert not allocator.registry_path.exists()


def test_render_writes_output(allocator, temp_dir):
    """Test rendering to an output file."""
    template = temp_dir / "docker-compose.yml.devports"
    template.write_text(
        "services:\n"
        "  db:\n"
        "    # {devports:postgres:commented}\n"
        '    ports: ["{devports:postgres:db}:5432"]\n'
    )
    output = temp_dir / "docker-compose.yml"

    result = render_file(allocator, template, project_name="myapp", output_file=output)

    assert output.read_text() == result.content
    assert 'ports: ["5434:5432"]' in result.content
    assert "# {devports:postgres:commented}" in result.content


def test_render_uses_file_comment_style(allocator, temp_dir):
    """Test the template's extension decides what a comment is."""
    template = temp_dir / "config.ts.devports"
    template.write_text(
        "// {devports:api:old}\n"
        "export const port = {devports:api:web}; # not a comment here\n"
        "/* {devports:api:also-old} */\n"
    )

    result = render_file(allocator, template, project_name="myapp")

    assert result.allocated_ports == {"web": 3002}
    assert "export const port = 3002;" in result.content
