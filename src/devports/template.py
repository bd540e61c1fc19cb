"""Placeholder parsing and substitution for devports templates.

Templates reference ports symbolically:

    DEVPORTS_PROJECT_NAME={devports:project}
    DATABASE_URL=postgres://localhost:{devports:postgres:db}/app

``{devports:project}`` resolves to the project name and
``{devports:<type>:<service>}`` to the port allocated for that service.
Placeholders inside comments are never touched.
"""

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass

from .comments import find_comment_ranges, in_comment
from .console import warning

PLACEHOLDER_PATTERN = re.compile(r"\{devports:([^}]+)\}")
PROJECT_NAME_KEY = "DEVPORTS_PROJECT_NAME="


@dataclass(frozen=True)
class ProjectRef:
    """``{devports:project}``"""


@dataclass(frozen=True)
class ServiceRef:
    """``{devports:<type>:<service>}``"""

    type: str
    service: str


@dataclass(frozen=True)
class Malformed:
    """A placeholder body matching neither shape."""

    body: str


Placeholder = ProjectRef | ServiceRef | Malformed


@dataclass(frozen=True)
class PlaceholderMatch:
    """A placeholder found outside comments."""

    start: int
    end: int
    text: str
    value: Placeholder


def parse_placeholder(body: str) -> Placeholder:
    """Classify the body of a ``{devports:...}`` placeholder.

    Args:
        body: Text between ``devports:`` and the closing brace

    Returns:
        ProjectRef, ServiceRef or Malformed
    """
    parts = body.split(":")
    if parts == ["project"]:
        return ProjectRef()
    if len(parts) == 2 and all(parts):
        return ServiceRef(type=parts[0], service=parts[1])
    return Malformed(body)


def iter_placeholders(text: str, filename: str | None = None) -> Iterator[PlaceholderMatch]:
    """Yield placeholders that are not inside comments, in document order."""
    comment_ranges = find_comment_ranges(text, filename)
    for match in PLACEHOLDER_PATTERN.finditer(text):
        start, end = match.span()
        if in_comment(comment_ranges, start, end):
            continue
        yield PlaceholderMatch(start, end, match.group(0), parse_placeholder(match.group(1)))


def detect_services(text: str, filename: str | None = None) -> list[str]:
    """Find the services a template needs ports for.

    Args:
        text: Template content
        filename: Template name, used to pick the comment style

    Returns:
        De-duplicated ``"service:type"`` strings in first-seen order
    """
    services: dict[str, None] = {}
    for match in iter_placeholders(text, filename):
        value = match.value
        if isinstance(value, Malformed):
            warning(
                f"Invalid devports pattern: {match.text} - must be "
                "{devports:type:service-name} or {devports:project}"
            )
        elif isinstance(value, ServiceRef):
            services.setdefault(f"{value.service}:{value.type}", None)
    return list(services)


def substitute(
    text: str,
    ports: Mapping[str, int],
    project_name: str,
    filename: str | None = None,
) -> str:
    """Replace placeholders outside comments.

    Service placeholders whose service is missing from ``ports`` and
    malformed placeholders are left as written. All edits are computed
    against the original text and spliced in one pass, so replacement
    values are never scanned again.

    Args:
        text: Template content
        ports: Port per service name
        project_name: Value for ``{devports:project}``
        filename: Template name, used to pick the comment style

    Returns:
        The rendered text
    """
    pieces: list[str] = []
    last = 0
    for match in iter_placeholders(text, filename):
        value = match.value
        if isinstance(value, ProjectRef):
            replacement = project_name
        elif isinstance(value, ServiceRef) and value.service in ports:
            replacement = str(ports[value.service])
        else:
            continue
        pieces.append(text[last : match.start])
        pieces.append(replacement)
        last = match.end
    pieces.append(text[last:])
    return "".join(pieces)


def extract_project_name(text: str) -> str | None:
    """Read ``DEVPORTS_PROJECT_NAME=...`` from a template.

    One layer of matching quotes is stripped. A value that is itself a
    ``{...}`` placeholder counts as not set.

    Args:
        text: Template content

    Returns:
        The project name, or None if absent, empty or unresolved
    """
    for line in text.splitlines():
        line = line.strip()
        if not line.startswith(PROJECT_NAME_KEY):
            continue
        value = line[len(PROJECT_NAME_KEY) :].strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        if not value or (value.startswith("{") and value.endswith("}")):
            return None
        return value
    return None


def make_url_safe(name: str) -> str:
    """Lowercase a name and reduce it to ``[a-z0-9-]``.

    Examples:
        My_Project -> my-project
        --Foo  Bar-- -> foo-bar
    """
    name = re.sub(r"[^a-z0-9-]", "-", name.lower())
    name = re.sub(r"-+", "-", name)
    return name.strip("-")
