"""Common utilities for CLI commands."""

import json
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import typer

from ..allocator import PortAllocator
from ..config import load_config
from ..console import console, debug, error, error_console, info, success, warning
from ..errors import DevportsError

# Re-export console utilities
__all__ = [
    "console",
    "error_console",
    "debug",
    "info",
    "success",
    "warning",
    "error",
    "get_allocator",
    "handle_errors",
    "print_json",
]


def get_allocator() -> PortAllocator:
    """Get allocator instance for the current config."""
    return PortAllocator(load_config())


@contextmanager
def handle_errors() -> Iterator[None]:
    """Report devports errors and exit with status 1."""
    try:
        yield
    except DevportsError as e:
        error(str(e))
        raise typer.Exit(1) from e


def print_json(data: Any) -> None:
    """Print data as indented JSON on stdout."""
    print(json.dumps(data, indent=2))
