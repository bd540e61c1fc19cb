"""Console utilities for devports."""

import os
from typing import Any

from rich.console import Console
from rich.markup import escape

# Shared console instances
console = Console()
error_console = Console(stderr=True)

# Debug mode - enabled by DEVPORTS_DEBUG environment variable
DEBUG = os.getenv("DEVPORTS_DEBUG", "").lower() in ("1", "true", "yes")


def debug(message: str, **kwargs: Any) -> None:
    """Print debug message to stderr if DEBUG mode is enabled.

    Args:
        message: Message to print
        **kwargs: Additional arguments for console.print
    """
    if DEBUG:
        error_console.print(f"[dim][DEBUG][/dim] {message}", **kwargs)


def info(message: str, **kwargs: Any) -> None:
    """Print info message.

    Args:
        message: Message to print
        **kwargs: Additional arguments for console.print
    """
    console.print(message, **kwargs)


def success(message: str, **kwargs: Any) -> None:
    """Print success message in green.

    Args:
        message: Message to print
        **kwargs: Additional arguments for console.print
    """
    console.print(f"[green]{message}[/green]", **kwargs)


def warning(message: str, **kwargs: Any) -> None:
    """Print warning message in yellow to stderr.

    Warnings come from library code as well as commands, so they stay off
    stdout where rendered templates and quiet output are written.

    Args:
        message: Message to print
        **kwargs: Additional arguments for console.print
    """
    error_console.print(f"[yellow]Warning:[/yellow] {escape(message)}", **kwargs)


def error(message: str, **kwargs: Any) -> None:
    """Print error message in red to stderr.

    Args:
        message: Message to print
        **kwargs: Additional arguments for console.print
    """
    error_console.print(f"[red]Error:[/red] {escape(message)}", **kwargs)
