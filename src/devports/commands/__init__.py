"""Command modules for devports CLI."""

from .allocate import allocate
from .check import check
from .info import info
from .list import list_cmd
from .release import release
from .render import render
from .reserve import reserve, unreserve
from .status import status

__all__ = [
    "allocate",
    "check",
    "info",
    "list_cmd",
    "release",
    "render",
    "reserve",
    "status",
    "unreserve",
]
