"""devports - Port allocation for concurrently running development projects."""

__version__ = "0.1.0"

from .allocator import PortAllocator, TypeStatus
from .comments import CommentStyle, Range, comment_style_for, find_comment_ranges
from .config import Config, load_config
from .errors import (
    AlreadyAllocatedError,
    DevportsError,
    InvalidArgumentsError,
    LockError,
    NoAvailablePortsError,
    NoProjectNameError,
    PortAllocatedError,
    PortReservedError,
    RegistryError,
    UnknownTypeError,
)
from .lock import FileLock, LockOptions
from .registry import (
    PortAllocation,
    PortRange,
    Registry,
    Reservation,
    load_registry,
    save_registry,
)
from .render import RenderResult, render_file
from .system import SystemScanner
from .template import detect_services, extract_project_name, make_url_safe, substitute

__all__ = [
    "__version__",
    "PortAllocator",
    "TypeStatus",
    "CommentStyle",
    "Range",
    "comment_style_for",
    "find_comment_ranges",
    "Config",
    "load_config",
    "DevportsError",
    "UnknownTypeError",
    "AlreadyAllocatedError",
    "PortAllocatedError",
    "PortReservedError",
    "NoAvailablePortsError",
    "InvalidArgumentsError",
    "NoProjectNameError",
    "RegistryError",
    "LockError",
    "FileLock",
    "LockOptions",
    "PortAllocation",
    "PortRange",
    "Registry",
    "Reservation",
    "load_registry",
    "save_registry",
    "RenderResult",
    "render_file",
    "SystemScanner",
    "detect_services",
    "extract_project_name",
    "make_url_safe",
    "substitute",
]
