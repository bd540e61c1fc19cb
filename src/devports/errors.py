"""Exception types for devports."""


class DevportsError(Exception):
    """Base class for all devports errors."""


class UnknownTypeError(DevportsError):
    """Raised when a service type has no configured port range."""

    def __init__(self, service_type: str, valid_types: list[str]) -> None:
        self.service_type = service_type
        self.valid_types = valid_types
        super().__init__(
            f'No port range configured for type "{service_type}". '
            f"Valid types: {', '.join(valid_types)}"
        )


class AlreadyAllocatedError(DevportsError):
    """Raised when a project/service pair already holds a port."""

    def __init__(self, project: str, service: str, port: int) -> None:
        self.project = project
        self.service = service
        self.port = port
        super().__init__(
            f"Port {port} already allocated for {project}/{service}. "
            f"Use 'devports release {project} {service}' first."
        )


class PortAllocatedError(DevportsError):
    """Raised when reserving a port that an allocation owns."""

    def __init__(self, port: int, project: str, service: str) -> None:
        self.port = port
        self.project = project
        self.service = service
        super().__init__(f"Port {port} is already allocated to {project}/{service}")


class PortReservedError(DevportsError):
    """Raised when reserving a port that is already reserved."""

    def __init__(self, port: int, reason: str) -> None:
        self.port = port
        self.reason = reason
        super().__init__(f"Port {port} is already reserved: {reason}")


class NoAvailablePortsError(DevportsError):
    """Raised when a type's range has no free port left."""

    def __init__(self, service_type: str, start: int, end: int) -> None:
        self.service_type = service_type
        self.start = start
        self.end = end
        super().__init__(
            f"No available ports in range {start}-{end} for {service_type}. "
            "All ports are either allocated by devports or in use by other processes."
        )


class InvalidArgumentsError(DevportsError, ValueError):
    """Raised when an operation is called with an invalid argument combination."""


class NoProjectNameError(DevportsError):
    """Raised when a template render cannot determine a project name."""

    def __init__(self) -> None:
        super().__init__(
            "No DEVPORTS_PROJECT_NAME found in template and none provided via options"
        )


class RegistryError(DevportsError):
    """Raised when the config or registry file cannot be read or written."""


class LockError(DevportsError):
    """Raised when the registry lock cannot be acquired."""
