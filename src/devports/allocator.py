"""Port allocation logic for devports."""

from dataclasses import dataclass
from pathlib import Path

from .config import Config
from .console import debug, warning
from .errors import (
    AlreadyAllocatedError,
    InvalidArgumentsError,
    NoAvailablePortsError,
    PortAllocatedError,
    PortReservedError,
    UnknownTypeError,
)
from .lock import (
    DEFAULT_LOCK_OPTIONS,
    LockOptions,
    mutate_registry,
    mutate_registry_if,
    read_registry,
)
from .registry import (
    PortAllocation,
    Registry,
    Reservation,
    load_registry,
    utc_timestamp,
)
from .system import SystemScanner


@dataclass(frozen=True)
class TypeStatus:
    """Usage summary for one service type."""

    used: int
    available: int
    next: int | None


class PortAllocator:
    """Allocate ports with machine-wide uniqueness guarantee.

    Holds no registry state between calls: every operation reloads the
    registry from disk, under the lock when it mutates.
    """

    def __init__(
        self,
        config: Config,
        scanner: SystemScanner | None = None,
        lock_options: LockOptions = DEFAULT_LOCK_OPTIONS,
    ) -> None:
        """Initialize allocator.

        Args:
            config: Port ranges and registry location
            scanner: Live port scanner, defaults to a localhost SystemScanner
            lock_options: Registry lock settings
        """
        self.config = config
        self.system = scanner or SystemScanner()
        self.lock_options = lock_options

    @property
    def registry_path(self) -> Path:
        return self.config.registry_path

    def allocate(self, project: str, service: str, service_type: str) -> int:
        """Allocate a port for a project/service pair.

        Strategy:
        1. Fail if the type has no configured range
        2. Under the lock, fail if the pair already holds a port
        3. Scan the type's range, skipping registry ports and live ports
        4. Record the allocation and save
        5. After the lock is released, check again and warn if the port is live

        Args:
            project: Project name
            service: Service name within the project
            service_type: Configured type whose range to draw from

        Returns:
            The allocated port number

        Raises:
            UnknownTypeError: If the type has no configured range
            AlreadyAllocatedError: If the pair already holds a port
            NoAvailablePortsError: If the range is exhausted
        """
        port_range = self.config.ranges.get(service_type)
        if port_range is None:
            raise UnknownTypeError(service_type, self.config.types)

        def operation(registry: Registry) -> int:
            existing = registry.find_allocation(project, service)
            if existing:
                raise AlreadyAllocatedError(project, service, existing.port)

            port = self.system.find_available_port(
                port_range.start, port_range.end, registry.used_ports()
            )
            if port is None:
                raise NoAvailablePortsError(service_type, port_range.start, port_range.end)

            registry.allocations.append(
                PortAllocation(
                    port=port,
                    project=project,
                    service=service,
                    type=service_type,
                    allocated_at=utc_timestamp(),
                )
            )
            return port

        port = mutate_registry(self.registry_path, operation, self.lock_options)
        debug(f"Allocated {port} for {project}/{service} ({service_type})")

        # The window between the scan and the caller binding is unguarded
        if self.system.is_port_live(port):
            warning(
                f"Port {port} is currently in use by another process. "
                "You may need to stop that process before using this port."
            )
        return port

    def get_existing(self, project: str, service: str) -> int | None:
        """Get the port already allocated to a project/service pair.

        Args:
            project: Project name
            service: Service name

        Returns:
            Port number or None if not allocated
        """

        def operation(registry: Registry) -> int | None:
            existing = registry.find_allocation(project, service)
            return existing.port if existing else None

        return read_registry(self.registry_path, operation, self.lock_options)

    def get_or_allocate(self, project: str, service: str, service_type: str) -> int:
        """Return the existing port for a pair, allocating one if needed.

        Args:
            project: Project name
            service: Service name
            service_type: Type to allocate from when no allocation exists

        Returns:
            The port for the pair
        """
        existing = self.get_existing(project, service)
        if existing is not None:
            debug(f"Reusing {existing} for {project}/{service}")
            return existing
        return self.allocate(project, service, service_type)

    def release(
        self, project: str, service: str | None = None, all: bool = False
    ) -> int:
        """Release one service or every service of a project.

        Args:
            project: Project name
            service: Service to release
            all: Release every allocation of the project

        Returns:
            Number of allocations removed

        Raises:
            InvalidArgumentsError: Unless exactly one of service/all is given
        """
        if bool(service) == bool(all):
            raise InvalidArgumentsError("Must specify --all or provide a service name")

        def operation(registry: Registry) -> int:
            before = len(registry.allocations)
            if all:
                registry.allocations = [
                    a for a in registry.allocations if a.project != project
                ]
            else:
                registry.allocations = [
                    a
                    for a in registry.allocations
                    if not (a.project == project and a.service == service)
                ]
            return before - len(registry.allocations)

        return mutate_registry(self.registry_path, operation, self.lock_options)

    def release_by_port(self, port: int) -> bool:
        """Release whichever allocation holds a port.

        Args:
            port: Port number

        Returns:
            True if an allocation was removed
        """

        def operation(registry: Registry) -> tuple[bool, bool]:
            before = len(registry.allocations)
            registry.allocations = [a for a in registry.allocations if a.port != port]
            released = len(registry.allocations) < before
            return released, released

        return mutate_registry_if(self.registry_path, operation, self.lock_options)

    def reserve(self, port: int, reason: str) -> None:
        """Block a port from allocation.

        Args:
            port: Port number
            reason: Why the port is reserved

        Raises:
            PortAllocatedError: If an allocation holds the port
            PortReservedError: If the port is already reserved
        """

        def operation(registry: Registry) -> None:
            allocated = registry.allocation_for_port(port)
            if allocated:
                raise PortAllocatedError(port, allocated.project, allocated.service)
            reserved = registry.reservation_for_port(port)
            if reserved:
                raise PortReservedError(port, reserved.reason)
            registry.reservations.append(
                Reservation(port=port, reason=reason, reserved_at=utc_timestamp())
            )

        mutate_registry(self.registry_path, operation, self.lock_options)

    def unreserve(self, port: int) -> bool:
        """Remove a reservation.

        Args:
            port: Port number

        Returns:
            True if a reservation was removed
        """

        def operation(registry: Registry) -> tuple[bool, bool]:
            before = len(registry.reservations)
            registry.reservations = [r for r in registry.reservations if r.port != port]
            removed = len(registry.reservations) < before
            return removed, removed

        return mutate_registry_if(self.registry_path, operation, self.lock_options)

    def status(self) -> dict[str, TypeStatus]:
        """Summarize usage per configured type.

        Reads the registry without the lock, and the reported next port
        is registry-only and skips the live check, so it may differ
        from what allocate() would pick when that port is live.

        Returns:
            Mapping of type name to TypeStatus
        """
        registry = load_registry(self.registry_path)
        used_ports = registry.used_ports()

        result: dict[str, TypeStatus] = {}
        for type_name, port_range in self.config.ranges.items():
            used = sum(1 for a in registry.allocations if a.type == type_name)
            next_port = next(
                (
                    p
                    for p in range(port_range.start, port_range.end + 1)
                    if p not in used_ports
                ),
                None,
            )
            result[type_name] = TypeStatus(
                used=used, available=port_range.size - used, next=next_port
            )
        return result

    def list_allocations(
        self, project: str | None = None, service_type: str | None = None
    ) -> list[PortAllocation]:
        """List allocations, optionally filtered, sorted by port.

        Args:
            project: Only this project's allocations
            service_type: Only allocations of this type

        Returns:
            List of allocations
        """
        allocations = load_registry(self.registry_path).allocations
        if project:
            allocations = [a for a in allocations if a.project == project]
        if service_type:
            allocations = [a for a in allocations if a.type == service_type]
        return sorted(allocations, key=lambda a: a.port)

    def list_reservations(self) -> list[Reservation]:
        """List reservations in registry order."""
        return list(load_registry(self.registry_path).reservations)

    def check(self, port: int) -> PortAllocation | None:
        """Get the allocation holding a port, if any (registry only)."""
        return load_registry(self.registry_path).allocation_for_port(port)
