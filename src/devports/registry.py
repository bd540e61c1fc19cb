"""Registry data model and JSON persistence for devports."""

import json
import os
import tempfile
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .errors import RegistryError


def utc_timestamp() -> str:
    """Return the current time as an ISO-8601 UTC string."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


@dataclass(frozen=True)
class PortRange:
    """Inclusive port range for a service type."""

    start: int
    end: int

    @property
    def size(self) -> int:
        return max(self.end - self.start + 1, 0)

    def __contains__(self, port: object) -> bool:
        return isinstance(port, int) and self.start <= port <= self.end


@dataclass(frozen=True)
class PortAllocation:
    """A port claimed by one project/service pair."""

    port: int
    project: str
    service: str
    type: str
    allocated_at: str
    note: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PortAllocation":
        return cls(
            port=int(data["port"]),
            project=data["project"],
            service=data["service"],
            type=data["type"],
            allocated_at=data["allocatedAt"],
            note=data.get("note"),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "port": self.port,
            "project": self.project,
            "service": self.service,
            "type": self.type,
            "allocatedAt": self.allocated_at,
        }
        if self.note is not None:
            data["note"] = self.note
        return data


@dataclass(frozen=True)
class Reservation:
    """A port blocked from allocation without a project/service."""

    port: int
    reason: str
    reserved_at: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Reservation":
        return cls(
            port=int(data["port"]),
            reason=data["reason"],
            reserved_at=data["reservedAt"],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "port": self.port,
            "reason": self.reason,
            "reservedAt": self.reserved_at,
        }


@dataclass
class Registry:
    """The document of record for allocations and reservations.

    A Registry is a snapshot: it is loaded fresh for every operation and
    never held across calls.
    """

    allocations: list[PortAllocation] = field(default_factory=list)
    reservations: list[Reservation] = field(default_factory=list)

    def find_allocation(self, project: str, service: str) -> PortAllocation | None:
        """Get the allocation for a project/service pair, if any."""
        for alloc in self.allocations:
            if alloc.project == project and alloc.service == service:
                return alloc
        return None

    def allocation_for_port(self, port: int) -> PortAllocation | None:
        """Get the allocation owning a port, if any."""
        for alloc in self.allocations:
            if alloc.port == port:
                return alloc
        return None

    def reservation_for_port(self, port: int) -> Reservation | None:
        """Get the reservation for a port, if any."""
        for reservation in self.reservations:
            if reservation.port == port:
                return reservation
        return None

    def used_ports(self) -> set[int]:
        """Get every port held by an allocation or a reservation."""
        return {a.port for a in self.allocations} | {r.port for r in self.reservations}

    @classmethod
    def from_dict(cls, data: Any) -> "Registry":
        if not isinstance(data, dict) or not isinstance(data.get("allocations"), list):
            raise RegistryError(
                "Registry file is corrupted: missing or invalid allocations array"
            )
        if not isinstance(data.get("reservations"), list):
            raise RegistryError(
                "Registry file is corrupted: missing or invalid reservations array"
            )
        try:
            return cls(
                allocations=[PortAllocation.from_dict(a) for a in data["allocations"]],
                reservations=[Reservation.from_dict(r) for r in data["reservations"]],
            )
        except (KeyError, TypeError, ValueError) as e:
            raise RegistryError(f"Registry file is corrupted: invalid entry ({e})") from e

    def to_dict(self) -> dict[str, Any]:
        return {
            "allocations": [a.to_dict() for a in self.allocations],
            "reservations": [r.to_dict() for r in self.reservations],
        }


def default_registry() -> Registry:
    """Build the registry written when none exists yet."""
    return Registry(
        reservations=[
            Reservation(
                port=8080,
                reason="Common development server port",
                reserved_at=utc_timestamp(),
            )
        ]
    )


def load_registry(registry_path: Path) -> Registry:
    """Load the registry, creating it with defaults if missing.

    Args:
        registry_path: Path to the registry JSON file

    Returns:
        A fresh Registry snapshot

    Raises:
        RegistryError: If the file is unreadable or malformed
    """
    if not registry_path.exists():
        registry = default_registry()
        if _write_registry(registry, registry_path, overwrite=False):
            return registry
        # Another process created it first; read theirs

    try:
        content = registry_path.read_text(encoding="utf-8")
    except OSError as e:
        raise RegistryError(f"Failed to read registry file {registry_path}: {e}") from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise RegistryError(
            f"Registry file {registry_path} contains invalid JSON: {e}"
        ) from e

    return Registry.from_dict(data)


def save_registry(registry: Registry, registry_path: Path) -> None:
    """Persist the registry atomically.

    The document is written to a temporary sibling file and renamed into
    place, so readers see either the old or the new content.

    Args:
        registry: Registry to save
        registry_path: Destination path

    Raises:
        RegistryError: If the file cannot be written
    """
    _write_registry(registry, registry_path, overwrite=True)


def _write_registry(registry: Registry, registry_path: Path, overwrite: bool) -> bool:
    """Write the registry via a temporary sibling file.

    With ``overwrite=False`` the file is linked into place only if no
    registry exists yet, so a concurrent first save is never clobbered.

    Returns:
        False if ``overwrite`` is off and the registry already existed
    """
    try:
        registry_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{registry_path.name}.", suffix=".tmp", dir=registry_path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(registry.to_dict(), f, indent=2)
                f.write("\n")
            if overwrite:
                os.replace(tmp_name, registry_path)
                return True
            try:
                os.link(tmp_name, registry_path)
            except FileExistsError:
                return False
            return True
        finally:
            Path(tmp_name).unlink(missing_ok=True)
    except OSError as e:
        raise RegistryError(f"Failed to save registry to {registry_path}: {e}") from e
