"""Configuration management for devports."""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import platformdirs

from .errors import RegistryError
from .registry import PortRange

DEFAULT_RANGES: dict[str, PortRange] = {
    "postgres": PortRange(5434, 5499),
    "mysql": PortRange(3308, 3399),
    "redis": PortRange(6381, 6399),
    "api": PortRange(3002, 3099),
    "app": PortRange(5002, 5999),
    "custom": PortRange(8002, 8999),
}


@dataclass
class Config:
    """Port ranges per service type and the registry location."""

    ranges: dict[str, PortRange]
    registry_path: Path

    @property
    def types(self) -> list[str]:
        return list(self.ranges)

    @classmethod
    def from_dict(cls, data: Any, source: Path) -> "Config":
        try:
            ranges = {
                name: PortRange(start=int(r["start"]), end=int(r["end"]))
                for name, r in data["ranges"].items()
            }
            registry_path = Path(data["registryPath"]).expanduser()
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise RegistryError(f"Config file {source} is invalid: {e}") from e
        return cls(ranges=ranges, registry_path=registry_path)

    def to_dict(self) -> dict[str, Any]:
        return {
            "ranges": {
                name: {"start": r.start, "end": r.end} for name, r in self.ranges.items()
            },
            "registryPath": str(self.registry_path),
        }


def get_config_dir() -> Path:
    """Get the configuration directory for devports.

    Honors DEVPORTS_CONFIG_DIR, falling back to the platform config dir.

    Returns:
        Path to config directory
    """
    override = os.getenv("DEVPORTS_CONFIG_DIR")
    if override:
        config_dir = Path(override).expanduser()
    else:
        config_dir = Path(platformdirs.user_config_dir("devports", appauthor=False))
    try:
        config_dir.mkdir(parents=True, exist_ok=True, mode=0o700)
    except OSError as e:
        raise RegistryError(
            f"Failed to create config directory at {config_dir}: {e}"
        ) from e
    return config_dir


def get_config_path() -> Path:
    """Get the config file path.

    Returns:
        Path to config file
    """
    return get_config_dir() / "config.json"


def get_registry_path() -> Path:
    """Get the default registry file path.

    Returns:
        Path to registry file
    """
    return get_config_dir() / "ports.json"


def load_config() -> Config:
    """Load the config, writing the defaults on first use.

    Returns:
        Config instance

    Raises:
        RegistryError: If the config file cannot be read or parsed
    """
    config_path = get_config_path()

    if not config_path.exists():
        config = Config(ranges=dict(DEFAULT_RANGES), registry_path=get_registry_path())
        try:
            config_path.write_text(json.dumps(config.to_dict(), indent=2) + "\n")
        except OSError as e:
            raise RegistryError(
                f"Failed to create config file at {config_path}: {e}"
            ) from e
        return config

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise RegistryError(f"Config file {config_path} contains invalid JSON: {e}") from e
    except OSError as e:
        raise RegistryError(f"Failed to read config file {config_path}: {e}") from e

    return Config.from_dict(data, config_path)
