"""Test fixtures and configuration."""

import tempfile
from pathlib import Path

import pytest

from devports.allocator import PortAllocator
from devports.config import Config
from devports.lock import LockOptions
from devports.registry import PortRange


class FakeScanner:
    """Scanner that reports a fixed set of ports as live."""

    def __init__(self, live: set[int] | None = None) -> None:
        self.live = set(live or ())
        self.checked: list[int] = []

    def is_port_live(self, port, host=None):
        self.checked.append(port)
        return port in self.live

    def find_available_port(self, start, end, excluded, host=None):
        for port in range(start, end + 1):
            if port in excluded:
                continue
            if not self.is_port_live(port, host):
                return port
        return None


@pytest.fixture
def temp_dir():
    """Temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config(temp_dir):
    """Config with small ranges and a registry in the temp dir."""
    return Config(
        ranges={
            "postgres": PortRange(5434, 5499),
            "api": PortRange(3002, 3099),
            "tiny": PortRange(7000, 7002),
        },
        registry_path=temp_dir / "ports.json",
    )


@pytest.fixture
def scanner():
    """Scanner with no live ports."""
    return FakeScanner()


@pytest.fixture
def allocator(config, scanner):
    """Allocator using the fake scanner and fast lock settings."""
    return PortAllocator(
        config, scanner=scanner, lock_options=LockOptions(retries=2, min_wait=0.01)
    )


@pytest.fixture
def config_dir(temp_dir, monkeypatch):
    """Point DEVPORTS_CONFIG_DIR at a temp directory."""
    config_dir = temp_dir / "config"
    monkeypatch.setenv("DEVPORTS_CONFIG_DIR", str(config_dir))
    return config_dir
