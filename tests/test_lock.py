"""Tests for lock module."""

import multiprocessing
import os

import pytest

from devports.errors import LockError, RegistryError
from devports.lock import (
    FileLock,
    LockOptions,
    mutate_registry,
    mutate_registry_if,
    read_registry,
)
from devports.registry import PortAllocation, load_registry

FAST = LockOptions(retries=2, min_wait=0.01, max_wait=0.02)


def _allocation(port, project="myapp", service="db"):
    return PortAllocation(
        port=port, project=project, service=service, type="postgres", allocated_at="t"
    )


def _acquire_and_die(path):
    FileLock(path, FAST).acquire()
    os._exit(0)


def test_lock_records_holder_pid(temp_dir):
    """Test the sidecar lock file names its holder."""
    path = temp_dir / "ports.json"
    lock = FileLock(path, FAST)

    release = lock.acquire()
    assert lock.lock_path.read_text() == str(os.getpid())
    release()

    # The file stays, but the lock can be taken again
    assert lock.lock_path.exists()
    FileLock(path, FAST).acquire()()


def test_lock_is_exclusive(temp_dir):
    """Test that a held lock cannot be acquired again."""
    path = temp_dir / "ports.json"

    with FileLock(path, FAST):
        with pytest.raises(LockError):
            FileLock(path, FAST).acquire()


def test_failed_acquire_keeps_holder_lock(temp_dir):
    """Test that a losing waiter does not disturb the holder."""
    path = temp_dir / "ports.json"
    holder = FileLock(path, FAST)
    holder.acquire()

    waiter = FileLock(path, FAST)
    with pytest.raises(LockError):
        waiter.acquire()
    waiter.release()

    with pytest.raises(LockError):
        FileLock(path, FAST).acquire()
    holder.release()


def test_lock_is_freed_when_holder_dies(temp_dir):
    """Test that a lock held by a crashed process is available again."""
    path = temp_dir / "ports.json"
    ctx = multiprocessing.get_context("fork")
    proc = ctx.Process(target=_acquire_and_die, args=(path,))
    proc.start()
    proc.join(10)

    assert proc.exitcode == 0
    with FileLock(path, FAST) as lock:
        assert lock.lock_path.read_text() == str(os.getpid())


def test_mutate_registry_saves(temp_dir):
    """Test that mutations are persisted."""
    path = temp_dir / "ports.json"

    def operation(registry):
        registry.allocations.append(_allocation(5434))
        return "ok"

    assert mutate_registry(path, operation, FAST) == "ok"
    assert load_registry(path).find_allocation("myapp", "db").port == 5434


def test_mutate_registry_creates_registry_under_lock(temp_dir):
    """Test the first mutation starts from the default registry."""
    path = temp_dir / "ports.json"

    ports = mutate_registry(path, lambda r: [res.port for res in r.reservations], FAST)

    assert ports == [8080]
    assert path.exists()


def test_mutate_registry_error_persists_nothing(temp_dir):
    """Test that a failing operation leaves the registry unchanged."""
    path = temp_dir / "ports.json"
    load_registry(path)
    before = path.read_text()

    def operation(registry):
        registry.allocations.append(_allocation(5434))
        raise RegistryError("boom")

    with pytest.raises(RegistryError):
        mutate_registry(path, operation, FAST)

    assert path.read_text() == before
    # Lock released despite the error
    FileLock(path, LockOptions(retries=0)).acquire()()


def test_mutate_registry_if_skips_save(temp_dir):
    """Test conditional saving."""
    path = temp_dir / "ports.json"
    load_registry(path)
    before = path.read_text()

    def operation(registry):
        registry.allocations.append(_allocation(5434))
        return "skipped", False

    assert mutate_registry_if(path, operation, FAST) == "skipped"
    assert path.read_text() == before


def test_read_registry_sees_fresh_data(temp_dir):
    """Test that reads reload the registry from disk."""
    path = temp_dir / "ports.json"
    mutate_registry(path, lambda r: r.allocations.append(_allocation(5434)), FAST)

    ports = read_registry(path, lambda r: [a.port for a in r.allocations], FAST)

    assert ports == [5434]
