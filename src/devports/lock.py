"""Cross-process registry locking for devports.

Every mutating operation runs as a lock-scoped cycle: acquire the lock,
load a fresh registry snapshot, apply the operation, persist, release.
An operation that raises leaves the registry file untouched.
"""

import fcntl
import os
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import TypeVar

from .console import debug
from .errors import LockError
from .registry import Registry, load_registry, save_registry

T = TypeVar("T")


@dataclass(frozen=True)
class LockOptions:
    """Retry settings for the registry lock."""

    retries: int = 10
    min_wait: float = 0.05  # seconds
    max_wait: float = 1.0


DEFAULT_LOCK_OPTIONS = LockOptions()


class FileLock:
    """Advisory exclusive lock keyed by a file path.

    Uses ``fcntl.flock`` on a sidecar ``<path>.lock`` file. The kernel drops
    the lock when the holder's descriptor is closed, including when the
    holder crashes, so an abandoned lock never needs reclaiming. The sidecar
    file itself is left in place.
    """

    def __init__(self, path: Path, options: LockOptions = DEFAULT_LOCK_OPTIONS) -> None:
        self.path = path
        self.lock_path = path.with_name(path.name + ".lock")
        self.options = options
        self._fd: int | None = None

    def acquire(self) -> Callable[[], None]:
        """Acquire the lock, retrying with exponential backoff.

        Returns:
            A callable that releases the lock

        Raises:
            LockError: If the lock is still held after all retries
        """
        try:
            self.lock_path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(self.lock_path, os.O_CREAT | os.O_RDWR, 0o600)
        except OSError as e:
            raise LockError(f"Could not open lock file {self.lock_path}: {e}") from e

        wait = self.options.min_wait
        attempt = 0
        while True:
            try:
                fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
                break
            except BlockingIOError:
                if attempt >= self.options.retries:
                    os.close(fd)
                    raise LockError(
                        f"Could not acquire lock on {self.path}: "
                        f"held by another process ({self.lock_path})"
                    ) from None
                attempt += 1
                debug(f"Lock busy, retry {attempt}/{self.options.retries} in {wait:.2f}s")
                time.sleep(wait)
                wait = min(wait * 2, self.options.max_wait)
            except OSError as e:
                os.close(fd)
                raise LockError(f"Could not lock {self.lock_path}: {e}") from e

        # Holder pid, for humans inspecting a busy lock
        os.ftruncate(fd, 0)
        os.write(fd, str(os.getpid()).encode())
        self._fd = fd
        debug(f"Acquired lock {self.lock_path}")
        return self.release

    def release(self) -> None:
        """Release the lock if held."""
        if self._fd is None:
            return
        fd, self._fd = self._fd, None
        try:
            fcntl.flock(fd, fcntl.LOCK_UN)
        finally:
            os.close(fd)
        debug(f"Released lock {self.lock_path}")

    def __enter__(self) -> "FileLock":
        self.acquire()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()


@contextmanager
def locked(path: Path, options: LockOptions = DEFAULT_LOCK_OPTIONS) -> Iterator[None]:
    """Hold the lock for ``path`` for the duration of the block."""
    with FileLock(path, options):
        yield


def mutate_registry(
    registry_path: Path,
    operation: Callable[[Registry], T],
    options: LockOptions = DEFAULT_LOCK_OPTIONS,
) -> T:
    """Run ``operation`` on a fresh registry under the lock and always save.

    Args:
        registry_path: Registry file path
        operation: Mutates the registry in place and returns a result
        options: Lock settings

    Returns:
        The operation's result
    """
    with locked(registry_path, options):
        registry = load_registry(registry_path)
        result = operation(registry)
        save_registry(registry, registry_path)
        return result


def mutate_registry_if(
    registry_path: Path,
    operation: Callable[[Registry], tuple[T, bool]],
    options: LockOptions = DEFAULT_LOCK_OPTIONS,
) -> T:
    """Like mutate_registry, but save only when the operation asks to.

    Args:
        registry_path: Registry file path
        operation: Returns ``(result, should_save)``
        options: Lock settings

    Returns:
        The operation's result
    """
    with locked(registry_path, options):
        registry = load_registry(registry_path)
        result, should_save = operation(registry)
        if should_save:
            save_registry(registry, registry_path)
        else:
            debug("No registry change, skipping save")
        return result


def read_registry(
    registry_path: Path,
    operation: Callable[[Registry], T],
    options: LockOptions = DEFAULT_LOCK_OPTIONS,
) -> T:
    """Run a read-only operation on a fresh registry under the lock.

    Args:
        registry_path: Registry file path
        operation: Reads the registry and returns a result
        options: Lock settings

    Returns:
        The operation's result
    """
    with locked(registry_path, options):
        return operation(load_registry(registry_path))
