"""Per-collection in-process write locks.

Read-modify-write sequences on one collection file run under a reentrant
lock keyed by the resolved file path. Separate processes are not covered.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
import threading
from typing import Iterator
import weakref

from core.errors import FlatstoreLockError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)
_REGISTRY_GUARD = threading.Lock()


class CollectionLock:
    """Reentrant lock for one collection file.

    Registry entries disappear once no caller holds a reference.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()

    def acquire(self, timeout: float = -1) -> bool:
        """Acquire the lock, waiting at most ``timeout`` seconds."""
        return self._lock.acquire(timeout=timeout)

    def release(self) -> None:
        """Release one level of ownership."""
        self._lock.release()


_COLLECTION_LOCKS: weakref.WeakValueDictionary[Path, CollectionLock] = (
    weakref.WeakValueDictionary()
)


def lock_for(collection_path: Path) -> CollectionLock:
    """Return the shared lock for a collection file.

    Args:
        collection_path: Collection JSON path.

    Returns:
        Reentrant lock shared by every caller on the same file.
    """
    key = collection_path.resolve()
    with _REGISTRY_GUARD:
        lock = _COLLECTION_LOCKS.get(key)
        if lock is None:
            lock = CollectionLock()
            _COLLECTION_LOCKS[key] = lock
        return lock


def registered_lock_count() -> int:
    """Return how many collection locks are currently alive."""
    with _REGISTRY_GUARD:
        return len(_COLLECTION_LOCKS)


@contextmanager
def collection_lock(collection_path: Path, timeout_seconds: float) -> Iterator[None]:
    """Hold the collection lock for the duration of the block.

    Args:
        collection_path: Collection JSON path.
        timeout_seconds: Maximum wait for the lock.

    Raises:
        FlatstoreLockError: If the lock is not acquired within the timeout.
    """
    lock = lock_for(collection_path)
    if not lock.acquire(timeout=timeout_seconds):
        _LOGGER.error(
            "collection_lock_timeout",
            collection_path=str(collection_path),
            timeout_seconds=timeout_seconds,
        )
        raise FlatstoreLockError(
            f"Timed out after {timeout_seconds}s waiting for lock on {collection_path}. "
            "Another writer is holding the collection; retry later."
        )
    try:
        yield
    finally:
        lock.release()
