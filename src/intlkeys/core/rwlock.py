"""Readers-writer lock guarding the per-document pass cache.

Hover lookups read the cache far more often than passes replace entries,
so readers share the lock while a pass storing its result takes it
exclusively:
- Multiple concurrent readers (hover queries)
- Exclusive writer access (storing or invalidating pass results)
- Writer preference to prevent starvation
- Reentrant reader locks (same thread can acquire read lock multiple times)

Read-to-write upgrades and write reentrancy are rejected with RuntimeError;
cache operations are single-level and never need either.

Python 3.13+.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

__all__ = ["RWLock"]


class RWLock:
    """Readers-writer lock with writer preference.

    Example:
        >>> lock = RWLock()
        >>> with lock.read():
        ...     pass  # look up a cached pass
        >>> with lock.write():
        ...     pass  # replace a cached pass
    """

    __slots__ = (
        "_active_readers",
        "_active_writer",
        "_condition",
        "_reader_threads",
        "_waiting_writers",
    )

    def __init__(self) -> None:
        """Initialize readers-writer lock."""
        self._condition = threading.Condition(threading.Lock())
        self._active_readers: int = 0
        self._active_writer: int | None = None
        self._waiting_writers: int = 0
        # thread id -> recursive read acquisitions
        self._reader_threads: dict[int, int] = {}

    @contextmanager
    def read(self) -> Generator[None]:
        """Acquire read lock (shared access).

        Raises:
            RuntimeError: If the thread holds the write lock.
        """
        self._acquire_read()
        try:
            yield
        finally:
            self._release_read()

    @contextmanager
    def write(self) -> Generator[None]:
        """Acquire write lock (exclusive access).

        Raises:
            RuntimeError: On read-to-write upgrade or nested write acquisition.
        """
        self._acquire_write()
        try:
            yield
        finally:
            self._release_write()

    def _acquire_read(self) -> None:
        thread_id = threading.get_ident()
        with self._condition:
            if thread_id in self._reader_threads:
                self._reader_threads[thread_id] += 1
                return
            if self._active_writer == thread_id:
                msg = "Cannot acquire read lock while holding write lock"
                raise RuntimeError(msg)
            while self._active_writer is not None or self._waiting_writers > 0:
                self._condition.wait()
            self._active_readers += 1
            self._reader_threads[thread_id] = 1

    def _release_read(self) -> None:
        thread_id = threading.get_ident()
        with self._condition:
            if thread_id not in self._reader_threads:
                msg = "Thread does not hold read lock"
                raise RuntimeError(msg)
            self._reader_threads[thread_id] -= 1
            if self._reader_threads[thread_id] == 0:
                del self._reader_threads[thread_id]
                self._active_readers -= 1
                if self._active_readers == 0:
                    self._condition.notify_all()

    def _acquire_write(self) -> None:
        thread_id = threading.get_ident()
        with self._condition:
            if thread_id in self._reader_threads:
                msg = "Cannot upgrade read lock to write lock"
                raise RuntimeError(msg)
            if self._active_writer == thread_id:
                msg = "Cannot acquire write lock: already holding write lock"
                raise RuntimeError(msg)
            self._waiting_writers += 1
            try:
                while self._active_writer is not None or self._active_readers > 0:
                    self._condition.wait()
            finally:
                self._waiting_writers -= 1
            self._active_writer = thread_id

    def _release_write(self) -> None:
        with self._condition:
            if self._active_writer != threading.get_ident():
                msg = "Thread does not hold write lock"
                raise RuntimeError(msg)
            self._active_writer = None
            self._condition.notify_all()
