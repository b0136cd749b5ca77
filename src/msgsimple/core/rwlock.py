"""Readers-writer lock for reloadable message sources.

Lookups on a file-backed source vastly outnumber reloads. This lock lets
any number of lookups read the current mapping concurrently while a reload
swaps it exclusively:
- Multiple concurrent readers (get_key)
- Exclusive writer access (reload)
- Writer preference, so a pending reload is not starved by lookups
- Reentrant read locks
- Optional timeout for lock acquisition (raises TimeoutError)

A thread holding the read lock cannot take the write lock, and a thread
holding the write lock cannot take either lock again: both raise
RuntimeError instead of deadlocking.

Python 3.13+.
"""

from __future__ import annotations

import threading
import time
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Generator

__all__ = ["RWLock"]


class RWLock:
    """Readers-writer lock with writer preference.

    Example:
        >>> lock = RWLock()
        >>> with lock.read():
        ...     pass  # look up keys
        >>> with lock.write(timeout=2.0):
        ...     pass  # swap the mapping
    """

    __slots__ = ("_condition", "_readers", "_waiting_writers", "_writer")

    def __init__(self) -> None:
        self._condition = threading.Condition(threading.Lock())
        # Thread id -> reentrant read count
        self._readers: dict[int, int] = {}
        self._writer: int | None = None
        self._waiting_writers = 0

    @contextmanager
    def read(self, timeout: float | None = None) -> Generator[None]:
        """Acquire the read lock (shared access).

        Args:
            timeout: Maximum seconds to wait. None waits indefinitely.

        Raises:
            RuntimeError: If the thread holds the write lock.
            TimeoutError: If the lock cannot be acquired within timeout.
            ValueError: If timeout is negative.
        """
        self._acquire_read(timeout)
        try:
            yield
        finally:
            self._release_read()

    @contextmanager
    def write(self, timeout: float | None = None) -> Generator[None]:
        """Acquire the write lock (exclusive access).

        Args:
            timeout: Maximum seconds to wait. None waits indefinitely.

        Raises:
            RuntimeError: If the thread already holds the read or write lock.
            TimeoutError: If the lock cannot be acquired within timeout.
            ValueError: If timeout is negative.
        """
        self._acquire_write(timeout)
        try:
            yield
        finally:
            self._release_write()

    @staticmethod
    def _deadline(timeout: float | None) -> float | None:
        if timeout is None:
            return None
        if timeout < 0:
            msg = f"Timeout must be non-negative, got {timeout}"
            raise ValueError(msg)
        return time.monotonic() + timeout

    def _wait_for(self, ready: Callable[[], bool], deadline: float | None, kind: str) -> None:
        """Wait on the condition until ready() holds. Caller holds the condition."""
        while not ready():
            if deadline is None:
                self._condition.wait()
                continue
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                msg = f"Timed out waiting for {kind} lock"
                raise TimeoutError(msg)
            self._condition.wait(timeout=remaining)

    def _acquire_read(self, timeout: float | None) -> None:
        deadline = self._deadline(timeout)
        me = threading.get_ident()

        with self._condition:
            if me in self._readers:
                self._readers[me] += 1
                return
            if self._writer == me:
                msg = "Cannot acquire read lock while holding write lock"
                raise RuntimeError(msg)

            self._wait_for(
                lambda: self._writer is None and self._waiting_writers == 0,
                deadline,
                "read",
            )
            self._readers[me] = 1

    def _release_read(self) -> None:
        me = threading.get_ident()

        with self._condition:
            count = self._readers.get(me)
            if count is None:
                msg = "Thread does not hold read lock"
                raise RuntimeError(msg)
            if count > 1:
                self._readers[me] = count - 1
                return
            del self._readers[me]
            if not self._readers:
                self._condition.notify_all()

    def _acquire_write(self, timeout: float | None) -> None:
        deadline = self._deadline(timeout)
        me = threading.get_ident()

        with self._condition:
            if me in self._readers:
                msg = "Cannot upgrade read lock to write lock"
                raise RuntimeError(msg)
            if self._writer == me:
                msg = "Cannot acquire write lock: already holding write lock"
                raise RuntimeError(msg)

            self._waiting_writers += 1
            try:
                self._wait_for(
                    lambda: not self._readers and self._writer is None,
                    deadline,
                    "write",
                )
                self._writer = me
            finally:
                # Readers blocked on writer preference must re-check even when
                # this writer gave up on a timeout.
                self._waiting_writers -= 1
                self._condition.notify_all()

    def _release_write(self) -> None:
        with self._condition:
            if self._writer != threading.get_ident():
                msg = "Thread does not hold write lock"
                raise RuntimeError(msg)
            self._writer = None
            self._condition.notify_all()

    @property
    def reader_count(self) -> int:
        """Number of distinct threads currently holding the read lock."""
        with self._condition:
            return len(self._readers)

    @property
    def writer_active(self) -> bool:
        """True if a thread currently holds the write lock."""
        with self._condition:
            return self._writer is not None
