"""
Reader/Writer Lock Module

A writer-preferring reader/writer lock built on ``threading.Condition``.

Semantics:
- Any number of readers may hold the lock at once
- A writer holds it alone: no readers, no other writer
- Once a writer is waiting, new readers queue behind it so a steady
  stream of readers cannot starve writers

The lock is not re-entrant. A thread holding the read side must not try
to take the write side (or vice versa); that deadlocks.
"""

import threading
from contextlib import contextmanager
from typing import Iterator


class ReadWriteLock:
    """
    Shared/exclusive lock.

    Usage:
        lock = ReadWriteLock()

        with lock.read_locked():
            ...  # shared access

        with lock.write_locked():
            ...  # exclusive access
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        """Block until shared access is granted."""
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        """Release shared access."""
        with self._cond:
            if self._readers <= 0:
                raise RuntimeError("release_read() called without a read lock held")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        """Block until exclusive access is granted."""
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            except BaseException:
                # Readers queued behind this writer must not stay blocked
                self._writers_waiting -= 1
                self._cond.notify_all()
                raise
            self._writers_waiting -= 1
            self._writer = True

    def release_write(self) -> None:
        """Release exclusive access."""
        with self._cond:
            if not self._writer:
                raise RuntimeError("release_write() called without the write lock held")
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        """Context manager for shared access."""
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        """Context manager for exclusive access."""
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()

    @property
    def readers(self) -> int:
        """Number of threads currently holding shared access."""
        with self._cond:
            return self._readers

    @property
    def write_held(self) -> bool:
        """Whether a writer currently holds the lock."""
        with self._cond:
            return self._writer
