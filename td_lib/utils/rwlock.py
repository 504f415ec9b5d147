"""
Reader/writer lock with poisoning.

Any number of threads may hold the lock for reading at the same time, while a
writer holds it exclusively. A writer that raises while holding the lock
poisons it, after which every acquisition fails with LockPoisoned.
"""

import threading
from contextlib import contextmanager
from typing import Iterator


class LockPoisoned(RuntimeError):
    """Raised when acquiring a lock whose previous writer failed."""


class RWLock:
    """
    Writer-preferring reader/writer lock.

    A writer waiting for the lock blocks new readers, so a thread that reads
    in a tight loop cannot starve a writer.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0
        self._poisoned = False

    @property
    def poisoned(self) -> bool:
        return self._poisoned

    def acquire_read(self) -> None:
        with self._cond:
            while not self._poisoned and (self._writer or self._waiting_writers):
                self._cond.wait()
            if self._poisoned:
                raise LockPoisoned("lock poisoned by a failed writer")
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._waiting_writers += 1
            try:
                while not self._poisoned and (self._writer or self._readers):
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            if self._poisoned:
                self._cond.notify_all()
                raise LockPoisoned("lock poisoned by a failed writer")
            self._writer = True

    def release_write(self, poison: bool = False) -> None:
        with self._cond:
            self._writer = False
            if poison:
                self._poisoned = True
            self._cond.notify_all()

    @contextmanager
    def read(self) -> Iterator[None]:
        """Hold the lock for reading for the duration of the block."""
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write(self) -> Iterator[None]:
        """
        Hold the lock exclusively for the duration of the block.

        An exception escaping the block poisons the lock before propagating.
        """
        self.acquire_write()
        try:
            yield
        except BaseException:
            self.release_write(poison=True)
            raise
        self.release_write()
