"""
Lock-guarded value store shared between threads.

Playing threads read through the lock, the training thread writes through
it. The wrapped store itself knows nothing about threads.
"""

import copy
from contextlib import contextmanager
from typing import Iterator, TypeVar

from td_lib.memory.base import Memory
from td_lib.utils.rwlock import RWLock

S = TypeVar('S')
A = TypeVar('A')

class SharedMemory(Memory[S, A]):
    """
    Wraps a value store with a reader/writer lock.

    read() and write() hold the lock around a block and yield the wrapped
    store; get and set hold it for a single call. A failure inside write()
    poisons the lock, after which every access raises LockPoisoned.
    """

    def __init__(self, memory: Memory[S, A]):
        """
        Initialize a shared store.

        Args:
            memory: The store to guard
        """
        self._memory = memory
        self._lock = RWLock()

    @property
    def poisoned(self) -> bool:
        return self._lock.poisoned

    @contextmanager
    def read(self) -> Iterator[Memory[S, A]]:
        with self._lock.read():
            yield self._memory

    @contextmanager
    def write(self) -> Iterator[Memory[S, A]]:
        with self._lock.write():
            yield self._memory

    def get(self, state: S, action: A) -> float:
        with self.read() as memory:
            return memory.get(state, action)

    def set(self, state: S, action: A, value: float) -> None:
        with self.write() as memory:
            memory.set(state, action, value)

    def snapshot(self) -> Memory[S, A]:
        """
        Copy the wrapped store under the read lock.

        The copy can be inspected with an offline walk while training keeps
        writing to the original.
        """
        with self.read() as memory:
            return copy.deepcopy(memory)

    def __repr__(self) -> str:
        return f"SharedMemory({self._memory!r})"
