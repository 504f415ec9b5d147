"""
Message channel between playing and training threads.

A FIFO queue with blocking receive, configurable backpressure and an explicit
close that every blocked party observes.
"""

import threading
from collections import deque
from typing import Deque, Generic, Iterator, Optional, TypeVar

T = TypeVar('T')

class ChannelClosed(Exception):
    """Raised by send on a closed channel, and by receive once it is also empty."""


class Channel(Generic[T]):
    """
    Thread-safe FIFO channel.

    The capacity selects the backpressure policy:
    - None: unbounded, send never blocks
    - 0: rendezvous, send returns once the receiver has taken the item;
      a send cut short by close() withdraws its item
    - n > 0: bounded, send blocks while n items are waiting

    Items already sent are still delivered after close(); receive raises
    ChannelClosed only when the channel is closed and drained.
    """

    def __init__(self, capacity: Optional[int] = None):
        """
        Initialize an open channel.

        Args:
            capacity: Backpressure policy, see the class docstring

        Raises:
            ValueError: If capacity is negative
        """
        if capacity is not None and capacity < 0:
            raise ValueError(f"Channel capacity must be None or >= 0, got {capacity}")

        self.capacity = capacity
        self._items: Deque[T] = deque()
        self._cond = threading.Condition()
        self._closed = False
        self._sent = 0
        self._received = 0

    @property
    def closed(self) -> bool:
        return self._closed

    def _full(self) -> bool:
        if self.capacity is None:
            return False
        return len(self._items) >= max(self.capacity, 1)

    def send(self, item: T) -> None:
        """
        Append an item, blocking as the capacity requires.

        Args:
            item: The item to send

        Raises:
            ChannelClosed: If the channel is or becomes closed before the item is accepted
        """
        with self._cond:
            while not self._closed and self._full():
                self._cond.wait()
            if self._closed:
                raise ChannelClosed("send on a closed channel")

            self._items.append(item)
            self._sent += 1
            ticket = self._sent
            self._cond.notify_all()

            if self.capacity == 0:
                while self._received < ticket and not self._closed:
                    self._cond.wait()
                if self._received < ticket:
                    # At most one item is buffered in rendezvous mode, and it is ours
                    self._items.pop()
                    self._sent -= 1
                    raise ChannelClosed("channel closed before the item was received")

    def receive(self) -> T:
        """
        Remove and return the oldest item, blocking until one is available.

        Returns:
            The oldest item

        Raises:
            ChannelClosed: If the channel is closed and empty
        """
        with self._cond:
            while not self._items:
                if self._closed:
                    raise ChannelClosed("receive on a closed and empty channel")
                self._cond.wait()

            item = self._items.popleft()
            self._received += 1
            self._cond.notify_all()
            return item

    def close(self) -> None:
        """Close the channel and wake every blocked sender and receiver."""
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    def __len__(self) -> int:
        with self._cond:
            return len(self._items)

    def __iter__(self) -> Iterator[T]:
        """Yield received items until the channel is closed and drained."""
        while True:
            try:
                yield self.receive()
            except ChannelClosed:
                return

    def __repr__(self) -> str:
        return f"Channel(capacity={self.capacity}, pending={len(self)}, closed={self._closed})"
