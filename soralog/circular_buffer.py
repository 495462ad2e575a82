"""Bounded thread-safe ring queue used by sinks to accumulate events."""

from __future__ import annotations

import threading
from collections import deque
from typing import Generic, TypeVar

__all__ = ["CircularBuffer"]

T = TypeVar("T")


class CircularBuffer(Generic[T]):
    """FIFO ring of fixed capacity.

    One slot is always kept free, so at most ``capacity - 1`` items are held.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._capacity = capacity
        self._items: deque[T] = deque()
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def avail(self) -> int:
        """Number of slots not taken by items."""
        return self._capacity - len(self)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def put(self, item: T) -> bool:
        """Append an item; return False without storing it if the ring is full."""
        with self._lock:
            if len(self._items) + 1 >= self._capacity:
                return False
            self._items.append(item)
            return True

    def get(self) -> T | None:
        """Remove and return the oldest item, or None when the ring is empty."""
        with self._lock:
            if not self._items:
                return None
            return self._items.popleft()