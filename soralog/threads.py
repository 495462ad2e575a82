"""Per-thread numbering and naming."""

from __future__ import annotations

import itertools
import threading

__all__ = ["MAX_THREAD_NAME_LENGTH", "get_thread_number", "set_thread_name", "get_thread_name"]

MAX_THREAD_NAME_LENGTH = 15

_counter = itertools.count(1)
_counter_lock = threading.Lock()
_local = threading.local()


def get_thread_number() -> int:
    """Return a small number, unique to the calling thread, assigned on first use."""
    number = getattr(_local, "number", None)
    if number is None:
        with _counter_lock:
            number = next(_counter)
        _local.number = number
    return number


def set_thread_name(name: str) -> None:
    """Name the calling thread, keeping at most 15 characters."""
    threading.current_thread().name = name[:MAX_THREAD_NAME_LENGTH]


def get_thread_name() -> str:
    """Return the name of the calling thread, at most 15 characters long."""
    return threading.current_thread().name[:MAX_THREAD_NAME_LENGTH]