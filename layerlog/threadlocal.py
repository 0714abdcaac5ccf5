"""Per-thread storage of a single value and thread identification."""

from __future__ import annotations

import threading
from typing import Generic, Optional, TypeVar

__all__ = ["ThreadLocalDataHolder", "get_thread_id"]

T = TypeVar("T")


def get_thread_id() -> str:
    """Return an identifier for the calling thread."""
    return str(threading.get_ident())


class ThreadLocalDataHolder(Generic[T]):
    """Holds zero or one value for each thread.

    Every thread starts out holding ``None``; values set by one thread
    are never seen by another.
    """

    def __init__(self) -> None:
        self._local = threading.local()

    def get(self) -> Optional[T]:
        """Return the value held for the current thread, or ``None``."""
        return getattr(self._local, "value", None)

    def release(self) -> Optional[T]:
        """Stop holding the current thread's value and return it."""
        value = self.get()
        self._local.value = None
        return value

    def reset(self, value: Optional[T] = None) -> None:
        """Replace the current thread's value with ``value``."""
        self._local.value = value