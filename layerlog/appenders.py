"""Appenders: named destinations for logging events, kept in a global registry."""

from __future__ import annotations

import os
import threading
from abc import ABC, abstractmethod
from collections import deque
from typing import ClassVar, Deque, Dict, List, Optional

from .event import Layout, LoggingEvent, MessageLayout
from .filter import Decision, Filter

__all__ = ["Appender", "AbortAppender", "StringQueueAppender"]


class Appender(ABC):
    """Base of all appenders.

    Every appender registers itself by name on creation.  An event is
    passed to ``_append`` only if its priority value is at or below the
    threshold (``None`` disables the check) and the filter chain, if
    any, does not deny it.
    """

    _registry: ClassVar[Dict[str, Appender]] = {}
    _registry_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, name: str) -> None:
        self._name = name
        self.threshold: Optional[int] = None
        self.filter: Optional[Filter] = None
        with Appender._registry_lock:
            Appender._registry[name] = self

    @property
    def name(self) -> str:
        """The name identifying this appender."""
        return self._name

    @classmethod
    def get_appender(cls, name: str) -> Optional[Appender]:
        """Return the appender registered under ``name``, or ``None``."""
        with Appender._registry_lock:
            return Appender._registry.get(name)

    @classmethod
    def _all(cls) -> List[Appender]:
        with Appender._registry_lock:
            return list(Appender._registry.values())

    @classmethod
    def reopen_all(cls) -> bool:
        """Reopen every appender; True only if every reopen succeeded."""
        result = True
        for appender in cls._all():
            result = appender.reopen() and result
        return result

    @classmethod
    def close_all(cls) -> None:
        """Close every appender."""
        for appender in cls._all():
            appender.close()

    def do_append(self, event: LoggingEvent) -> None:
        """Log ``event`` if it passes the threshold and the filter chain."""
        if self.threshold is not None and event.priority > self.threshold:
            return
        if self.filter is not None and self.filter.decide(event) is Decision.DENY:
            return
        self._append(event)

    @abstractmethod
    def _append(self, event: LoggingEvent) -> None:
        """Write ``event`` to this appender's destination."""

    @abstractmethod
    def reopen(self) -> bool:
        """Reopen the destination; return False on failure."""

    @abstractmethod
    def close(self) -> None:
        """Release any resources held by the appender."""

    def requires_layout(self) -> bool:
        """Return True if the appender formats events with a layout."""
        return True


class AbortAppender(Appender):
    """Aborts the process on the first event appended to it."""

    def reopen(self) -> bool:
        return True

    def close(self) -> None:
        pass

    def requires_layout(self) -> bool:
        return False

    @property
    def layout(self) -> None:
        """This appender has no layout; assignments are ignored."""
        return None

    @layout.setter
    def layout(self, value: Optional[Layout]) -> None:
        pass

    def _append(self, event: LoggingEvent) -> None:
        os.abort()


class StringQueueAppender(Appender):
    """Keeps formatted events in memory, oldest first."""

    def __init__(self, name: str, layout: Optional[Layout] = None) -> None:
        super().__init__(name)
        self._layout: Layout = layout or MessageLayout()
        self.queue: Deque[str] = deque()

    @property
    def layout(self) -> Layout:
        """The layout used to format events."""
        return self._layout

    @layout.setter
    def layout(self, value: Optional[Layout]) -> None:
        self._layout = value or MessageLayout()

    def _append(self, event: LoggingEvent) -> None:
        self.queue.append(self._layout.format(event))

    def reopen(self) -> bool:
        return True

    def close(self) -> None:
        pass

    def queue_size(self) -> int:
        """Return the number of queued messages."""
        return len(self.queue)

    def pop_message(self) -> str:
        """Remove and return the oldest message, or '' if the queue is empty."""
        return self.queue.popleft() if self.queue else ""