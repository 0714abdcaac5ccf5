"""Logging events and the layouts that turn them into text."""

from __future__ import annotations

import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

__all__ = ["LoggingEvent", "Layout", "MessageLayout"]


def _current_thread_name() -> str:
    return threading.current_thread().name


@dataclass(frozen=True)
class LoggingEvent:
    """One log record as handed to appenders and layouts."""

    category_name: str
    message: str
    ndc: str
    priority: int
    thread_name: str = field(default_factory=_current_thread_name)
    timestamp: float = field(default_factory=time.time)


class Layout(ABC):
    """Formats a logging event into a string an appender can write."""

    @abstractmethod
    def format(self, event: LoggingEvent) -> str:
        """Return the text for ``event``."""


class MessageLayout(Layout):
    """A layout that yields the event's message unchanged."""

    def format(self, event: LoggingEvent) -> str:
        return event.message