"""Chained filters that accept, deny or pass on logging events."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from typing import Optional

from .event import LoggingEvent

__all__ = ["Decision", "Filter"]


class Decision(enum.IntEnum):
    """The verdict of a filter on one event."""

    DENY = -1
    NEUTRAL = 0
    ACCEPT = 1


class Filter(ABC):
    """One link in a linear chain of filters.

    Each filter's verdict is consulted in order: DENY drops the event,
    ACCEPT logs it at once, and NEUTRAL asks the next filter.  An event
    that reaches the end of the chain undecided stays NEUTRAL.
    """

    def __init__(self) -> None:
        self.chained_filter: Optional[Filter] = None

    def end_of_chain(self) -> Filter:
        """Return the last filter in the chain starting at this one."""
        node = self
        while node.chained_filter is not None:
            node = node.chained_filter
        return node

    def append_chained_filter(self, filter: Filter) -> None:
        """Add ``filter`` to the end of the chain."""
        self.end_of_chain().chained_filter = filter

    def decide(self, event: LoggingEvent) -> Decision:
        """Walk the chain until a filter gives a non-neutral verdict."""
        node: Optional[Filter] = self
        decision = Decision.NEUTRAL
        while node is not None:
            decision = Decision(node._decide(event))
            if decision is not Decision.NEUTRAL:
                break
            node = node.chained_filter
        return decision

    @abstractmethod
    def _decide(self, event: LoggingEvent) -> Decision:
        """Return this filter's own verdict on ``event``."""