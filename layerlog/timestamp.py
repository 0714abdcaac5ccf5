"""A timestamp split into whole seconds and microseconds since the epoch."""

from __future__ import annotations

import time
from dataclasses import dataclass

__all__ = ["TimeStamp", "start_time"]


@dataclass(frozen=True, order=True)
class TimeStamp:
    """A point in time as seconds and microseconds since 1970-01-01 UTC."""

    seconds: int
    microseconds: int = 0

    @classmethod
    def now(cls) -> TimeStamp:
        """Return a timestamp for the current moment."""
        seconds, nanos = divmod(time.time_ns(), 1_000_000_000)
        return cls(seconds, nanos // 1000)

    def milliseconds(self) -> int:
        """Return the subsecond part in milliseconds."""
        return self.microseconds // 1000


_START = TimeStamp.now()


def start_time() -> TimeStamp:
    """Return the timestamp taken when the package was first loaded."""
    return _START