"""Small string helpers: printf-style formatting, trimming and splitting."""

from __future__ import annotations

from typing import Any, Iterable, List, Optional

from .printf import sprintf

__all__ = ["vform", "trim", "split"]

_WHITESPACE = " \t\r\n"
_INT_MAX = 2**31 - 1


def vform(fmt: Optional[str], args: Iterable[Any]) -> str:
    """Format a sequence of arguments with a printf-style format string."""
    return sprintf(fmt, *tuple(args))


def trim(s: str) -> str:
    """Return ``s`` without leading or trailing spaces, tabs, CRs and LFs."""
    return s.strip(_WHITESPACE)


def split(s: str, delimiter: str, max_segments: int = _INT_MAX) -> List[str]:
    """Split ``s`` on a single-character delimiter, scanning left to right.

    At most ``max_segments`` segments are returned; the last one keeps any
    remaining delimiters.  At least one segment is always returned.
    """
    if len(delimiter) != 1:
        raise ValueError("delimiter must be a single character")
    return s.split(delimiter, max(max_segments - 1, 0))