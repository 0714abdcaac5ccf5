"""Nested diagnostic contexts, kept separately for each thread.

A context is a stack of messages; the full context string joins the
messages from the outermost to the innermost with single spaces.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Iterable, List, Optional

__all__ = [
    "DiagnosticContext",
    "clear",
    "clone_stack",
    "get",
    "depth",
    "inherit",
    "pop",
    "push",
    "set_max_depth",
]


@dataclass(frozen=True)
class DiagnosticContext:
    """One entry of a context stack and the full context up to it."""

    message: str
    full_message: Optional[str] = None

    def __post_init__(self) -> None:
        if self.full_message is None:
            object.__setattr__(self, "full_message", self.message)

    def child(self, message: str) -> DiagnosticContext:
        """Return the context nested one level inside this one."""
        return DiagnosticContext(message, f"{self.full_message} {message}")


class _Local(threading.local):
    def __init__(self) -> None:
        self.stack: List[DiagnosticContext] = []


_local = _Local()


def clear() -> None:
    """Forget the current thread's entire context."""
    _local.stack.clear()


def clone_stack() -> List[DiagnosticContext]:
    """Return a copy of the current thread's context stack."""
    return list(_local.stack)


def get() -> str:
    """Return the full context string, or an empty string if there is none."""
    stack = _local.stack
    return stack[-1].full_message if stack else ""


def depth() -> int:
    """Return the current nesting depth."""
    return len(_local.stack)


def inherit(stack: Iterable[DiagnosticContext]) -> None:
    """Replace the current thread's context with a copy of ``stack``."""
    _local.stack = list(stack)


def pop() -> str:
    """Leave the innermost context and return its message ('' if none)."""
    stack = _local.stack
    return stack.pop().message if stack else ""


def push(message: str) -> None:
    """Enter a new context nested inside the current one."""
    stack = _local.stack
    stack.append(stack[-1].child(message) if stack else DiagnosticContext(message))


def set_max_depth(max_depth: int) -> None:
    """Drop contexts nested deeper than ``max_depth``."""
    if max_depth < 0:
        raise ValueError("max_depth must not be negative")
    del _local.stack[max_depth:]