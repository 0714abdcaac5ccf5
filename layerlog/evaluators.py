"""Evaluators that decide whether an event triggers an action, and their factory."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, ClassVar, Dict, Mapping, Optional

from .event import LoggingEvent

__all__ = [
    "TriggeringEventEvaluator",
    "LevelEvaluator",
    "TriggeringEventEvaluatorFactory",
    "create_level_evaluator",
]

CreateFunction = Callable[[Mapping[str, Any]], "TriggeringEventEvaluator"]


class TriggeringEventEvaluator(ABC):
    """Decides whether a logging event is a triggering one."""

    @abstractmethod
    def eval(self, event: LoggingEvent) -> bool:
        """Return True if ``event`` triggers."""


class LevelEvaluator(TriggeringEventEvaluator):
    """Triggers on events whose priority value is at or below ``level``."""

    def __init__(self, level: int) -> None:
        self.level = level

    def eval(self, event: LoggingEvent) -> bool:
        return event.priority <= self.level


def create_level_evaluator(params: Mapping[str, Any]) -> LevelEvaluator:
    """Build a LevelEvaluator from parameters holding a ``level`` entry."""
    if "level" not in params:
        raise ValueError("level evaluator: required parameter 'level' is missing")
    try:
        level = int(params["level"])
    except (TypeError, ValueError):
        raise ValueError(
            f"level evaluator: 'level' must be an integer, got {params['level']!r}"
        ) from None
    return LevelEvaluator(level)


class TriggeringEventEvaluatorFactory:
    """Creates evaluators by type name from registered creator functions."""

    _instance: ClassVar[Optional[TriggeringEventEvaluatorFactory]] = None

    def __init__(self) -> None:
        self._creators: Dict[str, CreateFunction] = {}

    @classmethod
    def get_instance(cls) -> TriggeringEventEvaluatorFactory:
        """Return the shared factory, with the ``level`` creator registered."""
        if cls._instance is None:
            factory = cls()
            factory.register_creator("level", create_level_evaluator)
            cls._instance = factory
        return cls._instance

    def register_creator(self, class_name: str, create_function: CreateFunction) -> None:
        """Register a creator; a name may be registered only once."""
        if class_name in self._creators:
            raise ValueError(
                f"Creator for Triggering event evaluator with type name "
                f"'{class_name}' already registered"
            )
        self._creators[class_name] = create_function

    def create(self, class_name: str, params: Mapping[str, Any]) -> TriggeringEventEvaluator:
        """Create an evaluator of the named type from ``params``."""
        try:
            creator = self._creators[class_name]
        except KeyError:
            raise ValueError(
                f"There is no triggering event evaluator with type name '{class_name}'"
            ) from None
        return creator(params)

    def registered(self, class_name: str) -> bool:
        """Return True if a creator is registered under ``class_name``."""
        return class_name in self._creators