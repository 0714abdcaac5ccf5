"""Logging building blocks: printf-style formatting, layouts, filters, contexts, evaluators and appenders."""

__version__ = "0.1.0"

__all__ = [
    "fmtspec",
    "printf",
    "stringutil",
    "event",
    "filter",
    "ndc",
    "threadlocal",
    "timestamp",
    "evaluators",
    "appenders",
    "network_appenders",
]