"""Output formatters for DepDelta."""

from .formatters import ConsoleFormatter, JSONFormatter, summarize_changes

__all__ = [
    "ConsoleFormatter",
    "JSONFormatter",
    "summarize_changes",
]
