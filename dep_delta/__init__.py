"""DepDelta - Classify dependency changes in Composer and npm manifest diffs."""

__version__ = "0.1.0"

from .core.detection import CommitSummary, DependencyFileDetector
from .core.parsers import ChangeType, DependencyChange, DependencyDiffParser, create_registry
from .core.patch import split_patch
from .output.formatters import ConsoleFormatter, JSONFormatter

__all__ = [
    "ChangeType",
    "CommitSummary",
    "ConsoleFormatter",
    "DependencyChange",
    "DependencyDiffParser",
    "DependencyFileDetector",
    "JSONFormatter",
    "create_registry",
    "split_patch",
]
