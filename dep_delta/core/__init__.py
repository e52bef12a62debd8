"""Core diff classification logic for DepDelta."""

from .detection import CommitSummary, DependencyFileDetector
from .parsers import DependencyChange, DependencyDiffParser, ChangeType
from .patch import split_patch

__all__ = [
    "ChangeType",
    "CommitSummary",
    "DependencyChange",
    "DependencyDiffParser",
    "DependencyFileDetector",
    "split_patch",
]
