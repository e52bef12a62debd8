"""Base parser class and data models for dependency diff parsing."""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

from ...utils.logging import get_logger
from ...utils.path_utils import manifest_name
from .config import ParserConfig


# +    "vendor/package": "^1.0",
FLAT_ENTRY_PATTERN = re.compile(r'^([+-])\s*"([^"]+)":\s*"([^"]+)"')

# +            "version": "v7.0.0",
VERSION_LINE_PATTERN = re.compile(r'^([+-])\s*"version":\s*"([^"]+)"')

HUNK_HEADER = "@@"

ADDED_MARKER = "+"
REMOVED_MARKER = "-"


class ChangeType(str, Enum):
    """Kind of change applied to a dependency."""

    ADDED = "added"
    REMOVED = "removed"
    UPDATED = "updated"


@dataclass(frozen=True)
class DependencyChange:
    """A single dependency whose declared version changed in a diff."""

    name: str
    type: ChangeType
    old_version: Optional[str] = None
    new_version: Optional[str] = None
    source_file: str = ""

    def __post_init__(self) -> None:
        """Validate version fields against the change type."""
        if not self.name:
            raise ValueError("Dependency name cannot be empty")

        has_old = self.old_version is not None
        has_new = self.new_version is not None

        if self.type is ChangeType.ADDED and (has_old or not has_new):
            raise ValueError(f"Added dependency {self.name} needs only a new version")
        if self.type is ChangeType.REMOVED and (has_new or not has_old):
            raise ValueError(f"Removed dependency {self.name} needs only an old version")
        if self.type is ChangeType.UPDATED and not (has_old and has_new):
            raise ValueError(f"Updated dependency {self.name} needs both versions")

    @classmethod
    def added(cls, name: str, new_version: str, source_file: str) -> "DependencyChange":
        return cls(name, ChangeType.ADDED, None, new_version, source_file)

    @classmethod
    def removed(cls, name: str, old_version: str, source_file: str) -> "DependencyChange":
        return cls(name, ChangeType.REMOVED, old_version, None, source_file)

    @classmethod
    def updated(
        cls, name: str, old_version: str, new_version: str, source_file: str
    ) -> "DependencyChange":
        return cls(name, ChangeType.UPDATED, old_version, new_version, source_file)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the change for the presentation layer.

        Returns:
            Dictionary with camelCase keys
        """
        return {
            "name": self.name,
            "type": self.type.value,
            "oldVersion": self.old_version,
            "newVersion": self.new_version,
            "sourceFile": self.source_file,
        }


def build_changes(
    removed: Dict[str, str],
    added: Dict[str, str],
    source_file: str,
) -> List[DependencyChange]:
    """Reconcile removed/added version maps into classified changes.

    Names are processed in sorted order so the result does not depend on
    the order lines appeared in the diff. A package present in both maps
    with the same version is a no-op and produces no record.

    Args:
        removed: Package name to version for removed lines
        added: Package name to version for added lines
        source_file: Filename echoed into every record

    Returns:
        List of changes sorted by name
    """
    changes = []

    for name in sorted(set(removed) | set(added)):
        old_version = removed.get(name)
        new_version = added.get(name)

        if old_version is not None and new_version is not None:
            if old_version != new_version:
                changes.append(DependencyChange.updated(name, old_version, new_version, source_file))
        elif new_version is not None:
            changes.append(DependencyChange.added(name, new_version, source_file))
        elif old_version is not None:
            changes.append(DependencyChange.removed(name, old_version, source_file))

    return changes


class BaseDiffParser(ABC):
    """Abstract base class for manifest diff parsers."""

    def __init__(self, config: Optional[ParserConfig] = None) -> None:
        """Initialize the parser.

        Args:
            config: Parser configuration (defaults are used if None)
        """
        self.config = config or ParserConfig()
        self.supported_files: List[str] = []
        self.ecosystem: str = ""
        self.logger = get_logger(self.__class__.__name__)

    def supports(self, filename: str) -> bool:
        """Check if this parser can handle the given file.

        Args:
            filename: Repository path of the changed file

        Returns:
            True if the basename is one of the supported manifests
        """
        return manifest_name(filename) in self.supported_files

    @abstractmethod
    def parse(self, diff_text: str, filename: str) -> List[DependencyChange]:
        """Parse the diff body of one file.

        Args:
            diff_text: Unified diff text for the file
            filename: Path the diff belongs to

        Returns:
            Classified dependency changes, sorted by name
        """
        pass

    def _split_lines(self, diff_text: str) -> List[str]:
        # CRLF endings are passed through, the patterns stop at the closing quote
        return diff_text.split("\n")

    def _scan_flat_entries(
        self,
        lines: List[str],
        reserved_keys: FrozenSet[str],
    ) -> Tuple[Dict[str, str], Dict[str, str]]:
        """Collect ``"key": "value"`` pairs from added and removed lines.

        Args:
            lines: Diff lines
            reserved_keys: Manifest keys that are never dependencies

        Returns:
            Tuple of (removed, added) name to version maps
        """
        removed: Dict[str, str] = {}
        added: Dict[str, str] = {}

        for line in lines:
            match = FLAT_ENTRY_PATTERN.match(line)
            if not match:
                continue

            marker, name, version = match.groups()

            if name in reserved_keys:
                continue

            if not self._accepts_entry(name, version):
                continue

            if marker == ADDED_MARKER:
                added[name] = version
            else:
                removed[name] = version

        return removed, added

    def _accepts_entry(self, name: str, version: str) -> bool:
        """Format-specific filter for flat manifest entries."""
        return True

    def _build(
        self,
        removed: Dict[str, str],
        added: Dict[str, str],
        filename: str,
    ) -> List[DependencyChange]:
        changes = build_changes(removed, added, filename)
        self.logger.debug(f"{filename}: {len(changes)} dependency changes")
        return changes
