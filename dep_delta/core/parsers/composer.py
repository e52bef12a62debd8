"""Composer (PHP) manifest diff parsers."""

import re
from typing import Dict, List, Optional, Tuple

from .base import (
    ADDED_MARKER,
    BaseDiffParser,
    DependencyChange,
    REMOVED_MARKER,
    VERSION_LINE_PATTERN,
)
from ...utils.path_utils import manifest_name
from .config import ParserConfig


# +            "name": "symfony/http-client",
MARKED_NAME_PATTERN = re.compile(r'^([+-])\s*"name":\s*"([^"]+)"')

# Context line, the package block itself is unchanged
CONTEXT_NAME_PATTERN = re.compile(r'^\s*"name":\s*"([^"]+)"')

COMPOSER_LOCK = "composer.lock"


class ComposerDiffParser(BaseDiffParser):
    """Parser for composer.json and composer.lock diffs."""

    def __init__(self, config: Optional[ParserConfig] = None) -> None:
        """Initialize the Composer parser."""
        super().__init__(config)
        self.ecosystem = "php"
        self.supported_files = ["composer.json", "composer.lock"]

    def parse(self, diff_text: str, filename: str) -> List[DependencyChange]:
        """Parse a composer.json or composer.lock diff.

        Args:
            diff_text: Unified diff text for the file
            filename: Path the diff belongs to

        Returns:
            Classified dependency changes
        """
        lines = self._split_lines(diff_text)

        if manifest_name(filename) == COMPOSER_LOCK:
            removed, added = self._scan_lock(lines)
        else:
            removed, added = self._scan_flat_entries(lines, self.config.composer_reserved_keys)

        return self._build(removed, added, filename)

    def _accepts_entry(self, name: str, version: str) -> bool:
        # Packages are always vendor/name; bare keys are platform constraints like php
        return "/" in name

    def _scan_lock(self, lines: List[str]) -> Tuple[Dict[str, str], Dict[str, str]]:
        """Pair package names with versions in composer.lock blocks.

        Name and version sit on separate lines of a package object, so each
        name line is paired with the first version line carrying the same
        marker inside a bounded window, scanning from the top of the window.

        Args:
            lines: Diff lines

        Returns:
            Tuple of (removed, added) name to version maps
        """
        removed: Dict[str, str] = {}
        added: Dict[str, str] = {}

        for index, line in enumerate(lines):
            match = MARKED_NAME_PATTERN.match(line)
            if match:
                marker, package = match.groups()
                version = self._find_version_nearby(lines, index, marker)

                if version is None:
                    continue

                if marker == ADDED_MARKER:
                    added[package] = version
                else:
                    removed[package] = version
                continue

            match = CONTEXT_NAME_PATTERN.match(line)
            if match:
                package = match.group(1)
                old_version = self._find_version_nearby(lines, index, REMOVED_MARKER)
                new_version = self._find_version_nearby(lines, index, ADDED_MARKER)

                # In-place bump: only the version line changed
                if old_version is None or new_version is None or old_version == new_version:
                    continue

                removed.setdefault(package, old_version)
                added.setdefault(package, new_version)

        return removed, added

    def _find_version_nearby(self, lines: List[str], index: int, marker: str) -> Optional[str]:
        """Find the first version line with the given marker around a line.

        Args:
            lines: Diff lines
            index: Index of the anchor line
            marker: Diff marker the version line must carry

        Returns:
            Version string or None if not found in the window
        """
        window = self.config.lock_window
        start = max(0, index - window)
        end = min(len(lines), index + window + 1)

        for position in range(start, end):
            match = VERSION_LINE_PATTERN.match(lines[position])
            if match and match.group(1) == marker:
                return match.group(2)

        return None
