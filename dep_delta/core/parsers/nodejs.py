"""Node.js manifest diff parsers."""

import re
from typing import Dict, List, Optional, Tuple

from .base import (
    ADDED_MARKER,
    BaseDiffParser,
    DependencyChange,
    HUNK_HEADER,
    VERSION_LINE_PATTERN,
)
from ...utils.path_utils import manifest_name
from .config import ParserConfig


# +    "node_modules/lodash": {
# -    "lodash": {
PACKAGE_KEY_PATTERN = re.compile(r'^([+-])\s*"(?:node_modules/)?([^"]+)":\s*\{')

NESTED_MODULES = "/node_modules/"

PACKAGE_LOCK = "package-lock.json"


class NodeDiffParser(BaseDiffParser):
    """Parser for package.json and package-lock.json diffs."""

    def __init__(self, config: Optional[ParserConfig] = None) -> None:
        """Initialize the Node.js parser."""
        super().__init__(config)
        self.ecosystem = "nodejs"
        self.supported_files = ["package.json", "package-lock.json"]

    def parse(self, diff_text: str, filename: str) -> List[DependencyChange]:
        """Parse a package.json or package-lock.json diff.

        Args:
            diff_text: Unified diff text for the file
            filename: Path the diff belongs to

        Returns:
            Classified dependency changes
        """
        lines = self._split_lines(diff_text)

        if manifest_name(filename) == PACKAGE_LOCK:
            removed, added = self._scan_lock(lines)
        else:
            removed, added = self._scan_flat_entries(lines, self.config.node_reserved_keys)

        return self._build(removed, added, filename)

    def _accepts_entry(self, name: str, version: str) -> bool:
        # URLs, local paths and git remotes are not version ranges
        return not version.startswith(self.config.node_rejected_prefixes)

    def _scan_lock(self, lines: List[str]) -> Tuple[Dict[str, str], Dict[str, str]]:
        """Collect versions from package-lock.json package blocks.

        Args:
            lines: Diff lines

        Returns:
            Tuple of (removed, added) name to version maps
        """
        removed: Dict[str, str] = {}
        added: Dict[str, str] = {}
        current_package: Optional[str] = None

        for line in lines:
            match = PACKAGE_KEY_PATTERN.match(line)
            if match:
                package = match.group(2)
                # Transitive install paths like a/node_modules/b
                current_package = None if NESTED_MODULES in package else package
                continue

            if line.startswith(HUNK_HEADER):
                current_package = None
                continue

            if current_package is None:
                continue

            match = VERSION_LINE_PATTERN.match(line)
            if not match:
                continue

            marker, version = match.groups()
            if marker == ADDED_MARKER:
                added[current_package] = version
            else:
                removed[current_package] = version

        return removed, added
