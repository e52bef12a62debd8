"""Split multi-file git patches into per-file diff bodies."""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..utils.logging import get_logger

DIFF_HEADER_PATTERN = re.compile(r"^diff --git (\"?)a/(.+?)\1 (\"?)b/(.+?)\3$")
OLD_FILE_PREFIX = "--- "
NEW_FILE_PREFIX = "+++ "
DEV_NULL = "/dev/null"

logger = get_logger("PatchSplitter")


@dataclass
class FileSection:
    """One ``diff --git`` section of a patch."""

    header_path: str
    old_path: Optional[str] = None
    new_path: Optional[str] = None
    body: List[str] = field(default_factory=list)
    in_hunks: bool = False

    @property
    def path(self) -> str:
        """Path of the file after the change, or before it for deletions."""
        return self.new_path or self.old_path or self.header_path


def _side_path(value: str, prefix: str) -> Optional[str]:
    value = value.strip().strip('"')
    if value == DEV_NULL:
        return None
    if value.startswith(prefix):
        return value[len(prefix):]
    return value


def split_patch(patch_text: str) -> Dict[str, str]:
    """Split ``git show`` / ``git diff`` output into per-file diff text.

    Each value starts at the file's first hunk header, which is the body the
    diff parsers expect. Files without hunks (binary files, pure renames)
    map to an empty string.

    Args:
        patch_text: Full patch text

    Returns:
        Mapping of file path to diff body in patch order
    """
    sections: List[FileSection] = []
    current: Optional[FileSection] = None

    for raw_line in patch_text.split("\n"):
        line = raw_line.rstrip("\r")

        header = DIFF_HEADER_PATTERN.match(line)
        if header:
            current = FileSection(header_path=header.group(4))
            sections.append(current)
            continue

        if current is None:
            continue

        if current.in_hunks:
            current.body.append(raw_line)
        elif line.startswith("@@"):
            current.in_hunks = True
            current.body.append(raw_line)
        elif line.startswith(OLD_FILE_PREFIX):
            current.old_path = _side_path(line[len(OLD_FILE_PREFIX):], "a/")
        elif line.startswith(NEW_FILE_PREFIX):
            current.new_path = _side_path(line[len(NEW_FILE_PREFIX):], "b/")

    diffs: Dict[str, str] = {}
    for section in sections:
        body = "\n".join(section.body)
        if section.path in diffs and body:
            diffs[section.path] = f"{diffs[section.path]}\n{body}" if diffs[section.path] else body
        else:
            diffs.setdefault(section.path, body)

    logger.debug(f"Split patch into {len(diffs)} file sections")
    return diffs
