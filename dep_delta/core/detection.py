"""Flag commits that touch dependency manifests."""

from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Sequence, Tuple

from ..utils.logging import get_logger
from ..utils.path_utils import DEPENDENCY_FILES, manifest_name


@dataclass(frozen=True)
class CommitSummary:
    """Commit as seen by the detector: identity plus changed file paths."""

    id: str
    title: str = ""
    files: Tuple[str, ...] = ()
    has_dependency_changes: bool = False

    def with_dependency_flag(self, has_dependency_changes: bool) -> "CommitSummary":
        return replace(self, has_dependency_changes=has_dependency_changes)


class DependencyFileDetector:
    """Checks changed file names against known dependency manifests."""

    def __init__(
        self,
        dependency_files: Optional[Iterable[str]] = None,
        track_dependency_changes: bool = True,
    ) -> None:
        """Initialize the detector.

        Args:
            dependency_files: Manifest basenames to look for
            track_dependency_changes: When False, detection is a no-op
        """
        files = DEPENDENCY_FILES if dependency_files is None else dependency_files
        self.dependency_files = frozenset(files)
        self.track_dependency_changes = track_dependency_changes
        self.logger = get_logger("DependencyFileDetector")

    def is_dependency_file(self, filename: str) -> bool:
        """Check whether a path names a dependency manifest, in any directory."""
        return manifest_name(filename) in self.dependency_files

    def dependency_files_in(self, filenames: Iterable[str]) -> List[str]:
        """Filter paths down to dependency manifests.

        Args:
            filenames: Changed file paths

        Returns:
            Matching paths in input order
        """
        return [name for name in filenames if self.is_dependency_file(name)]

    def has_dependency_changes(self, filenames: Iterable[str]) -> bool:
        """Check whether any changed file is a dependency manifest."""
        if not self.track_dependency_changes:
            return False
        return any(self.is_dependency_file(name) for name in filenames)

    def detect_for_commits(self, commits: Sequence[CommitSummary]) -> List[CommitSummary]:
        """Set the dependency flag on each commit.

        Args:
            commits: Commits with their changed files

        Returns:
            New commit summaries, or the inputs unchanged if tracking is off
        """
        if not self.track_dependency_changes:
            return list(commits)

        flagged = [
            commit.with_dependency_flag(self.has_dependency_changes(commit.files))
            for commit in commits
        ]
        self.logger.debug(
            f"{sum(c.has_dependency_changes for c in flagged)} of {len(flagged)} commits touch dependencies"
        )
        return flagged
