"""Path utilities for recognising dependency manifests in commits."""

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Dict, Iterable, List, Optional, Tuple


@dataclass(frozen=True)
class ManifestFile:
    """A changed file recognised as a dependency manifest."""

    path: str
    ecosystem: str
    kind: str

    @property
    def is_lock_file(self) -> bool:
        return self.kind == "lock"


# Supported manifest names: basename -> (ecosystem, kind)
DEPENDENCY_PATTERNS: Dict[str, Tuple[str, str]] = {
    "composer.json": ("php", "manifest"),
    "composer.lock": ("php", "lock"),
    "package.json": ("nodejs", "manifest"),
    "package-lock.json": ("nodejs", "lock"),
}

DEPENDENCY_FILES: Tuple[str, ...] = tuple(DEPENDENCY_PATTERNS)


def manifest_name(path: str) -> str:
    """Return the basename of a repository path.

    Paths from git hosting APIs always use forward slashes, so the
    directory part is dropped regardless of the local platform.

    Args:
        path: Repository-relative path

    Returns:
        Last path component
    """
    return PurePosixPath(path).name


def describe_manifest(path: str) -> Optional[ManifestFile]:
    """Describe a path if it is a known dependency manifest.

    Args:
        path: Repository-relative path

    Returns:
        Manifest description or None if the file is not a manifest
    """
    pattern = DEPENDENCY_PATTERNS.get(manifest_name(path))
    if pattern is None:
        return None

    ecosystem, kind = pattern
    return ManifestFile(path=path, ecosystem=ecosystem, kind=kind)


def find_manifests(paths: Iterable[str]) -> List[ManifestFile]:
    """Pick the dependency manifests out of a list of changed paths.

    Args:
        paths: Changed file paths

    Returns:
        Manifest descriptions in input order
    """
    manifests = []
    for path in paths:
        manifest = describe_manifest(path)
        if manifest is not None:
            manifests.append(manifest)
    return manifests
