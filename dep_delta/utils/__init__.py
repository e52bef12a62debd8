"""Utility functions and helpers for DepDelta."""

from .logging import setup_logging, get_logger
from .path_utils import describe_manifest, find_manifests, manifest_name

__all__ = [
    "setup_logging",
    "get_logger",
    "describe_manifest",
    "find_manifests",
    "manifest_name",
]
