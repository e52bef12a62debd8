"""Dependency diff parsers for Composer and Node.js manifests."""

from typing import Optional

from .base import BaseDiffParser, ChangeType, DependencyChange, build_changes
from .composer import ComposerDiffParser
from .config import ParserConfig
from .nodejs import NodeDiffParser
from .registry import DiffParserRegistry


def create_registry(config: Optional[ParserConfig] = None) -> DiffParserRegistry:
    """Build a registry with the built-in parsers.

    Args:
        config: Shared parser configuration

    Returns:
        Registry with Composer and Node.js parsers registered
    """
    config = config or ParserConfig()
    parser_registry = DiffParserRegistry(config)
    parser_registry.register(ComposerDiffParser(config))
    parser_registry.register(NodeDiffParser(config))
    return parser_registry


# Register built-in parsers
registry = create_registry()

# Convenience exports
DependencyDiffParser = registry
__all__ = [
    "BaseDiffParser",
    "ChangeType",
    "ComposerDiffParser",
    "DependencyChange",
    "DependencyDiffParser",
    "DiffParserRegistry",
    "NodeDiffParser",
    "ParserConfig",
    "build_changes",
    "create_registry",
    "registry",
]
