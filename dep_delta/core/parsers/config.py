"""Configuration for the diff parsers."""

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, FrozenSet, Optional, Tuple


COMPOSER_RESERVED_KEYS: FrozenSet[str] = frozenset({
    "name",
    "description",
    "type",
    "license",
    "minimum-stability",
    "prefer-stable",
    "autoload",
    "autoload-dev",
    "scripts",
    "config",
    "extra",
    "repositories",
})

NODE_RESERVED_KEYS: FrozenSet[str] = frozenset({
    "name",
    "version",
    "description",
    "main",
    "scripts",
    "repository",
    "keywords",
    "author",
    "license",
    "bugs",
    "homepage",
    "private",
    "engines",
    "browserslist",
})

# Install-from-source specifiers, not version ranges
NODE_REJECTED_PREFIXES: Tuple[str, ...] = ("http", "file:", "git")

DEFAULT_LOCK_WINDOW = 15

CONFIG_TABLE = "dep_delta"


@dataclass(frozen=True)
class ParserConfig:
    """Tunable data shared by the diff parsers and the registry."""

    composer_reserved_keys: FrozenSet[str] = field(default=COMPOSER_RESERVED_KEYS)
    node_reserved_keys: FrozenSet[str] = field(default=NODE_RESERVED_KEYS)
    node_rejected_prefixes: Tuple[str, ...] = NODE_REJECTED_PREFIXES
    lock_window: int = DEFAULT_LOCK_WINDOW
    max_diff_lines: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.lock_window < 0:
            raise ValueError(f"lock_window must not be negative: {self.lock_window}")

        if self.max_diff_lines is not None and self.max_diff_lines < 1:
            raise ValueError(f"max_diff_lines must be positive: {self.max_diff_lines}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Build a configuration from a plain mapping.

        Keys named ``extra_*_reserved_keys`` extend the default sets, the
        plain ``*_reserved_keys`` keys replace them.

        Args:
            data: Mapping of configuration values

        Returns:
            Parser configuration
        """
        composer_keys = frozenset(data.get("composer_reserved_keys", COMPOSER_RESERVED_KEYS))
        node_keys = frozenset(data.get("node_reserved_keys", NODE_RESERVED_KEYS))

        composer_keys |= frozenset(data.get("extra_composer_reserved_keys", ()))
        node_keys |= frozenset(data.get("extra_node_reserved_keys", ()))

        return cls(
            composer_reserved_keys=composer_keys,
            node_reserved_keys=node_keys,
            node_rejected_prefixes=tuple(data.get("node_rejected_prefixes", NODE_REJECTED_PREFIXES)),
            lock_window=int(data.get("lock_window", DEFAULT_LOCK_WINDOW)),
            max_diff_lines=data.get("max_diff_lines"),
        )

    @classmethod
    def from_toml(cls, path: Path) -> "ParserConfig":
        """Load configuration from the ``[dep_delta]`` table of a TOML file.

        Args:
            path: Path to the TOML file

        Returns:
            Parser configuration

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If a value is out of range
        """
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "rb") as f:
            data = tomllib.load(f)

        return cls.from_dict(data.get(CONFIG_TABLE, {}))

    def with_max_diff_lines(self, max_diff_lines: Optional[int]) -> "ParserConfig":
        """Return a copy with a different input-size guard."""
        return replace(self, max_diff_lines=max_diff_lines)
