"""Tests for parser configuration."""

import pytest

from dep_delta.core.parsers import ComposerDiffParser, NodeDiffParser, ParserConfig
from dep_delta.core.parsers.config import COMPOSER_RESERVED_KEYS, NODE_RESERVED_KEYS


class TestParserConfig:
    """Test the ParserConfig dataclass."""

    def test_defaults(self):
        """Test default configuration values."""
        config = ParserConfig()

        assert config.lock_window == 15
        assert config.max_diff_lines is None
        assert "minimum-stability" in config.composer_reserved_keys
        assert "browserslist" in config.node_reserved_keys
        assert config.node_rejected_prefixes == ("http", "file:", "git")

    def test_validation(self):
        """Test that out-of-range values are rejected."""
        with pytest.raises(ValueError, match="lock_window"):
            ParserConfig(lock_window=-1)

        with pytest.raises(ValueError, match="max_diff_lines"):
            ParserConfig(max_diff_lines=0)

    def test_from_dict_extends_reserved_keys(self):
        """Test that extra keys are added to the defaults."""
        config = ParserConfig.from_dict({"extra_node_reserved_keys": ["packageManager"]})

        assert "packageManager" in config.node_reserved_keys
        assert NODE_RESERVED_KEYS <= config.node_reserved_keys
        assert config.composer_reserved_keys == COMPOSER_RESERVED_KEYS

    def test_from_dict_replaces_reserved_keys(self):
        """Test that plain keys replace the defaults."""
        config = ParserConfig.from_dict({"composer_reserved_keys": ["name"]})

        assert config.composer_reserved_keys == frozenset({"name"})

    def test_from_toml(self, tmp_path):
        """Test loading the [dep_delta] table from a TOML file."""
        config_file = tmp_path / "depdelta.toml"
        config_file.write_text(
            "[dep_delta]\n"
            "lock_window = 20\n"
            "max_diff_lines = 3000\n"
            'extra_composer_reserved_keys = ["acme/internal"]\n'
        )

        config = ParserConfig.from_toml(config_file)

        assert config.lock_window == 20
        assert config.max_diff_lines == 3000
        assert "acme/internal" in config.composer_reserved_keys

    def test_from_toml_without_table(self, tmp_path):
        """Test that a file without the table gives defaults."""
        config_file = tmp_path / "other.toml"
        config_file.write_text("[tool.other]\nvalue = 1\n")

        assert ParserConfig.from_toml(config_file) == ParserConfig()

    def test_from_toml_missing_file(self, tmp_path):
        """Test that a missing config file raises."""
        with pytest.raises(FileNotFoundError):
            ParserConfig.from_toml(tmp_path / "missing.toml")

    def test_with_max_diff_lines(self):
        """Test copying with a new line limit."""
        config = ParserConfig(lock_window=5)
        limited = config.with_max_diff_lines(100)

        assert limited.max_diff_lines == 100
        assert limited.lock_window == 5
        assert config.max_diff_lines is None


class TestConfiguredParsers:
    """Test that parsers honour their configuration."""

    def test_extra_composer_reserved_key(self):
        """Test that a configured key is skipped in composer.json."""
        parser = ComposerDiffParser(ParserConfig.from_dict({
            "extra_composer_reserved_keys": ["acme/internal"],
        }))
        diff = '+        "acme/internal": "dev-main",\n+        "acme/public": "^1.0",'

        assert [c.name for c in parser.parse(diff, "composer.json")] == ["acme/public"]

    def test_custom_rejected_prefixes(self):
        """Test that rejected value prefixes come from configuration."""
        parser = NodeDiffParser(ParserConfig(node_rejected_prefixes=("workspace:",)))
        diff = '+    "shared": "workspace:*",\n+    "remote": "https://example.com/x.tgz",'

        assert [c.name for c in parser.parse(diff, "package.json")] == ["remote"]
