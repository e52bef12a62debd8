"""Tests for splitting multi-file git patches."""

import pytest

from dep_delta.core.parsers import ChangeType, create_registry
from dep_delta.core.patch import split_patch


@pytest.fixture
def commit_patch():
    """Output of git show for a commit touching three files."""
    return "\n".join([
        "commit 3f2a1c9e0b7d4a6f8e5c2b1a0d9f8e7c6b5a4d3e",
        "Author: Jane Doe <jane@example.com>",
        "Date:   Mon Oct 2 10:00:00 2023 +0200",
        "",
        "    Bump dependencies",
        "",
        "diff --git a/composer.json b/composer.json",
        "index 1111111..2222222 100644",
        "--- a/composer.json",
        "+++ b/composer.json",
        "@@ -10,7 +10,7 @@",
        '     "require": {',
        '-        "symfony/http-client": "^6.4",',
        '+        "symfony/http-client": "^7.0",',
        '         "php": ">=8.2"',
        "diff --git a/README.md b/README.md",
        "index 3333333..4444444 100644",
        "--- a/README.md",
        "+++ b/README.md",
        "@@ -1,3 +1,3 @@",
        "-# Old title",
        "+# New title",
        "diff --git a/frontend/package.json b/frontend/package.json",
        "index 5555555..6666666 100644",
        "--- a/frontend/package.json",
        "+++ b/frontend/package.json",
        "@@ -5,6 +5,7 @@",
        '   "dependencies": {',
        '+    "lodash": "^4.17.21",',
        '     "react": "^18.0.0"',
        "@@ -30,3 +31,3 @@",
        '-    "jest": "^28.0.0"',
        '+    "jest": "^29.0.0"',
        "",
    ])


class TestSplitPatch:
    """Test patch splitting."""

    def test_splits_files_in_order(self, commit_patch):
        """Test that each file gets its own section in patch order."""
        diffs = split_patch(commit_patch)

        assert list(diffs) == ["composer.json", "README.md", "frontend/package.json"]

    def test_body_starts_at_first_hunk(self, commit_patch):
        """Test that file headers are not part of the body."""
        diffs = split_patch(commit_patch)

        assert diffs["composer.json"].startswith("@@ -10,7 +10,7 @@")
        assert "+++ b/composer.json" not in diffs["composer.json"]
        assert "diff --git" not in diffs["README.md"]

    def test_keeps_every_hunk(self, commit_patch):
        """Test that later hunks stay with their file."""
        body = split_patch(commit_patch)["frontend/package.json"]

        assert '+    "lodash": "^4.17.21",' in body
        assert '+    "jest": "^29.0.0"' in body

    def test_deleted_file_uses_old_path(self):
        """Test that a deleted file keeps its original path."""
        patch = "\n".join([
            "diff --git a/package-lock.json b/package-lock.json",
            "deleted file mode 100644",
            "--- a/package-lock.json",
            "+++ /dev/null",
            "@@ -1,3 +0,0 @@",
            '-    "node_modules/lodash": {',
            '-      "version": "4.17.21",',
        ])

        diffs = split_patch(patch)

        assert list(diffs) == ["package-lock.json"]

    def test_new_file(self):
        """Test that an added file uses its new path."""
        patch = "\n".join([
            "diff --git a/api/composer.json b/api/composer.json",
            "new file mode 100644",
            "--- /dev/null",
            "+++ b/api/composer.json",
            "@@ -0,0 +1,3 @@",
            '+        "monolog/monolog": "^3.0",',
        ])

        assert list(split_patch(patch)) == ["api/composer.json"]

    def test_file_without_hunks(self):
        """Test that binary changes map to an empty body."""
        patch = "\n".join([
            "diff --git a/logo.png b/logo.png",
            "index 7777777..8888888 100644",
            "Binary files a/logo.png and b/logo.png differ",
        ])

        assert split_patch(patch) == {"logo.png": ""}

    def test_rename_without_hunks_uses_header_path(self):
        """Test that a pure rename falls back to the header path."""
        patch = "\n".join([
            "diff --git a/old/package.json b/new/package.json",
            "similarity index 100%",
            "rename from old/package.json",
            "rename to new/package.json",
        ])

        assert split_patch(patch) == {"new/package.json": ""}

    def test_text_without_headers(self):
        """Test that plain text yields no files."""
        assert split_patch("+    \"lodash\": \"^4.17.21\",") == {}
        assert split_patch("") == {}

    def test_parse_all_over_split_patch(self, commit_patch):
        """Test the full flow from patch text to classified changes."""
        changes = create_registry().parse_all(split_patch(commit_patch))

        assert [(c.name, c.type, c.source_file) for c in changes] == [
            ("symfony/http-client", ChangeType.UPDATED, "composer.json"),
            ("jest", ChangeType.UPDATED, "frontend/package.json"),
            ("lodash", ChangeType.ADDED, "frontend/package.json"),
        ]
