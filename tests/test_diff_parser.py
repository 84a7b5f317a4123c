"""Tests for patch parsing."""

from combine_prs.tools import extract_line_change, parse_patch


API_PATCH = """@@ -1,5 +1,5 @@
 {
   "dependencies": {
-    "lodash": "^4.17.20"
+    "lodash": "^4.17.21"
   }
 }"""

GIT_PATCH = """--- a/package.json
+++ b/package.json
@@ -3 +3 @@
-    "lodash": "^4.17.20"
+    "lodash": "^4.17.21\""""


class TestParsePatch:
    """Tests for hunk parsing."""

    def test_parses_api_patch(self):
        """Given a GitHub API patch, should collect removed and added lines per hunk."""
        # When
        hunks = parse_patch(API_PATCH)

        # Then
        assert len(hunks) == 1
        assert hunks[0].old_start == 1
        assert hunks[0].removed == ['    "lodash": "^4.17.20"']
        assert hunks[0].added == ['    "lodash": "^4.17.21"']

    def test_ignores_file_headers(self):
        """Given git output with ---/+++ headers, should not treat them as changes."""
        # When
        hunks = parse_patch(GIT_PATCH)

        # Then
        assert hunks[0].removed == ['    "lodash": "^4.17.20"']
        assert hunks[0].new_start == 3

    def test_empty_patch(self):
        assert parse_patch("") == []


class TestExtractLineChange:
    """Tests for single line change extraction."""

    def test_extracts_first_pair(self):
        change = extract_line_change(API_PATCH)
        assert change.removed == '    "lodash": "^4.17.20"'
        assert change.added == '    "lodash": "^4.17.21"'

    def test_multiple_occurrences_keep_first_pair(self):
        """Given two bumped lines, should only return the first pair."""
        # Given
        patch = "@@ -1,2 +1,2 @@\n-a 1\n-b 1\n+a 2\n+b 2"

        # When
        change = extract_line_change(patch)

        # Then
        assert (change.removed, change.added) == ("a 1", "a 2")

    def test_missing_side(self):
        assert extract_line_change("@@ -1 +1,0 @@\n-gone") is None
        assert extract_line_change("@@ -0,0 +1 @@\n+new") is None
