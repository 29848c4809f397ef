"""Tests for diffscribe.formatters module."""

from diffscribe.formatters import clean_commit_message


class TestCleanCommitMessage:
    """Tests for clean_commit_message."""

    def test_strips_whitespace(self):
        assert clean_commit_message("  Add login form \n") == "Add login form"

    def test_removes_code_fence(self):
        raw = "```\nAdd login form\n```"
        assert clean_commit_message(raw) == "Add login form"

    def test_removes_code_fence_with_language(self):
        raw = "```text\nFix session timeout\n```"
        assert clean_commit_message(raw) == "Fix session timeout"

    def test_removes_surrounding_quotes(self):
        assert clean_commit_message('"Drop legacy exporter"') == "Drop legacy exporter"
        assert clean_commit_message("'Bump requests to 2.32'") == "Bump requests to 2.32"

    def test_keeps_inner_quotes(self):
        raw = 'Reword "Sign in" button label'
        assert clean_commit_message(raw) == raw

    def test_keeps_body(self):
        raw = "Add login\n\n- Store user id in session"
        assert clean_commit_message(raw) == raw

    def test_empty_stays_empty(self):
        assert clean_commit_message("   ") == ""
