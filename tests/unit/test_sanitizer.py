"""Unit tests for value and SQL sanitization."""

from __future__ import annotations

import pytest

from row_record.core.exceptions import SQLSanitizationError
from row_record.core.sanitizer import SQLSanitizer, sanitize_value


class TestSanitizeValue:
    def test_strips_tags_and_whitespace(self) -> None:
        assert sanitize_value("  <script>x</script>Widget ") == "xWidget"

    def test_strips_control_characters(self) -> None:
        assert sanitize_value("Wid\x00get\x1b") == "Widget"

    def test_keeps_newlines_and_tabs_inside(self) -> None:
        assert sanitize_value("a\tb\nc") == "a\tb\nc"

    def test_is_idempotent(self) -> None:
        once = sanitize_value(" <i>O'Brien</i>\x07 ")
        assert sanitize_value(once) == once

    @pytest.mark.parametrize("value", [None, 0, 3.5, True, ["<b>"], {"a": 1}])
    def test_non_strings_pass_through(self, value: object) -> None:
        assert sanitize_value(value) is value


class TestSanitize:
    def test_plain_query_is_unchanged(self) -> None:
        sql = "SELECT * FROM product WHERE name = 'x'"
        assert SQLSanitizer().sanitize(sql) == sql

    def test_line_comment_is_stripped(self) -> None:
        assert SQLSanitizer().sanitize("SELECT 1 -- note") == "SELECT 1 "

    def test_block_comment_becomes_space(self) -> None:
        assert SQLSanitizer().sanitize("SELECT/* x */1") == "SELECT 1"

    def test_comment_markers_inside_literal_are_kept(self) -> None:
        sql = "SELECT '--not a comment' AS v"
        assert SQLSanitizer().sanitize(sql) == sql

    def test_comments_kept_when_disabled(self) -> None:
        sql = "SELECT 1 -- note"
        assert SQLSanitizer(strip_comments=False).sanitize(sql) == sql

    def test_trailing_semicolon_is_allowed(self) -> None:
        assert SQLSanitizer().sanitize("SELECT 1;") == "SELECT 1;"

    def test_stacked_statements_are_rejected(self) -> None:
        with pytest.raises(SQLSanitizationError, match="Multiple"):
            SQLSanitizer().sanitize("SELECT 1; DELETE FROM product")

    def test_semicolon_inside_literal_is_allowed(self) -> None:
        sql = "SELECT * FROM product WHERE name = 'a;b'"
        assert SQLSanitizer().sanitize(sql) == sql

    def test_stacked_statements_allowed_when_disabled(self) -> None:
        guard = SQLSanitizer(block_multiple_statements=False)
        assert guard.sanitize("SELECT 1; SELECT 2") == "SELECT 1; SELECT 2"

    def test_comment_hiding_a_second_statement(self) -> None:
        with pytest.raises(SQLSanitizationError):
            SQLSanitizer().sanitize("SELECT 1 /* x */; DROP TABLE product")

    def test_verb_allow_list(self) -> None:
        guard = SQLSanitizer(allowed_verbs=frozenset({"SELECT"}))
        assert guard.sanitize("  select 1") == "  select 1"
        with pytest.raises(SQLSanitizationError, match="UPDATE"):
            guard.sanitize("UPDATE product SET name = 'x'")

    def test_unterminated_literal(self) -> None:
        with pytest.raises(SQLSanitizationError, match="Unterminated"):
            SQLSanitizer().sanitize("SELECT 'abc")

    def test_escaped_quotes_are_one_literal(self) -> None:
        sql = "SELECT 'O''Brien; x'"
        assert SQLSanitizer().sanitize(sql) == sql


class TestCheckPredicate:
    def test_clean_predicate_is_returned(self) -> None:
        assert SQLSanitizer().check_predicate("name", "LIKE 'W%'") == "LIKE 'W%'"

    def test_semicolon_is_rejected(self) -> None:
        with pytest.raises(SQLSanitizationError, match="separators"):
            SQLSanitizer().check_predicate("name", "LIKE 'a';")

    def test_block_comment_is_rejected(self) -> None:
        with pytest.raises(SQLSanitizationError, match="Comments"):
            SQLSanitizer().check_predicate("price", "BETWEEN 1 /* */ AND 2")

    def test_rejection_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level("WARNING", logger="row_record.core.sanitizer"):
            with pytest.raises(SQLSanitizationError):
                SQLSanitizer().check_predicate("name", "LIKE 'a' -- x")
        assert "Rejected raw predicate for `name`" in caplog.text
