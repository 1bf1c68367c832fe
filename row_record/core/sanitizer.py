"""Sanitizers for values and raw SQL text.

``sanitize_value`` cleans every attribute value before it reaches an entity
setter. ``SQLSanitizer`` guards the SQL text that bypasses value formatting:
raw ``BETWEEN``/``LIKE``/``REGEXP`` predicates and ``find_by_sql`` queries.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any

from row_record.core.exceptions import SQLSanitizationError

logger = logging.getLogger(__name__)

_TAG = re.compile(r"<[^>]*>")
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")

# Matches the first SQL keyword (used for verb allow-listing)
_FIRST_KEYWORD = re.compile(r"^\s*(\w+)")

# One alternative per token kind. ``open`` only matches when a quote could
# not be closed, which makes the input malformed.
_TOKEN = re.compile(
    r"""
      (?P<string>'(?:[^'\\]|\\.|'')*')
    | (?P<identifier>"(?:[^"]|"")*"|`(?:[^`]|``)*`)
    | (?P<line_comment>--[^\n]*)
    | (?P<block_comment>/\*.*?(?:\*/|\Z))
    | (?P<open>['"`])
    | (?P<code>[^'"`\-/]+|[-/])
    """,
    re.VERBOSE | re.DOTALL,
)


def sanitize_value(value: Any) -> Any:
    """Neutralize untrusted text before it is assigned to an entity.

    Markup tags and control characters are removed and surrounding
    whitespace is trimmed. Non-string values are returned unchanged.
    The result is stable: sanitizing twice gives the same text.
    """
    if not isinstance(value, str):
        return value
    return _CONTROL_CHARS.sub("", _TAG.sub("", value)).strip()


def _tokenize(sql: str) -> list[tuple[str, str]]:
    """Split *sql* into ``(kind, text)`` tokens.

    Kinds are ``string``, ``identifier``, ``line_comment``, ``block_comment``
    and ``code``.

    Raises:
        SQLSanitizationError: On an unterminated literal or quoted identifier.
    """
    tokens: list[tuple[str, str]] = []
    for match in _TOKEN.finditer(sql):
        kind = match.lastgroup
        if kind == "open":
            raise SQLSanitizationError(
                f"Unterminated quote {match.group()!r} at position {match.start()}"
            )
        tokens.append((kind, match.group()))  # type: ignore[arg-type]
    return tokens


def _strip_comments(tokens: list[tuple[str, str]]) -> list[tuple[str, str]]:
    """Drop comment tokens; a block comment becomes a single space."""
    kept: list[tuple[str, str]] = []
    for kind, text in tokens:
        if kind == "block_comment":
            kept.append(("code", " "))
        elif kind != "line_comment":
            kept.append((kind, text))
    return kept


def _check_single_statement(tokens: list[tuple[str, str]]) -> None:
    """Raise if a ``;`` outside literals is followed by more SQL."""
    for index, (kind, text) in enumerate(tokens):
        if kind != "code" or ";" not in text:
            continue
        rest = text[text.index(";") + 1 :] + "".join(t for _, t in tokens[index + 1 :])
        if rest.strip():
            raise SQLSanitizationError("Multiple SQL statements are not permitted")


def _check_verb(sql: str, allowed: frozenset[str]) -> None:
    """Raise if the leading SQL keyword is not in *allowed*."""
    m = _FIRST_KEYWORD.match(sql)
    if m:
        verb = m.group(1).upper()
        if verb not in allowed:
            raise SQLSanitizationError(
                f"SQL verb '{verb}' is not permitted; allowed: {sorted(allowed)}"
            )


@dataclass
class SQLSanitizer:
    """Configurable guard for SQL text that is executed as written.

    This is NOT a substitute for formatting values through the mapper: it
    blocks comment tricks, stacked statements and broken quoting, but cannot
    tell data from code in text a caller concatenated together.

    Attributes:
        strip_comments: Strip ``--`` and ``/* */`` comments from queries.
        block_multiple_statements: Reject a ``;`` followed by more SQL.
        allowed_verbs: If not ``None``, only statements whose first keyword
            is in this set are permitted.
    """

    strip_comments: bool = True
    block_multiple_statements: bool = True
    allowed_verbs: frozenset[str] | None = None

    def sanitize(self, sql: str) -> str:
        """Apply all configured checks to a full query and return it cleaned.

        Raises:
            SQLSanitizationError: If any enabled check fails.
        """
        tokens = _tokenize(sql)
        if self.strip_comments:
            tokens = _strip_comments(tokens)
            sql = "".join(text for _, text in tokens)
        if self.block_multiple_statements:
            _check_single_statement(tokens)
        if self.allowed_verbs is not None:
            _check_verb(sql, self.allowed_verbs)
        return sql

    def check_predicate(self, column: str, predicate: str) -> str:
        """Validate a raw predicate such as ``LIKE 'abc%'`` for *column*.

        Predicates are embedded mid-statement, so comments and any ``;`` are
        rejected outright instead of being stripped.

        Raises:
            SQLSanitizationError: If the predicate is not a single clean clause.
        """
        for kind, text in _tokenize(predicate):
            if kind in ("line_comment", "block_comment"):
                logger.warning("Rejected raw predicate for `%s`: comment", column)
                raise SQLSanitizationError(
                    f"Comments are not permitted in the predicate for '{column}'"
                )
            if kind == "code" and ";" in text:
                logger.warning("Rejected raw predicate for `%s`: semicolon", column)
                raise SQLSanitizationError(
                    f"Statement separators are not permitted in the predicate for '{column}'"
                )
        return predicate
