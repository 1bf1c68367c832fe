"""WHERE-clause construction from criteria mappings."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from row_record.core.clauses import Clauses
from row_record.core.formatter import ValueFormatter
from row_record.core.sanitizer import SQLSanitizer

# Criteria strings starting with one of these are raw predicates, not values.
RAW_PREDICATE = re.compile(r"^(BETWEEN|LIKE|REGEXP)")

_SEQUENCE_TYPES = (list, tuple, set, frozenset)


def quote_identifier(name: str) -> str:
    """Backtick-quote a column or table name."""
    return "`" + name.replace("`", "``") + "`"


class ConditionBuilder:
    """Turns criteria plus clauses into ``WHERE 1 AND ... LIMIT ...`` text.

    The fragment always starts with ``WHERE 1`` so further conditions can be
    appended unconditionally.

    Criteria values:
        * sequence -> ``IN (...)`` with every element formatted
        * string starting with BETWEEN / LIKE / REGEXP -> passed through after
          the raw-predicate guard; the caller owns the literal inside it
        * anything else -> ``= <formatted value>``
    """

    def __init__(
        self,
        formatter: ValueFormatter,
        guard: SQLSanitizer | None = None,
    ) -> None:
        self._formatter = formatter
        self._guard = guard or SQLSanitizer()

    def build(
        self,
        criteria: Mapping[str, Any] | None = None,
        clauses: Clauses | Mapping[str, Any] | None = None,
    ) -> str:
        parts = ["WHERE 1"]
        for key, value in (criteria or {}).items():
            parts.append(self._predicate(key, value))

        options = Clauses.coerce(clauses)
        if options.group_by:
            parts.append(f"GROUP BY {options.group_by}")
        if options.order_by:
            parts.append(f"ORDER BY {options.order_by}")
        if options.limit:
            parts.append(f"LIMIT {int(options.limit)}")
        if options.offset:
            parts.append(f"OFFSET {int(options.offset)}")
        return " ".join(parts)

    def _predicate(self, key: str, value: Any) -> str:
        column = quote_identifier(key)
        if isinstance(value, _SEQUENCE_TYPES):
            if not value:
                # an empty membership test matches nothing
                return "AND 0"
            return f"AND {column} IN ({','.join(self._formatter.format_many(value))})"
        if isinstance(value, str) and RAW_PREDICATE.match(value):
            return f"AND {column} {self._guard.check_predicate(key, value)}"
        return f"AND {column} = {self._formatter.format(value)}"
