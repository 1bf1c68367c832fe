"""Type-aware conversion of Python values into SQL literal fragments."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Protocol

from pydantic_core import to_json

DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
DATE_FORMAT = "%Y-%m-%d"


class Quoter(Protocol):
    """Anything that can turn text into a quoted literal (a DatabaseHandle)."""

    def quote(self, text: str) -> str: ...


class ValueFormatter:
    """Formats values as SQL literals using the handle's native quoting.

    * ``bool`` -> ``1`` / ``0``
    * ``str`` -> quoted string literal
    * ``datetime`` / ``date`` -> quoted ``YYYY-MM-DD[ HH:MM:SS]`` text
    * ``int`` / ``float`` / ``Decimal`` -> their textual form
    * ``None`` -> ``NULL``
    * containers, dataclasses, pydantic models and other objects -> JSON
      text, quoted, so structured attributes fit in one text column
    """

    def __init__(self, quoter: Quoter) -> None:
        self._quoter = quoter

    def quote(self, text: str) -> str:
        return self._quoter.quote(text)

    def format(self, value: Any) -> str:
        # bool first: it is also an int
        if isinstance(value, bool):
            return "1" if value else "0"
        if value is None:
            return "NULL"
        if isinstance(value, str):
            return self.quote(value)
        if isinstance(value, datetime):
            return self.quote(value.strftime(DATETIME_FORMAT))
        if isinstance(value, date):
            return self.quote(value.strftime(DATE_FORMAT))
        if isinstance(value, (int, float, Decimal)):
            return str(value)
        return self.quote(self.encode(value))

    @staticmethod
    def encode(value: Any) -> str:
        """Serialize a structured value to stable JSON text."""
        if isinstance(value, (set, frozenset)):
            value = sorted(value, key=repr)
        return to_json(value, serialize_unknown=True).decode()

    def format_many(self, values: Any) -> list[str]:
        return [self.format(v) for v in values]
