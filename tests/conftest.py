"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import datetime
from unittest.mock import MagicMock

import pytest

from row_record.core.connection import ConnectionConfig, DatabaseHandle, open_handle
from row_record.core.enums import InsertStyle
from row_record.core.formatter import ValueFormatter

FIXED_NOW = datetime(2024, 5, 1, 12, 0, 0)

PRODUCT_DDL = (
    "CREATE TABLE product ("
    "id INTEGER PRIMARY KEY AUTOINCREMENT, "
    "name TEXT NOT NULL, "
    "price REAL, "
    "code TEXT, "
    "tags TEXT, "
    "active INTEGER, "
    "created_at TEXT, "
    "updated_at TEXT DEFAULT CURRENT_TIMESTAMP)"
)


def sql_quote(text: str) -> str:
    """Standard SQL string literal quoting (quotes doubled)."""
    return "'" + text.replace("'", "''") + "'"


class FakeQuoter:
    def quote(self, text: str) -> str:
        return sql_quote(text)


@pytest.fixture
def formatter() -> ValueFormatter:
    """ValueFormatter backed by plain SQL quoting, no database needed."""
    return ValueFormatter(FakeQuoter())


@pytest.fixture
def clock():
    """Clock that always returns FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def mock_handle() -> MagicMock:
    """DatabaseHandle double speaking the ``INSERT ... SET`` dialect."""
    handle = MagicMock(spec=DatabaseHandle)
    handle.insert_style = InsertStyle.SET
    handle.quote.side_effect = sql_quote
    handle.fetch_one.return_value = None
    handle.fetch_all.return_value = []
    return handle


@pytest.fixture
def sqlite_config() -> ConnectionConfig:
    """SQLite in-memory connection config."""
    return ConnectionConfig(driver="sqlite", database=":memory:")


@pytest.fixture
def sqlite_handle(sqlite_config: ConnectionConfig) -> Iterator[DatabaseHandle]:
    """Open in-memory SQLite handle with the product table created."""
    handle = open_handle(sqlite_config)
    handle.execute(PRODUCT_DDL, commit=True)
    yield handle
    handle.close()
