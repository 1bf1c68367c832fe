"""SQLite adapter (sqlite3 stdlib)."""

from __future__ import annotations

import re
import sqlite3
from typing import Any

from row_record.core.connection import ConnectionConfig
from row_record.core.enums import InsertStyle


def _regexp(pattern: str, value: Any) -> bool:
    """Backs the ``REGEXP`` operator, which SQLite leaves undefined."""
    if value is None:
        return False
    return re.search(pattern, str(value)) is not None


class SqliteAdapter:
    """Synchronous SQLite adapter using stdlib sqlite3."""

    @property
    def insert_style(self) -> InsertStyle:
        return InsertStyle.VALUES

    def connect(self, config: ConnectionConfig) -> sqlite3.Connection:
        """Open a connection with row access by column name."""
        conn = sqlite3.connect(config.database, **config.extra)
        conn.row_factory = sqlite3.Row
        conn.create_function("REGEXP", 2, _regexp, deterministic=True)
        return conn

    def close(self, connection: sqlite3.Connection) -> None:
        connection.close()

    def execute(self, connection: sqlite3.Connection, sql: str) -> sqlite3.Cursor:
        """Execute SQL and return a cursor."""
        return connection.execute(sql)

    def quote(self, connection: sqlite3.Connection, text: str) -> str:
        """Quote *text* with SQLite's own ``quote()`` function."""
        return connection.execute("SELECT quote(?)", (text,)).fetchone()[0]

    def last_insert_id(self, connection: sqlite3.Connection, cursor: sqlite3.Cursor) -> Any:
        return cursor.lastrowid
