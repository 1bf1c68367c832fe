"""MySQL adapter (mysql-connector-python)."""

from __future__ import annotations

from typing import Any

from row_record.core.connection import ConnectionConfig
from row_record.core.enums import InsertStyle


class MysqlAdapter:
    """Synchronous MySQL adapter using mysql-connector-python."""

    @property
    def insert_style(self) -> InsertStyle:
        return InsertStyle.SET

    def connect(self, config: ConnectionConfig) -> Any:
        """Open a MySQL connection."""
        import mysql.connector

        return mysql.connector.connect(
            host=config.host,
            port=config.port or 3306,
            user=config.user,
            password=config.password,
            database=config.database,
            **config.extra,
        )

    def close(self, connection: Any) -> None:
        connection.close()

    def execute(self, connection: Any, sql: str) -> Any:
        """Execute SQL and return a cursor with dictionary results."""
        cursor = connection.cursor(dictionary=True)
        cursor.execute(sql)
        return cursor

    def quote(self, connection: Any, text: str) -> str:
        """Escape *text* with the connector's converter and wrap it in quotes."""
        from mysql.connector.conversion import MySQLConverter

        escaped = MySQLConverter(connection.charset).escape(text)
        return f"'{escaped}'"

    def last_insert_id(self, connection: Any, cursor: Any) -> Any:
        return cursor.lastrowid
