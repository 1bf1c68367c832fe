"""Connection configuration and the database handle.

ConnectionConfig is a Pydantic model for type-safe connection config.
DatabaseHandle wraps one open connection behind the adapter protocol and is
the only thing the mapper talks to.
"""

from __future__ import annotations

import importlib
import logging
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from row_record.core.enums import DatabaseBackend, InsertStyle
from row_record.core.exceptions import AdapterError, ConnectionError  # noqa: A004

if TYPE_CHECKING:
    from row_record.core.environment import Environment

logger = logging.getLogger(__name__)


class ConnectionConfig(BaseModel):
    """Configuration for database connections."""

    driver: str
    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = None
    database: str
    extra: dict[str, Any] = {}

    @classmethod
    def from_environment(cls, environment: Environment) -> ConnectionConfig:
        """Build a config from the ``DB_*`` variables of *environment*."""
        port = environment.find_var("DB_PORT")
        return cls(
            driver=environment.find_var("DB_DRIVER", "sqlite"),
            host=environment.find_var("DB_HOST"),
            port=int(port) if port else None,
            user=environment.find_var("DB_USER"),
            password=environment.find_var("DB_PASSWORD"),
            database=environment.find_var("DB_NAME", ":memory:"),
        )


# Adapter module mapping: driver name -> (module_path, class_name)
_ADAPTER_MAP: dict[str, tuple[str, str]] = {
    DatabaseBackend.SQLITE.value: ("row_record.adapters.sqlite", "SqliteAdapter"),
    DatabaseBackend.MYSQL.value: ("row_record.adapters.mysql", "MysqlAdapter"),
}


def _load_adapter(driver: str) -> Any:
    """Load an adapter by driver name."""
    driver_lower = driver.lower()
    if driver_lower not in _ADAPTER_MAP:
        raise AdapterError(f"Unsupported database driver: {driver}")

    module_path, cls_name = _ADAPTER_MAP[driver_lower]
    try:
        module = importlib.import_module(module_path)
        return getattr(module, cls_name)()
    except (ImportError, AttributeError) as e:
        raise AdapterError(f"Failed to load adapter for '{driver}': {e}") from e


def _rows_to_dicts(cursor: Any) -> list[dict[str, Any]]:
    """Convert cursor results to list of dicts.

    Handles both tuple-like rows and dict-like rows from different adapters.
    """
    if cursor.description is None:
        return []
    columns = [desc[0] for desc in cursor.description]
    rows = cursor.fetchall()
    if not rows:
        return []

    if isinstance(rows[0], dict):
        return [dict(row) for row in rows]
    return [dict(zip(columns, row, strict=True)) for row in rows]


class DatabaseHandle:
    """An open connection plus the adapter that knows how to drive it.

    Statements are literal SQL text; values are embedded through
    :meth:`quote` by the value formatter, never by string concatenation.
    """

    def __init__(self, adapter: Any, connection: Any) -> None:
        self._adapter = adapter
        self._connection = connection
        self._last_cursor: Any = None

    @property
    def adapter(self) -> Any:
        return self._adapter

    @property
    def connection(self) -> Any:
        return self._connection

    @property
    def insert_style(self) -> InsertStyle:
        return self._adapter.insert_style

    def execute(self, sql: str, *, commit: bool = False) -> Any:
        """Execute *sql* and return the driver cursor."""
        logger.debug("Executing SQL: %s", sql)
        cursor = self._adapter.execute(self._connection, sql)
        self._last_cursor = cursor
        if commit:
            self._connection.commit()
        return cursor

    def fetch_one(self, sql: str) -> dict[str, Any] | None:
        """Execute *sql* and return the first row as a dict, or None.

        The whole result is read so no unread rows are left on the connection.
        """
        rows = _rows_to_dicts(self.execute(sql))
        return rows[0] if rows else None

    def fetch_all(self, sql: str) -> list[dict[str, Any]]:
        """Execute *sql* and return every row as a dict."""
        return _rows_to_dicts(self.execute(sql))

    def quote(self, text: str) -> str:
        """Return *text* as an escaped, quoted string literal."""
        return self._adapter.quote(self._connection, text)

    def last_insert_id(self) -> Any:
        """Identity generated by the most recent INSERT on this handle."""
        return self._adapter.last_insert_id(self._connection, self._last_cursor)

    def commit(self) -> None:
        self._connection.commit()

    def close(self) -> None:
        self._adapter.close(self._connection)

    def __enter__(self) -> DatabaseHandle:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def open_handle(config: ConnectionConfig) -> DatabaseHandle:
    """Open a connection for *config* and wrap it in a DatabaseHandle.

    Raises:
        AdapterError: If the driver is unknown or its module cannot be loaded.
        ConnectionError: If the driver fails to connect.
    """
    adapter = _load_adapter(config.driver)
    try:
        connection = adapter.connect(config)
    except Exception as e:
        raise ConnectionError(f"Failed to connect to '{config.database}': {e}") from e
    logger.debug("Opened %s connection to %s", config.driver, config.database)
    return DatabaseHandle(adapter, connection)
