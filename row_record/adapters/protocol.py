"""Database adapter protocol.

Every adapter module MUST implement this protocol so DatabaseHandle can
drive any backend through the same calls.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from row_record.core.connection import ConnectionConfig
from row_record.core.enums import InsertStyle


@runtime_checkable
class SyncAdapter(Protocol):
    """Synchronous database adapter protocol."""

    @property
    def insert_style(self) -> InsertStyle:
        """Whether the dialect supports ``INSERT ... SET`` or needs ``VALUES``."""
        ...

    def connect(self, config: ConnectionConfig) -> Any:
        """Open a single connection."""
        ...

    def close(self, connection: Any) -> None:
        """Close the connection."""
        ...

    def execute(self, connection: Any, sql: str) -> Any:
        """Execute literal SQL and return a cursor-like object."""
        ...

    def quote(self, connection: Any, text: str) -> str:
        """Return *text* as a quoted string literal using native escaping."""
        ...

    def last_insert_id(self, connection: Any, cursor: Any) -> Any:
        """Identity generated by the INSERT that produced *cursor*."""
        ...
