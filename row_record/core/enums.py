"""Database backend enumeration."""

from __future__ import annotations

from enum import Enum


class DatabaseBackend(Enum):
    """Supported database backends."""

    SQLITE = "sqlite"
    MYSQL = "mysql"


class InsertStyle(Enum):
    """How an adapter's SQL dialect spells an INSERT."""

    SET = "set"  # INSERT INTO t SET `a` = 1
    VALUES = "values"  # INSERT INTO t (`a`) VALUES (1)
