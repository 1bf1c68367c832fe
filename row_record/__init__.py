"""RowRecord - lightweight data mapper and active-record engine."""

from __future__ import annotations

from row_record.core.clauses import Clauses
from row_record.core.conditions import ConditionBuilder
from row_record.core.connection import ConnectionConfig, DatabaseHandle, open_handle
from row_record.core.enums import DatabaseBackend, InsertStyle
from row_record.core.environment import Environment
from row_record.core.exceptions import (
    AdapterError,
    ConfigurationError,
    ConnectionError,  # noqa: A004
    EmptyAssignment,
    EntityResolutionError,
    ExecutionError,
    InvalidClauses,
    MappingError,
    NoSuchField,
    PersistenceError,
    QueryExecutionError,
    RowRecordError,
    SchemaError,
    SQLSanitizationError,
)
from row_record.core.formatter import ValueFormatter
from row_record.core.query import QueryBuilder
from row_record.core.sanitizer import SQLSanitizer, sanitize_value
from row_record.mapping.codec import EntityCodec
from row_record.mapping.entity import Entity
from row_record.mapping.schema import persisted_fields, schema_for
from row_record.repository.mapper import Mapper

__all__ = [
    # Connection
    "ConnectionConfig",
    "DatabaseHandle",
    "open_handle",
    # Configuration
    "Environment",
    # SQL building
    "Clauses",
    "ConditionBuilder",
    "QueryBuilder",
    "ValueFormatter",
    # Sanitizers
    "SQLSanitizer",
    "sanitize_value",
    # Mapping
    "Entity",
    "EntityCodec",
    "persisted_fields",
    "schema_for",
    # Façade
    "Mapper",
    # Enums
    "DatabaseBackend",
    "InsertStyle",
    # Exceptions
    "RowRecordError",
    "ExecutionError",
    "QueryExecutionError",
    "PersistenceError",
    "SQLSanitizationError",
    "InvalidClauses",
    "MappingError",
    "NoSuchField",
    "EmptyAssignment",
    "SchemaError",
    "ConfigurationError",
    "EntityResolutionError",
    "AdapterError",
    "ConnectionError",
]
