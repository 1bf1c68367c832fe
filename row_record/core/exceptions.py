"""RowRecord exception hierarchy.

All exceptions are RowRecord-specific. Raw driver exceptions are never
exposed to callers; they are chained as ``__cause__`` instead.
"""

from __future__ import annotations


class RowRecordError(Exception):
    """Base exception for all RowRecord errors."""


# --- Execution ---


class ExecutionError(RowRecordError):
    """Base for statement execution errors."""


class QueryExecutionError(ExecutionError):
    """Raised when a read statement fails in the driver."""

    def __init__(self, sql: str, detail: str) -> None:
        self.sql = sql
        super().__init__(f"Query failed: {detail} [{sql}]")


class PersistenceError(ExecutionError):
    """Raised when an insert, update or delete fails in the driver.

    The driver exception is available as ``__cause__``.
    """

    def __init__(self, entity_name: str, sql: str, detail: str) -> None:
        self.entity_name = entity_name
        self.sql = sql
        super().__init__(f"Could not persist {entity_name}: {detail}")


class SQLSanitizationError(ExecutionError):
    """Raised when a raw SQL string or predicate fails a sanitization check."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"SQL sanitization failed: {detail}")


# --- Query building ---


class InvalidClauses(RowRecordError):
    """Raised when query clauses hold unknown keys or values of the wrong type."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Invalid clauses: {detail}")


# --- Mapping ---


class MappingError(RowRecordError):
    """Base for entity mapping errors."""


class NoSuchField(MappingError):
    """Raised when a row column has no matching setter on the entity."""

    def __init__(self, entity_name: str, field_name: str) -> None:
        self.entity_name = entity_name
        self.field_name = field_name
        super().__init__(f"{entity_name} has no setter for field '{field_name}'")


class EmptyAssignment(MappingError):
    """Raised when an entity has no writable fields to persist."""

    def __init__(self, entity_name: str) -> None:
        self.entity_name = entity_name
        super().__init__(f"{entity_name} has no writable fields to persist")


class SchemaError(MappingError):
    """Raised when an entity class cannot be described."""


# --- Configuration ---


class ConfigurationError(RowRecordError):
    """Base for configuration lookup errors."""


class EntityResolutionError(ConfigurationError):
    """Raised when an entity class cannot be resolved by its short name."""

    def __init__(self, name: str, detail: str) -> None:
        self.name = name
        super().__init__(f"Cannot resolve entity '{name}': {detail}")


# --- Adapter ---


class AdapterError(RowRecordError):
    """Base for adapter errors."""


class ConnectionError(AdapterError):  # noqa: A001
    """Raised on connection failures."""
