"""Mapper façade.

Orchestrates condition building, serialization and statement assembly for
one entity class, and talks to the database handle. Every call is a single
synchronous statement; there is no multi-statement transaction state.
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Callable, Mapping, Sequence
from datetime import datetime
from typing import Any, Generic, TypeVar

from row_record.core.clauses import Clauses
from row_record.core.conditions import ConditionBuilder, quote_identifier
from row_record.core.connection import DatabaseHandle
from row_record.core.environment import Environment
from row_record.core.exceptions import (
    EntityResolutionError,
    NoSuchField,
    PersistenceError,
    QueryExecutionError,
)
from row_record.core.formatter import ValueFormatter
from row_record.core.query import QueryBuilder
from row_record.core.sanitizer import SQLSanitizer, sanitize_value
from row_record.mapping.codec import EntityCodec
from row_record.mapping.entity import Entity
from row_record.mapping.schema import schema_for

T = TypeVar("T", bound=Entity)

logger = logging.getLogger(__name__)

# Raw queries passed to find_by_sql are read-only unless configured otherwise.
READ_ONLY_GUARD = SQLSanitizer(allowed_verbs=frozenset({"SELECT"}))

ClausesLike = Clauses | Mapping[str, Any] | None


class Mapper(Generic[T]):
    """Finds, counts, saves and deletes entities of one class.

    Args:
        handle: Open database handle.
        entity_class: Entity subclass this mapper serves.
        sanitizer: Applied to every value before it reaches a setter.
        sql_sanitizer: Guard for ``find_by_sql`` text; ``None`` disables it.
        clock: Source of "now" for created timestamps.
    """

    def __init__(
        self,
        handle: DatabaseHandle,
        entity_class: type[T],
        *,
        sanitizer: Callable[[Any], Any] = sanitize_value,
        sql_sanitizer: SQLSanitizer | None = READ_ONLY_GUARD,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.handle = handle
        self.entity_class = entity_class
        self.schema = schema_for(entity_class)
        self.formatter = ValueFormatter(handle)
        self.conditions = ConditionBuilder(self.formatter)
        self.queries = QueryBuilder(self.schema.table, self.schema.identity, handle.insert_style)
        self.codec: EntityCodec[T] = EntityCodec(entity_class, sanitizer=sanitizer, clock=clock)
        self._sql_sanitizer = sql_sanitizer
        self._columns: str | None = None
        self._count_column: str | None = None
        self._errors: list[str] = []

    @classmethod
    def model(
        cls,
        handle: DatabaseHandle,
        name: str,
        environment: Environment | None = None,
        **options: Any,
    ) -> Mapper[Any]:
        """Resolve entity *name* in ``<DEFAULT_NAMESPACE>.entity`` and map it.

        Raises:
            EntityResolutionError: If the namespace is unset, the module cannot
                be imported, or it holds no Entity called *name*.
        """
        env = environment or Environment.get()
        namespace = env.find_var("DEFAULT_NAMESPACE")
        if not namespace:
            raise EntityResolutionError(name, "DEFAULT_NAMESPACE is not set")

        module_path = f"{namespace}.entity"
        try:
            module = importlib.import_module(module_path)
        except ImportError as e:
            raise EntityResolutionError(name, f"cannot import '{module_path}': {e}") from e

        entity_class = getattr(module, name, None)
        if not (isinstance(entity_class, type) and issubclass(entity_class, Entity)):
            raise EntityResolutionError(name, f"'{module_path}' has no Entity named '{name}'")
        return cls(handle, entity_class, **options)

    # --- column selection ---

    def select(self, columns: str | Sequence[str]) -> Mapper[T]:
        """Restrict selected columns: a raw expression or a list of names."""
        if isinstance(columns, str):
            self._columns = columns
            self._count_column = columns
        else:
            quoted = [quote_identifier(column) for column in columns]
            self._columns = ", ".join(quoted)
            # COUNT() takes one expression; wider selections count rows
            self._count_column = quoted[0] if len(quoted) == 1 else None
        return self

    @property
    def columns(self) -> str:
        return self._columns or "*"

    # --- reads ---

    def find(self, criteria: Mapping[str, Any] | None = None) -> T | None:
        """First entity matching *criteria*, or None."""
        sql = self.queries.select_one(self.columns, self.conditions.build(criteria))
        row = self._fetch_one(sql)
        return None if row is None else self.codec.hydrate(row)

    def find_all(
        self,
        criteria: Mapping[str, Any] | None = None,
        clauses: ClausesLike = None,
    ) -> list[T] | dict[Any, T]:
        """All matching entities, or a dict keyed by ``clauses.index``."""
        options = Clauses.coerce(clauses)
        sql = self.queries.select(self.columns, self.conditions.build(criteria, options))
        entities = self.codec.map_many(self._fetch_all(sql))
        if options.index:
            return self._index(entities, options.index)
        return entities

    def find_by_id(self, identity: Any) -> T | None:
        sql = self.queries.select_by_id(self.columns, self._id_literal(identity))
        row = self._fetch_one(sql)
        return None if row is None else self.codec.hydrate(row)

    def find_by_sql(self, sql: str, clauses: ClausesLike = None) -> list[Any] | dict[Any, Any]:
        """Run a raw query; hydrate rows, or pluck ``clauses.field`` per row.

        Raises:
            SQLSanitizationError: If the query fails the configured guard.
        """
        options = Clauses.coerce(clauses)
        if self._sql_sanitizer is not None:
            sql = self._sql_sanitizer.sanitize(sql)
        rows = self._fetch_all(sql)

        if options.field:
            if options.index:
                return {row.get(options.index): row.get(options.field) for row in rows}
            return [row.get(options.field) for row in rows]

        entities = self.codec.map_many(rows)
        if options.index:
            return self._index(entities, options.index)
        return entities

    def count(
        self,
        criteria: Mapping[str, Any] | None = None,
        clauses: ClausesLike = None,
    ) -> int | None:
        column = self._count_column or self.schema.count_key
        sql = self.queries.count(column, self.conditions.build(criteria, clauses))
        row = self._fetch_one(sql)
        return None if row is None else int(row["counter"])

    # --- writes ---

    def save(self, entity: T) -> Any:
        """INSERT or UPDATE *entity* and return its identity.

        An entity whose identity getter returns a non-empty value is updated;
        otherwise it is inserted and the generated identity is returned.

        Raises:
            EmptyAssignment: If the entity has no writable fields.
            PersistenceError: If the driver rejects the statement.
        """
        identity = self.schema.get(entity, self.schema.identity)
        if identity:
            assignments = self.codec.assignments(entity, self.formatter)
            self._write(self.queries.update(assignments, self._id_literal(identity)))
            return identity

        assignments = self.codec.assignments(entity, self.formatter, is_insert=True)
        self._write(self.queries.insert(assignments))
        return self.handle.last_insert_id()

    def delete(self, criteria: Mapping[str, Any] | None = None) -> bool:
        """Delete every row matching *criteria*.

        Raises:
            PersistenceError: If the driver rejects the statement.
        """
        self._write(self.queries.delete(self.conditions.build(criteria)))
        return True

    def get_errors(self) -> list[str]:
        """Messages of the driver failures seen by this mapper so far."""
        return list(self._errors)

    # --- internals ---

    def _id_literal(self, identity: Any) -> str:
        # integer keys are cast, anything else goes through the formatter
        if isinstance(identity, int) and not isinstance(identity, bool):
            return str(int(identity))
        if isinstance(identity, str) and identity.isdigit():
            return str(int(identity))
        return self.formatter.format(identity)

    def _index(self, entities: list[T], field: str) -> dict[Any, T]:
        if not self.schema.has_setter(field):
            raise NoSuchField(self.schema.name, field)
        # later rows overwrite earlier ones with the same key
        return {self.schema.get(entity, field): entity for entity in entities}

    def _fetch_one(self, sql: str) -> dict[str, Any] | None:
        try:
            return self.handle.fetch_one(sql)
        except Exception as e:
            self._errors.append(str(e))
            raise QueryExecutionError(sql, str(e)) from e

    def _fetch_all(self, sql: str) -> list[dict[str, Any]]:
        try:
            return self.handle.fetch_all(sql)
        except Exception as e:
            self._errors.append(str(e))
            raise QueryExecutionError(sql, str(e)) from e

    def _write(self, sql: str) -> None:
        try:
            self.handle.execute(sql, commit=True)
        except Exception as e:
            self._errors.append(str(e))
            logger.warning("Write to %s failed for %s: %s", self.schema.table, self.schema.name, e)
            raise PersistenceError(self.schema.name, sql, str(e)) from e
