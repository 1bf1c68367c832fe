"""Entity hydration and serialization.

Hydration turns a row dict into a new entity through its setters.
Serialization turns an entity's persisted fields into column assignments
for INSERT and UPDATE statements.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic_core import from_json

from row_record.core.exceptions import EmptyAssignment, NoSuchField
from row_record.core.formatter import DATETIME_FORMAT, ValueFormatter
from row_record.core.query import join_assignments
from row_record.core.sanitizer import sanitize_value
from row_record.mapping.schema import schema_for

T = TypeVar("T")


def _is_blank(value: Any) -> bool:
    """Empty values are written as NULL, except ints and bools (0 is data)."""
    return not value and not isinstance(value, (int, bool))


def _decode(text: str) -> Any:
    """JSON text back to a structured value; text that isn't JSON is kept."""
    try:
        return from_json(text)
    except ValueError:
        return text


def _sanitize_nested(value: Any, sanitizer: Callable[[Any], Any]) -> Any:
    """Apply *sanitizer* to the scalars inside a decoded structured value."""
    if isinstance(value, dict):
        return {key: _sanitize_nested(item, sanitizer) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return type(value)(_sanitize_nested(item, sanitizer) for item in value)
    return sanitizer(value)


class EntityCodec(Generic[T]):
    """Maps rows to entities of *entity_class* and entities back to SQL.

    Args:
        entity_class: The Entity subclass to construct.
        sanitizer: Applied to every incoming value before its setter runs.
        clock: Source of "now" for an empty created-timestamp on insert.
    """

    def __init__(
        self,
        entity_class: type[T],
        sanitizer: Callable[[Any], Any] = sanitize_value,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._entity_class = entity_class
        self._schema = schema_for(entity_class)
        self._sanitizer = sanitizer
        self._clock = clock

    # --- hydration ---

    def populate(self, entity: T, row: Mapping[str, Any]) -> T:
        """Assign every column of *row* to *entity* through its setters."""
        schema = self._schema
        for key, raw in row.items():
            if not schema.has_setter(key):
                raise NoSuchField(schema.name, key)
            if key in schema.structured_fields:
                # decode before sanitizing so JSON text is never altered
                value = _decode(raw) if isinstance(raw, str) and raw else raw
                value = _sanitize_nested(value, self._sanitizer)
            else:
                value = self._sanitizer(raw)
            schema.set(entity, key, value)
        return entity

    def hydrate(self, row: Mapping[str, Any]) -> T:
        """Build a new entity from *row*.

        Raises:
            NoSuchField: If a column has no matching setter.
        """
        return self.populate(self._entity_class(), row)

    def map_one(self, row: dict[str, Any]) -> T:
        return self.hydrate(row)

    def map_many(self, rows: list[dict[str, Any]]) -> list[T]:
        return [self.hydrate(row) for row in rows]

    # --- serialization ---

    def assignments(
        self,
        entity: T,
        formatter: ValueFormatter,
        is_insert: bool = False,
    ) -> list[tuple[str, str]]:
        """Return ``(column, literal)`` pairs for every writable field.

        The identity and updated-timestamp fields are never written. Getters
        are called with ``persisting=True``.

        Raises:
            EmptyAssignment: If no field is writable.
        """
        schema = self._schema
        pairs: list[tuple[str, str]] = []
        for name in schema.persisted_fields:
            if name in (schema.identity, schema.updated_field):
                continue
            raw = schema.get(entity, name, persisting=True)
            if is_insert and name == schema.created_field and not raw:
                literal = formatter.quote(self._clock().strftime(DATETIME_FORMAT))
            elif _is_blank(raw):
                literal = "NULL"
            else:
                literal = formatter.format(raw)
            pairs.append((name, literal))

        if not pairs:
            raise EmptyAssignment(schema.name)
        return pairs

    def serialize(self, entity: T, formatter: ValueFormatter, is_insert: bool = False) -> str:
        """Render the column-assignment fragment `` `a` = 1, `b` = 'x' ``."""
        return join_assignments(self.assignments(entity, formatter, is_insert))
