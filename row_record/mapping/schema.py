"""Per-entity schema descriptors.

A descriptor is built once per entity class and records the persisted field
names, the fields excluded by mixins, and an accessor table mapping every
field name to its getter/setter pair.
"""

from __future__ import annotations

import inspect
import re
import types
import typing
from collections.abc import Callable
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, ClassVar, Union, get_args, get_origin

from row_record.core.exceptions import SchemaError

Getter = Callable[[Any, bool], Any]
Setter = Callable[[Any, Any], None]

_STRUCTURED_TYPES = (list, dict, set, frozenset, tuple)
_STRUCTURED_NAME = re.compile(
    r"^\s*(?:Optional\[)?(?:typing\.)?"
    r"(list|dict|set|frozenset|tuple|List|Dict|Set|FrozenSet|Tuple)\b"
)


@dataclass(frozen=True)
class Accessor:
    """Getter/setter pair for one field name."""

    getter: Getter
    setter: Setter


@dataclass(frozen=True, eq=False)
class EntitySchema:
    """Compiled description of one entity class."""

    entity_class: type
    table: str
    identity: str
    created_field: str
    updated_field: str
    count_key: str
    declared_fields: tuple[str, ...]
    excluded_fields: frozenset[str]
    persisted_fields: tuple[str, ...]
    structured_fields: frozenset[str]
    accessors: dict[str, Accessor]

    @property
    def name(self) -> str:
        return self.entity_class.__name__

    def has_setter(self, name: str) -> bool:
        return name in self.accessors

    def get(self, entity: Any, name: str, persisting: bool = False) -> Any:
        return self.accessors[name].getter(entity, persisting)

    def set(self, entity: Any, name: str, value: Any) -> None:
        self.accessors[name].setter(entity, value)


def _is_classvar(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return annotation is ClassVar or get_origin(annotation) is ClassVar


def _is_structured(annotation: Any) -> bool:
    """True for container annotations whose values are stored as JSON text."""
    if isinstance(annotation, str):
        return any(_STRUCTURED_NAME.match(part) for part in annotation.split("|"))
    origin = get_origin(annotation)
    if origin in (Union, types.UnionType):
        return any(_is_structured(arg) for arg in get_args(annotation))
    return (origin or annotation) in _STRUCTURED_TYPES


def _resolved_hints(cls: type) -> dict[str, Any]:
    """Evaluated annotations, or an empty dict when forward refs don't resolve."""
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError, AttributeError):
        # unresolved names fall back to the raw annotation strings
        return {}


def _declared_fields(cls: type, entity_root: type) -> tuple[list[str], set[str], dict[str, Any]]:
    """Walk the MRO base-first collecting fields of *cls* and its mixins.

    Fields declared on Entity ancestors are framework bookkeeping and are
    skipped. A mixin whose own body sets ``exclude_from_persistence = True``
    contributes its fields to the exclusion set.
    """
    names: list[str] = []
    excluded: set[str] = set()
    annotations: dict[str, Any] = {}

    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        if klass is not cls and issubclass(klass, entity_root):
            continue
        own = inspect.get_annotations(klass)
        fields = [
            name
            for name, annotation in own.items()
            if not name.startswith("_") and not _is_classvar(annotation)
        ]
        for name in fields:
            if name not in annotations:
                names.append(name)
            annotations[name] = own[name]
        if klass.__dict__.get("exclude_from_persistence") is True:
            excluded.update(fields)

    return names, excluded, annotations


def _getter_for(cls: type, name: str) -> Getter:
    method = getattr(cls, f"get_{name}", None)
    if method is None or not callable(method):
        return lambda entity, persisting: getattr(entity, name, None)

    method_name = f"get_{name}"
    if "persisting" in inspect.signature(method).parameters:
        return lambda entity, persisting: getattr(entity, method_name)(persisting=persisting)
    return lambda entity, persisting: getattr(entity, method_name)()


def _setter_for(cls: type, name: str) -> Setter:
    method_name = f"set_{name}"
    if callable(getattr(cls, method_name, None)):
        return lambda entity, value: getattr(entity, method_name)(value)
    return lambda entity, value: setattr(entity, name, value)


def build_schema(cls: type) -> EntitySchema:
    """Describe *cls*; prefer :func:`schema_for`, which caches the result."""
    from row_record.mapping.entity import Entity

    if not (isinstance(cls, type) and issubclass(cls, Entity)) or cls is Entity:
        raise SchemaError(f"{cls!r} is not an Entity subclass")
    table = getattr(cls, "__table__", None)
    if not table:
        raise SchemaError(f"{cls.__name__} does not declare __table__")

    names, excluded, annotations = _declared_fields(cls, Entity)
    hints = _resolved_hints(cls)

    accessors = {name: Accessor(_getter_for(cls, name), _setter_for(cls, name)) for name in names}
    # set_<name> methods without a field still accept hydrated columns
    for attr in dir(cls):
        if attr.startswith("set_") and attr != "set_attributes" and callable(getattr(cls, attr)):
            column = attr[len("set_") :]
            if column and column not in accessors:
                accessors[column] = Accessor(_getter_for(cls, column), _setter_for(cls, column))

    return EntitySchema(
        entity_class=cls,
        table=table,
        identity=cls.__identity__,
        created_field=cls.__created_field__,
        updated_field=cls.__updated_field__,
        count_key=cls.__count_key__,
        declared_fields=tuple(names),
        excluded_fields=frozenset(excluded),
        persisted_fields=tuple(name for name in names if name not in excluded),
        structured_fields=frozenset(
            name for name in names if _is_structured(hints.get(name, annotations[name]))
        ),
        accessors=accessors,
    )


@lru_cache(maxsize=None)
def schema_for(cls: type) -> EntitySchema:
    """Cached schema descriptor for an entity class."""
    return build_schema(cls)


def persisted_fields(cls: type) -> tuple[str, ...]:
    """Ordered names of the fields *cls* reads from and writes to the table."""
    return schema_for(cls).persisted_fields
