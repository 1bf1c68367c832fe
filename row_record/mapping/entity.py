"""Entity base class.

Subclasses declare ``__table__`` and their persisted fields as annotated
class attributes::

    class Product(Entity):
        __table__ = "product"

        id: int | None = None
        name: str = ""
        price: float = 0.0

Plain subclasses get a keyword constructor from this base; dataclass
subclasses keep their generated ``__init__``.
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Mapping
from typing import Any, ClassVar

from row_record.core.sanitizer import sanitize_value
from row_record.mapping.codec import EntityCodec
from row_record.mapping.schema import EntitySchema, schema_for


class Entity:
    """Base class for objects mapped to one table row."""

    __table__: ClassVar[str] = ""
    __identity__: ClassVar[str] = "id"
    __created_field__: ClassVar[str] = "created_at"
    __updated_field__: ClassVar[str] = "updated_at"
    __count_key__: ClassVar[str] = "*"

    def __init__(self, **values: Any) -> None:
        schema = self.schema()
        for name in schema.declared_fields:
            default = getattr(type(self), name, None)
            setattr(self, name, copy.copy(default))
        for name, value in values.items():
            if name not in schema.declared_fields:
                raise TypeError(f"{type(self).__name__} has no field '{name}'")
            setattr(self, name, value)

    @classmethod
    def schema(cls) -> EntitySchema:
        return schema_for(cls)

    def set_attributes(
        self,
        data: Mapping[str, Any],
        sanitizer: Callable[[Any], Any] = sanitize_value,
    ) -> Entity:
        """Assign every value in *data* through the field's setter.

        Raises:
            NoSuchField: If a key has no setter on this entity.
        """
        EntityCodec(type(self), sanitizer=sanitizer).populate(self, data)
        return self

    def get_identity(self) -> Any:
        schema = self.schema()
        return schema.get(self, schema.identity)

    def to_dict(self) -> dict[str, Any]:
        """Current values of all declared fields, in declaration order."""
        schema = self.schema()
        return {name: getattr(self, name, None) for name in schema.declared_fields}

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.to_dict() == other.to_dict()  # type: ignore[attr-defined]

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self.to_dict().items())
        return f"{type(self).__name__}({fields})"
