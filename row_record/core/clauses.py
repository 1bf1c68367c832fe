"""Grouping, ordering, paging and result-shaping options for queries."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from row_record.core.exceptions import InvalidClauses


class Clauses(BaseModel):
    """Options appended after a WHERE fragment or used to shape results.

    Keys are accepted in camelCase (``groupBy``) or snake_case (``group_by``).
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    group_by: str | None = Field(default=None, alias="groupBy")
    order_by: str | None = Field(default=None, alias="orderBy")
    limit: int | None = None
    offset: int | None = None
    index: str | None = None
    field: str | None = None

    @classmethod
    def coerce(cls, clauses: Clauses | Mapping[str, Any] | None) -> Clauses:
        """Normalize ``None`` / dict / Clauses into a Clauses instance.

        Raises:
            InvalidClauses: If a key is unknown or a value has the wrong type.
        """
        if clauses is None:
            return cls()
        if isinstance(clauses, cls):
            return clauses
        try:
            return cls.model_validate(dict(clauses))
        except ValidationError as e:
            raise InvalidClauses(str(e)) from e
