"""Row mapper protocol.

Anything that turns row dicts into objects implements this interface;
EntityCodec is the implementation the Mapper façade uses.
"""

from __future__ import annotations

from typing import Any, Protocol, TypeVar, runtime_checkable

T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class RowMapper(Protocol[T_co]):
    """Base row mapper protocol."""

    def map_one(self, row: dict[str, Any]) -> T_co:
        """Map a single row dict to a target object."""
        ...

    def map_many(self, rows: list[dict[str, Any]]) -> list[T_co]:
        """Map multiple row dicts to a list of target objects."""
        ...
