"""Mapping layer - entity schemas, hydration and serialization."""

from __future__ import annotations

from row_record.mapping.codec import EntityCodec
from row_record.mapping.entity import Entity
from row_record.mapping.protocol import RowMapper
from row_record.mapping.schema import EntitySchema, persisted_fields, schema_for

__all__ = [
    "Entity",
    "EntityCodec",
    "EntitySchema",
    "RowMapper",
    "persisted_fields",
    "schema_for",
]
