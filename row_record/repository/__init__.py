"""Repository layer - the Mapper façade."""

from __future__ import annotations

from row_record.repository.mapper import Mapper

__all__ = [
    "Mapper",
]
