"""Statement assembly from table metadata and pre-built fragments."""

from __future__ import annotations

from collections.abc import Sequence

from row_record.core.conditions import quote_identifier
from row_record.core.enums import InsertStyle


def join_assignments(assignments: Sequence[tuple[str, str]]) -> str:
    """Render ``(column, literal)`` pairs as `` `a` = 1, `b` = 'x' ``."""
    return ", ".join(f"{quote_identifier(column)} = {literal}" for column, literal in assignments)


class QueryBuilder:
    """Pure string templates for the five statement shapes.

    Args:
        table: Target table name.
        identity: Identity column used by select_by_id and update.
        insert_style: Dialect spelling for INSERT statements.
    """

    def __init__(
        self,
        table: str,
        identity: str = "id",
        insert_style: InsertStyle = InsertStyle.SET,
    ) -> None:
        self.table = table
        self.identity = identity
        self.insert_style = insert_style

    def select(self, columns: str, condition: str) -> str:
        return f"SELECT {columns} FROM {self.table} {condition}"

    def select_one(self, columns: str, condition: str) -> str:
        return f"{self.select(columns, condition)} LIMIT 1"

    def select_by_id(self, columns: str, id_literal: str) -> str:
        return (
            f"SELECT {columns} FROM {self.table} "
            f"WHERE {quote_identifier(self.identity)} = {id_literal} LIMIT 1"
        )

    def insert(self, assignments: Sequence[tuple[str, str]]) -> str:
        if self.insert_style is InsertStyle.VALUES:
            columns = ", ".join(quote_identifier(column) for column, _ in assignments)
            values = ", ".join(literal for _, literal in assignments)
            return f"INSERT INTO {self.table} ({columns}) VALUES ({values})"
        return f"INSERT INTO {self.table} SET {join_assignments(assignments)}"

    def update(self, assignments: Sequence[tuple[str, str]], id_literal: str) -> str:
        return (
            f"UPDATE {self.table} SET {join_assignments(assignments)} "
            f"WHERE {quote_identifier(self.identity)} = {id_literal}"
        )

    def delete(self, condition: str) -> str:
        return f"DELETE FROM {self.table} {condition}"

    def count(self, column: str, condition: str) -> str:
        return f"SELECT COUNT({column}) as counter FROM {self.table} {condition}"
