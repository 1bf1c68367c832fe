"""Unit tests for QueryBuilder."""

from __future__ import annotations

import pytest

from row_record.core.enums import InsertStyle
from row_record.core.query import QueryBuilder, join_assignments

PAIRS = [("name", "'Widget'"), ("price", "9.99")]


@pytest.fixture
def queries() -> QueryBuilder:
    return QueryBuilder("product")


class TestQueryBuilder:
    def test_select(self, queries: QueryBuilder) -> None:
        assert queries.select("*", "WHERE 1") == "SELECT * FROM product WHERE 1"

    def test_select_one(self, queries: QueryBuilder) -> None:
        sql = queries.select_one("`id`, `name`", "WHERE 1 AND `id` = 3")
        assert sql == "SELECT `id`, `name` FROM product WHERE 1 AND `id` = 3 LIMIT 1"

    def test_select_by_id(self, queries: QueryBuilder) -> None:
        assert queries.select_by_id("*", "7") == "SELECT * FROM product WHERE `id` = 7 LIMIT 1"

    def test_select_by_custom_identity(self) -> None:
        queries = QueryBuilder("settings", identity="key")
        sql = queries.select_by_id("*", "'theme'")
        assert sql == "SELECT * FROM settings WHERE `key` = 'theme' LIMIT 1"

    def test_insert_set_style(self, queries: QueryBuilder) -> None:
        sql = queries.insert(PAIRS)
        assert sql == "INSERT INTO product SET `name` = 'Widget', `price` = 9.99"

    def test_insert_values_style(self) -> None:
        queries = QueryBuilder("product", insert_style=InsertStyle.VALUES)
        sql = queries.insert(PAIRS)
        assert sql == "INSERT INTO product (`name`, `price`) VALUES ('Widget', 9.99)"

    def test_update(self, queries: QueryBuilder) -> None:
        sql = queries.update(PAIRS, "7")
        assert sql == "UPDATE product SET `name` = 'Widget', `price` = 9.99 WHERE `id` = 7"

    def test_delete(self, queries: QueryBuilder) -> None:
        sql = queries.delete("WHERE 1 AND `id` = 7")
        assert sql == "DELETE FROM product WHERE 1 AND `id` = 7"

    def test_count(self, queries: QueryBuilder) -> None:
        sql = queries.count("*", "WHERE 1")
        assert sql == "SELECT COUNT(*) as counter FROM product WHERE 1"

    def test_join_assignments(self) -> None:
        assert join_assignments(PAIRS) == "`name` = 'Widget', `price` = 9.99"
