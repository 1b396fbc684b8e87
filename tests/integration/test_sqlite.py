"""Integration test for SQLite full workflow.

Covers: type detection, conversion, bulk materializers, associative trees,
iteration and release against a real SQLite in-memory database.
"""

from __future__ import annotations

import sqlite3

import pytest

from row_set.core.config import ResultSetConfig
from row_set.core.enums import ColumnType
from row_set.core.exceptions import UnknownColumnError
from row_set.core.result import ResultSet

SELECT_ALL = "SELECT id, category, name, price, added FROM products ORDER BY id"


@pytest.fixture
def result(sqlite_conn: sqlite3.Connection) -> ResultSet:
    return ResultSet.from_query("sqlite", sqlite_conn, SELECT_ALL)


class TestSqliteWorkflow:
    def test_field_names(self, result: ResultSet) -> None:
        assert result.field_names() == ["id", "category", "name", "price", "added"]
        assert result.field_meta("price").type is ColumnType.FLOAT

    def test_row_count(self, result: ResultSet) -> None:
        assert len(result) == 3

    def test_fetch_all_rows(self, result: ResultSet) -> None:
        rows = result.fetch_all()
        assert [row["name"] for row in rows] == ["apple", "pear", "leek"]

    def test_fetch_all_single_column(self, sqlite_conn: sqlite3.Connection) -> None:
        result = ResultSet.from_query("sqlite", sqlite_conn, "SELECT name FROM products ORDER BY id")
        assert result.fetch_all() == ["apple", "pear", "leek"]

    def test_fetch_scalar_aggregate(self, sqlite_conn: sqlite3.Connection) -> None:
        result = ResultSet.from_query("sqlite", sqlite_conn, "SELECT COUNT(*) FROM products")
        assert result.fetch_scalar() == 3

    def test_fetch_pairs(self, result: ResultSet) -> None:
        assert result.fetch_pairs("name", "price") == {"apple": 1.25, "pear": 2.5, "leek": 0.75}
        assert result.fetch_pairs(value="category") == ["fruit", "fruit", "veg"]

    def test_fetch_assoc_category_fan_out(self, result: ResultSet) -> None:
        tree = result.fetch_assoc("category,*")
        assert list(tree) == ["fruit", "veg"]
        assert [row["name"] for row in tree["fruit"]] == ["apple", "pear"]

    def test_fetch_assoc_record(self, result: ResultSet) -> None:
        tree = result.fetch_assoc("category,#,name")
        assert tree["fruit"]["id"] == 1
        assert list(tree["fruit"]["name"]) == ["apple", "pear"]

    def test_fetch_assoc_unknown_column(self, result: ResultSet) -> None:
        with pytest.raises(UnknownColumnError):
            result.fetch_assoc("category,colour")

    def test_repeated_materialization_rewinds(self, result: ResultSet) -> None:
        first = result.fetch_all()
        assert result.fetch_all() == first

    def test_detected_types_and_dates(self, sqlite_conn: sqlite3.Connection) -> None:
        result = ResultSet.from_query(
            "sqlite",
            sqlite_conn,
            SELECT_ALL,
            config=ResultSetConfig(detect_types=True),
        )
        result.set_conversion("added", ColumnType.DATETIME)
        rows = result.fetch_all()
        assert rows[0]["added"] == 1704067200
        assert rows[1]["added"] == 1704067200 + 86400
        assert rows[2]["added"] is None
        assert isinstance(rows[0]["price"], float)

    def test_text_to_integer_conversion(self, sqlite_conn: sqlite3.Connection) -> None:
        result = ResultSet.from_query(
            "sqlite", sqlite_conn, "SELECT CAST(id AS TEXT) AS id FROM products ORDER BY id"
        )
        result.set_conversion("id", "integer")
        assert result.fetch_all() == [1, 2, 3]

    def test_iterate_with_offset_and_limit(self, result: ResultSet) -> None:
        assert [row["id"] for row in result.iterate(offset=1, limit=1)] == [2]

    def test_release(self, result: ResultSet) -> None:
        result.release()
        result.release()
        assert result.released is True
