"""Shared test fixtures."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from typing import Any

import pytest

from row_set.adapters.memory import MemoryRowSource
from row_set.core.config import ResultSetConfig
from row_set.core.result import ResultSet


class ForwardOnlySource(MemoryRowSource):
    """Memory source that refuses to seek, like a streaming cursor."""

    def seek(self, position: int) -> bool:
        return False


@pytest.fixture
def make_result():
    """Build a ResultSet over in-memory rows.

    Usage:
        result = make_result([{"id": 1}], forward_only=True, record="@")
    """

    def _make(
        rows: list[dict[str, Any]],
        *,
        forward_only: bool = False,
        **config: Any,
    ) -> ResultSet:
        source_cls = ForwardOnlySource if forward_only else MemoryRowSource
        return ResultSet(source_cls(rows), ResultSetConfig(**config))

    return _make


@pytest.fixture
def sqlite_conn() -> Iterator[sqlite3.Connection]:
    """SQLite in-memory database with a products table."""
    conn = sqlite3.connect(":memory:")
    conn.execute(
        "CREATE TABLE products (id INTEGER PRIMARY KEY, category TEXT NOT NULL, "
        "name TEXT NOT NULL, price REAL NOT NULL, added TEXT)"
    )
    conn.executemany(
        "INSERT INTO products (id, category, name, price, added) VALUES (?, ?, ?, ?, ?)",
        [
            (1, "fruit", "apple", 1.25, "2024-01-01T00:00:00Z"),
            (2, "fruit", "pear", 2.5, "2024-01-02T00:00:00Z"),
            (3, "veg", "leek", 0.75, None),
        ],
    )
    conn.commit()
    yield conn
    conn.close()
