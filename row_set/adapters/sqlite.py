"""SQLite row source using stdlib sqlite3."""

from __future__ import annotations

import logging
import sqlite3
from typing import Any

from row_set.adapters.protocol import ColumnInfo
from row_set.core.exceptions import SourceError

logger = logging.getLogger(__name__)

# Storage class of a fetched value -> native type name
_STORAGE_CLASS: dict[type, str] = {
    int: "INTEGER",
    float: "REAL",
    str: "TEXT",
    bytes: "BLOB",
}


class SqliteRowSource:
    """Row source over a SELECT statement on a sqlite3 connection.

    sqlite3 cursors are forward-only, so seek() re-executes the statement
    and skips ahead.
    """

    def __init__(
        self,
        connection: sqlite3.Connection,
        sql: str,
        params: dict[str, Any] | None = None,
    ) -> None:
        self._connection = connection
        self._sql = sql
        self._params = params or {}
        self._cursor: sqlite3.Cursor | None = self._execute()
        self._first: tuple[Any, ...] | None = None

    def _execute(self) -> sqlite3.Cursor:
        try:
            return self._connection.execute(self._sql, self._params)
        except sqlite3.Error as e:
            raise SourceError(f"SQLite execution failed: {e}") from e

    def _columns(self) -> list[str]:
        if self._cursor is None or self._cursor.description is None:
            return []
        return [desc[0] for desc in self._cursor.description]

    def _to_dict(self, raw: Any) -> dict[str, Any]:
        # Connections with row_factory=sqlite3.Row yield mappings
        if isinstance(raw, sqlite3.Row):
            return {key: raw[key] for key in raw.keys()}
        return dict(zip(self._columns(), raw, strict=True))

    def seek(self, position: int) -> bool:
        if self._cursor is None or position < 0:
            return False
        try:
            cursor = self._execute()
        except SourceError:
            logger.debug("Seek to %d failed: statement could not be re-executed", position)
            return False
        for _ in range(position):
            if cursor.fetchone() is None:
                cursor.close()
                return False
        self._cursor.close()
        self._cursor = cursor
        return True

    def row_count(self) -> int:
        try:
            row = self._connection.execute(
                f"SELECT COUNT(*) FROM ({self._sql})", self._params
            ).fetchone()
        except sqlite3.Error as e:
            raise SourceError(f"SQLite row count failed: {e}") from e
        return int(row[0])

    def fetch_next(self) -> dict[str, Any] | None:
        if self._cursor is None:
            return None
        try:
            raw = self._cursor.fetchone()
        except sqlite3.Error as e:
            raise SourceError(f"SQLite fetch failed: {e}") from e
        if raw is None:
            return None
        return self._to_dict(raw)

    def release(self) -> None:
        if self._cursor is not None:
            self._cursor.close()
            self._cursor = None

    def discover_columns(self) -> list[ColumnInfo]:
        names = self._columns()
        if self._first is None and self._cursor is not None:
            # Peek at the first row on a separate cursor to keep our position
            try:
                first = self._connection.execute(self._sql, self._params).fetchone()
            except sqlite3.Error as e:
                raise SourceError(f"SQLite column discovery failed: {e}") from e
            if first is not None:
                self._first = tuple(first)
        values = self._first or (None,) * len(names)
        return [
            ColumnInfo(name, _STORAGE_CLASS.get(type(value)))
            for name, value in zip(names, values, strict=True)
        ]
