"""In-memory row source over a list of rows."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from row_set.adapters.protocol import ColumnInfo

# Python type -> native type name understood by derive_type()
_PY_NATIVE: dict[type, str] = {
    bool: "BOOLEAN",
    int: "INTEGER",
    float: "REAL",
    str: "TEXT",
    bytes: "BLOB",
}


class MemoryRowSource:
    """Seekable row source backed by a list of row dicts.

    Rows are copied on fetch, so callers may mutate what they receive.
    """

    def __init__(
        self,
        rows: Iterable[dict[str, Any]],
        columns: list[ColumnInfo] | None = None,
    ) -> None:
        self._rows = list(rows)
        self._columns = columns
        self._position = 0
        self._released = False

    def seek(self, position: int) -> bool:
        if self._released or position < 0 or position > len(self._rows):
            return False
        self._position = position
        return True

    def row_count(self) -> int:
        return len(self._rows)

    def fetch_next(self) -> dict[str, Any] | None:
        if self._released or self._position >= len(self._rows):
            return None
        row = dict(self._rows[self._position])
        self._position += 1
        return row

    def release(self) -> None:
        self._released = True

    def discover_columns(self) -> list[ColumnInfo]:
        if self._columns is not None:
            return list(self._columns)
        if not self._rows:
            return []
        return [
            ColumnInfo(name, _PY_NATIVE.get(type(value)))
            for name, value in self._rows[0].items()
        ]
