"""Row source protocol.

Every row source MUST implement this protocol. A ResultSet consumes a source
only through these five methods, so any cursor-like object can back it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class ColumnInfo:
    """A column as reported by a row source."""

    name: str
    native_type: str | None = None


@runtime_checkable
class RowSource(Protocol):
    """Cursor-like supplier of rows."""

    def seek(self, position: int) -> bool:
        """Move the cursor to a 0-based position. False if out of range or unsupported."""
        ...

    def row_count(self) -> int:
        """Number of rows in the result."""
        ...

    def fetch_next(self) -> dict[str, Any] | None:
        """Return the next row and advance, or None when exhausted."""
        ...

    def release(self) -> None:
        """Free resources held by the source. Must be idempotent."""
        ...

    def discover_columns(self) -> list[ColumnInfo]:
        """Describe the result's columns in order."""
        ...
