"""Mapper protocol.

Bulk materializers implement this interface. A ResultSet rewinds its cursor
and hands map_many a lazy iterator over the remaining converted rows.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Protocol, TypeVar

T = TypeVar("T", covariant=True)


class Mapper(Protocol[T]):
    """Base mapper protocol."""

    def map_many(self, rows: Iterable[dict[str, Any]]) -> T:
        """Fold rows into a single in-memory structure."""
        ...
