"""Bounded forward iteration over a result set.

The iterator advances the result set's own cursor, so mixing it with direct
fetch_row() calls on the same result set skips rows for both.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from row_set.core.result import ResultSet

logger = logging.getLogger(__name__)


class ResultIterator:
    """One-shot iterator yielding at most ``limit`` rows starting at ``offset``.

    The seek to ``offset`` happens on the first advance and is best-effort:
    if the source cannot seek, iteration continues from the current position.
    """

    def __init__(self, result: ResultSet, offset: int = 0, limit: int | None = None) -> None:
        if offset < 0:
            raise ValueError(f"offset must be >= 0, got {offset}")
        if limit is not None and limit < 0:
            raise ValueError(f"limit must be >= 0, got {limit}")
        self._result = result
        self._offset = offset
        self._limit = limit
        self._started = False
        self._done = False
        self._yielded = 0

    @property
    def position(self) -> int:
        """Index, relative to offset, of the next row to be yielded."""
        return self._yielded

    def __iter__(self) -> ResultIterator:
        return self

    def __next__(self) -> dict[str, Any]:
        if self._done:
            raise StopIteration
        if not self._started:
            self._started = True
            self._result.rewind(self._offset)

        if self._limit is not None and self._yielded >= self._limit:
            self._done = True
            raise StopIteration

        row = self._result.fetch_row()
        if row is None:
            self._done = True
            raise StopIteration

        self._yielded += 1
        return row
