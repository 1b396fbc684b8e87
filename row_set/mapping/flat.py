"""Flat row and key/value pair mappers."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from row_set.core.exceptions import (
    ArgumentCombinationError,
    InsufficientColumnsError,
    UnknownColumnError,
)


class RowsMapper:
    """Collects rows into a list.

    When rows have exactly one column the list holds that column's values
    instead of the rows themselves.
    """

    def map_many(self, rows: Iterable[dict[str, Any]]) -> list[Any]:
        iterator = iter(rows)
        first = next(iterator, None)
        if first is None:
            return []

        if len(first) == 1:
            column = next(iter(first))
            return [first[column]] + [row[column] for row in iterator]

        return [first, *iterator]


class PairsMapper:
    """Collects rows into a key -> value dict, or a list of values.

    Args:
        key: Column whose values become dict keys.
        value: Column whose values become dict values.

    With neither column given the first two columns of the result are used.
    With only ``value`` given the result is a list of that column's values.
    Later duplicate keys overwrite earlier ones.

    Raises:
        ArgumentCombinationError: if ``key`` is given without ``value``.
    """

    def __init__(self, key: str | None = None, value: str | None = None) -> None:
        if value is None and key is not None:
            raise ArgumentCombinationError()
        self._key = key
        self._value = value

    def map_many(self, rows: Iterable[dict[str, Any]]) -> dict[Any, Any] | list[Any]:
        iterator = iter(rows)
        first = next(iterator, None)
        if first is None:
            return [] if self._key is None and self._value is not None else {}

        key, value = self._resolve_columns(first)

        if key is None:
            return [first[value]] + [row[value] for row in iterator]

        data = {first[key]: first[value]}
        for row in iterator:
            data[row[key]] = row[value]
        return data

    def _resolve_columns(self, sample_row: dict[str, Any]) -> tuple[str | None, str]:
        """Pick key/value columns, validating them against the first row."""
        if self._value is None:
            if len(sample_row) < 2:
                raise InsufficientColumnsError(len(sample_row))
            key, value = list(sample_row)[:2]
            return key, value

        if self._value not in sample_row:
            raise UnknownColumnError(self._value, "value column")
        if self._key is not None and self._key not in sample_row:
            raise UnknownColumnError(self._key, "key column")
        return self._key, self._value
