"""Result set.

A ResultSet wraps a RowSource, converts fetched values according to its
conversion table, and reshapes the rows into lists, pairs and associative
trees. It owns exactly one cursor and is not safe for concurrent use.
"""

from __future__ import annotations

import logging
import weakref
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import TracebackType
from typing import Any

from row_set.adapters.protocol import RowSource
from row_set.core.config import ResultSetConfig
from row_set.core.conversion import convert, convert_row, derive_type
from row_set.core.enums import ColumnType, DatabaseBackend
from row_set.core.exceptions import ResultReleasedError
from row_set.core.iterator import ResultIterator
from row_set.core.source import open_source
from row_set.mapping.assoc import AssocMapper
from row_set.mapping.flat import PairsMapper, RowsMapper
from row_set.mapping.plan import compile_descriptor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColumnMeta:
    """Metadata for one result column."""

    name: str
    native_type: str | None
    type: ColumnType | None


def _release_source(source: RowSource) -> None:
    """Release a source, logging instead of raising on failure."""
    try:
        source.release()
    except Exception:
        logger.warning("Releasing row source %r failed", source, exc_info=True)


def _coerce_type(column_type: Any) -> Any:
    """Map enum values such as "integer" to ColumnType; leave unknown tags alone."""
    if isinstance(column_type, ColumnType):
        return column_type
    try:
        return ColumnType(column_type)
    except ValueError:
        return column_type


class ResultSet:
    """Typed, reshapeable view over a row source.

    Args:
        source: The row source to read from. The result set takes ownership
            and releases it exactly once.
        config: Descriptor tokens and initial conversion table.

    Usage::

        with ResultSet(source) as result:
            result.set_conversion("id", ColumnType.INTEGER)
            tree = result.fetch_assoc("category,*")
    """

    def __init__(self, source: RowSource, config: ResultSetConfig | None = None) -> None:
        self._source = source
        self._config = config or ResultSetConfig()
        self._conversions: dict[str, Any] = dict(self._config.conversions)
        self._meta: dict[str, ColumnMeta] | None = None
        self._finalizer = weakref.finalize(self, _release_source, source)
        if self._config.detect_types:
            self.set_conversion(True)

    @classmethod
    def from_query(
        cls,
        driver: str | DatabaseBackend,
        connection: Any,
        sql: str,
        params: dict[str, Any] | None = None,
        config: ResultSetConfig | None = None,
    ) -> ResultSet:
        """Execute sql through the driver's row source and wrap the result."""
        return cls(open_source(driver, connection, sql, params), config)

    @property
    def source(self) -> RowSource:
        return self._source

    @property
    def released(self) -> bool:
        return not self._finalizer.alive

    # --- Lifetime ---

    def release(self) -> None:
        """Release the underlying source. Safe to call any number of times."""
        self._finalizer()

    def __enter__(self) -> ResultSet:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.release()

    # --- Conversion ---

    def set_conversion(
        self,
        column: str | Mapping[str, Any] | bool,
        column_type: Any = None,
    ) -> None:
        """Set the conversion for one column, replace the table, or auto-detect.

        ``set_conversion("id", ColumnType.INTEGER)`` sets one column (a None
        type removes it). ``set_conversion({...})`` replaces the whole table.
        ``set_conversion(True)`` derives types from the source's column
        metadata and merges them into the table.
        """
        if column is True:
            for meta in self._load_meta().values():
                if meta.type is not None:
                    self._conversions[meta.name] = meta.type
        elif isinstance(column, Mapping):
            self._conversions = {name: _coerce_type(tag) for name, tag in column.items()}
        elif isinstance(column, str):
            if column_type is None:
                self._conversions.pop(column, None)
            else:
                self._conversions[column] = _coerce_type(column_type)
        else:
            raise TypeError(f"Expected a column name, a mapping or True, got {column!r}")

    def get_conversion(self, column: str) -> Any:
        """Return the conversion type for a column, or None."""
        return self._conversions.get(column)

    @property
    def conversions(self) -> dict[str, Any]:
        return dict(self._conversions)

    # --- Cursor ---

    def seek(self, position: int) -> bool:
        """Move the cursor to a 0-based row position. False if the source cannot."""
        self._check_open()
        return bool(self._source.seek(position))

    def rewind(self, position: int = 0) -> None:
        """Best-effort seek; on failure the cursor stays where it is.

        A source whose seek raises is treated like one that returns False.
        """
        self._check_open()
        try:
            moved = bool(self._source.seek(position))
        except Exception:
            logger.debug("Seek to row %d raised", position, exc_info=True)
            moved = False
        if not moved:
            logger.debug("Seek to row %d failed, continuing from current position", position)

    def row_count(self) -> int:
        self._check_open()
        return self._source.row_count()

    def __len__(self) -> int:
        return self.row_count()

    def fetch_row(self) -> dict[str, Any] | None:
        """Fetch the next row with conversions applied, or None when exhausted."""
        self._check_open()
        row = self._source.fetch_next()
        if row is None:
            return None
        if self._conversions:
            convert_row(row, self._conversions)
        return row

    def fetch_scalar(self, default: Any = None) -> Any:
        """Fetch the first column of the next row, or default when exhausted.

        Pass a sentinel as default to tell a NULL value from exhaustion.
        """
        self._check_open()
        row = self._source.fetch_next()
        if not row:
            return default
        column, value = next(iter(row.items()))
        if column in self._conversions:
            return convert(value, self._conversions[column])
        return value

    def _rows(self) -> Iterator[dict[str, Any]]:
        """Rewind, then yield converted rows until exhaustion."""
        self.rewind()
        while True:
            row = self.fetch_row()
            if row is None:
                return
            yield row

    # --- Bulk materializers ---

    def fetch_all(self) -> list[Any]:
        """Fetch all rows.

        Single-column results collapse to a list of that column's values.
        """
        return RowsMapper().map_many(self._rows())

    def fetch_pairs(
        self,
        key: str | None = None,
        value: str | None = None,
    ) -> dict[Any, Any] | list[Any]:
        """Fetch all rows as ``{row[key]: row[value]}``.

        With no arguments the first two columns are used. With only
        ``value`` a list of that column's values is returned.

        Raises:
            ArgumentCombinationError: if key is given without value.
            InsufficientColumnsError: if auto-detection finds < 2 columns.
            UnknownColumnError: if a named column is missing.
        """
        return PairsMapper(key, value).map_many(self._rows())

    def fetch_assoc(self, descriptor: str) -> dict[Any, Any] | list[Any]:
        """Fetch all rows as an associative tree shaped by descriptor.

        Descriptor ``"a,*,b,#,c"`` builds
        ``data[row.a][index][row.b]`` = row with ``["c"][row.c]`` = row.

        Raises:
            DescriptorError: if the descriptor is malformed.
            UnknownColumnError: if it names a column the result lacks.
        """
        plan = compile_descriptor(
            descriptor,
            separator=self._config.separator,
            wildcard=self._config.wildcard,
            record=self._config.record,
        )
        return AssocMapper(plan).map_many(self._rows())

    # --- Metadata ---

    def _load_meta(self) -> dict[str, ColumnMeta]:
        if self._meta is None:
            self._check_open()
            self._meta = {
                info.name: ColumnMeta(info.name, info.native_type, derive_type(info.native_type))
                for info in self._source.discover_columns()
            }
        return self._meta

    def field_names(self) -> list[str]:
        """Column names in result order."""
        return list(self._load_meta())

    def field_meta(self, name: str) -> ColumnMeta | None:
        return self._load_meta().get(name)

    # --- Iteration ---

    def iterate(self, offset: int = 0, limit: int | None = None) -> ResultIterator:
        """Iterate rows from offset, yielding at most limit rows."""
        return ResultIterator(self, offset, limit)

    def __iter__(self) -> ResultIterator:
        return self.iterate()

    def _check_open(self) -> None:
        if self.released:
            raise ResultReleasedError()
