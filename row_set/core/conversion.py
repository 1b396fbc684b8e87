"""Type conversion pipeline.

Maps column values to the primitive named by a ColumnType. Conversion is pure:
the same value and type always produce the same result.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any

from pydantic import TypeAdapter, ValidationError

from row_set.core.enums import ColumnType

logger = logging.getLogger(__name__)

_DATETIME_ADAPTER: TypeAdapter[datetime] = TypeAdapter(datetime)

_NUMERIC_PREFIX = re.compile(r"\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")

# Native type name fragments -> logical type, checked in order (SQLite affinity rules)
_NATIVE_RULES: tuple[tuple[str, ColumnType | None], ...] = (
    ("INTERVAL", None),
    ("POINT", None),
    ("SERIAL", ColumnType.COUNTER),
    ("BOOL", ColumnType.BOOL),
    ("INT", ColumnType.INTEGER),
    ("CHAR", ColumnType.TEXT),
    ("CLOB", ColumnType.TEXT),
    ("TEXT", ColumnType.TEXT),
    ("BLOB", ColumnType.BINARY),
    ("BYTEA", ColumnType.BINARY),
    ("BINARY", ColumnType.BINARY),
    ("REAL", ColumnType.FLOAT),
    ("FLOA", ColumnType.FLOAT),
    ("DOUB", ColumnType.FLOAT),
    ("NUMERIC", ColumnType.FLOAT),
    ("DECIMAL", ColumnType.FLOAT),
    ("TIMESTAMP", ColumnType.DATETIME),
    ("DATETIME", ColumnType.DATETIME),
    ("DATE", ColumnType.DATE),
)


def derive_type(native_type: str | None) -> ColumnType | None:
    """Derive a logical type from a native type name.

    Returns None for unknown or missing native types.
    """
    if not native_type:
        return None
    name = native_type.upper()
    for fragment, column_type in _NATIVE_RULES:
        if fragment in name:
            return column_type
    return None


def _numeric_prefix(value: Any) -> str | None:
    """Return the leading numeric part of value's text, or None if it has none."""
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8", errors="replace")
    match = _NUMERIC_PREFIX.match(str(value))
    if match is None:
        logger.warning("Non-numeric value %r converted to 0", value)
        return None
    return match.group(0).strip()


def _to_int(value: Any) -> int:
    # "12abc" -> 12, "abc" -> 0, never raises
    if not isinstance(value, (str, bytes, bytearray)):
        try:
            return int(value)
        except (TypeError, ValueError, OverflowError):
            pass
    number = _numeric_prefix(value)
    if number is None:
        return 0
    try:
        return int(number)
    except ValueError:
        pass
    try:
        return int(float(number))
    except OverflowError:
        logger.warning("Value %r out of integer range, converted to 0", value)
        return 0


def _to_float(value: Any) -> float:
    if not isinstance(value, (str, bytes, bytearray)):
        try:
            return float(value)
        except (TypeError, ValueError):
            pass
    number = _numeric_prefix(value)
    return float(number) if number is not None else 0.0


def _to_bool(value: Any) -> bool:
    # "0" and "" are false, as database drivers return booleans as text
    if isinstance(value, (str, bytes, bytearray)):
        return value not in ("", "0", b"", b"0")
    return bool(value)


def _to_text(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return value.decode("utf-8")
    return str(value)


def _to_binary(value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    return str(value).encode("utf-8")


def _to_timestamp(value: Any) -> int | None:
    # Best-effort: accepts whatever pydantic's lax datetime parsing accepts.
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    try:
        parsed = _DATETIME_ADAPTER.validate_python(value)
    except ValidationError:
        logger.warning("Unparseable date value %r, converted to None", value)
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp())


_CONVERTERS = {
    ColumnType.TEXT: _to_text,
    ColumnType.BINARY: _to_binary,
    ColumnType.BOOL: _to_bool,
    ColumnType.INTEGER: _to_int,
    ColumnType.COUNTER: _to_int,
    ColumnType.FLOAT: _to_float,
    ColumnType.DATE: _to_timestamp,
    ColumnType.DATETIME: _to_timestamp,
}


def convert(value: Any, column_type: Any) -> Any:
    """Coerce a raw value to the primitive named by column_type.

    None and False are returned unchanged for every type, as are values
    whose type is not a ColumnType.
    """
    if value is None or value is False:
        return value
    converter = _CONVERTERS.get(column_type) if isinstance(column_type, ColumnType) else None
    if converter is None:
        return value
    return converter(value)


def convert_row(row: dict[str, Any], table: dict[str, Any]) -> dict[str, Any]:
    """Convert every column of row that has an entry in table, in place."""
    for column, value in row.items():
        if column in table:
            row[column] = convert(value, table[column])
    return row
