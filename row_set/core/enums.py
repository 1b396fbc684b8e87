"""Column type and database backend enumerations."""

from __future__ import annotations

from enum import Enum


class ColumnType(Enum):
    """Logical column types driving value conversion on fetch."""

    TEXT = "text"
    BINARY = "binary"
    BOOL = "bool"
    INTEGER = "integer"
    FLOAT = "float"
    COUNTER = "counter"
    DATE = "date"
    DATETIME = "datetime"


class DatabaseBackend(Enum):
    """Backends with a bundled query row source."""

    SQLITE = "sqlite"
    POSTGRESQL = "postgresql"
