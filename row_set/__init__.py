"""RowSet - typed result sets reshaped into lists, pairs and associative trees."""

from __future__ import annotations

from row_set.adapters.memory import MemoryRowSource
from row_set.adapters.protocol import ColumnInfo, RowSource
from row_set.adapters.sqlite import SqliteRowSource
from row_set.core.config import ResultSetConfig
from row_set.core.conversion import convert, derive_type
from row_set.core.enums import ColumnType, DatabaseBackend
from row_set.core.exceptions import (
    AdapterError,
    ArgumentCombinationError,
    DescriptorError,
    InsufficientColumnsError,
    MaterializationError,
    ResultReleasedError,
    RowSetError,
    SourceError,
    UnknownColumnError,
)
from row_set.core.iterator import ResultIterator
from row_set.core.result import ColumnMeta, ResultSet
from row_set.core.source import open_source

__all__ = [
    # Result set
    "ResultSet",
    "ResultIterator",
    "ColumnMeta",
    # Config
    "ResultSetConfig",
    # Conversion
    "convert",
    "derive_type",
    # Sources
    "RowSource",
    "ColumnInfo",
    "MemoryRowSource",
    "SqliteRowSource",
    "open_source",
    # Enums
    "ColumnType",
    "DatabaseBackend",
    # Exceptions
    "RowSetError",
    "MaterializationError",
    "DescriptorError",
    "UnknownColumnError",
    "ArgumentCombinationError",
    "InsufficientColumnsError",
    "ResultReleasedError",
    "AdapterError",
    "SourceError",
]
