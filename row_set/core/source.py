"""Row source loading by backend name.

Driver modules are imported lazily so optional drivers are only required
when used.
"""

from __future__ import annotations

import importlib
from typing import Any

from row_set.core.enums import DatabaseBackend
from row_set.core.exceptions import AdapterError

# Backend -> (module_path, class_name)
_SOURCE_MAP: dict[DatabaseBackend, tuple[str, str]] = {
    DatabaseBackend.SQLITE: ("row_set.adapters.sqlite", "SqliteRowSource"),
    DatabaseBackend.POSTGRESQL: ("row_set.adapters.postgresql", "PostgresqlRowSource"),
}


def _load_source_class(driver: str | DatabaseBackend) -> Any:
    """Load a row source class by driver name."""
    try:
        backend = driver if isinstance(driver, DatabaseBackend) else DatabaseBackend(driver.lower())
    except ValueError as e:
        raise AdapterError(f"Unsupported database driver: {driver}") from e

    module_path, cls_name = _SOURCE_MAP[backend]
    try:
        module = importlib.import_module(module_path)
        return getattr(module, cls_name)
    except (ImportError, AttributeError) as e:
        raise AdapterError(f"Failed to load row source for '{backend.value}': {e}") from e


def open_source(
    driver: str | DatabaseBackend,
    connection: Any,
    sql: str,
    params: dict[str, Any] | None = None,
) -> Any:
    """Execute sql on connection and return the backend's row source."""
    source_cls = _load_source_class(driver)
    try:
        return source_cls(connection, sql, params)
    except ImportError as e:
        raise AdapterError(f"Driver for '{driver}' is not installed: {e}") from e
