"""PostgreSQL row source using psycopg (v3+) server-side cursors."""

from __future__ import annotations

import logging
import uuid
from typing import Any

from row_set.adapters.protocol import ColumnInfo
from row_set.core.exceptions import SourceError

logger = logging.getLogger(__name__)


class PostgresqlRowSource:
    """Row source over a named, scrollable psycopg cursor.

    Server-side cursors live inside a transaction; on an autocommit
    connection pass ``withhold=True``. Each source declares its own cursor,
    named uniquely unless ``name`` is given.
    """

    def __init__(
        self,
        connection: Any,
        sql: str,
        params: dict[str, Any] | None = None,
        *,
        name: str | None = None,
        withhold: bool = False,
    ) -> None:
        import psycopg
        import psycopg.rows

        self._connection = connection
        self._sql = sql
        self._params = params
        self._error = psycopg.Error
        self.name = name or f"row_set_{uuid.uuid4().hex}"
        try:
            self._cursor: Any = connection.cursor(
                self.name,
                row_factory=psycopg.rows.dict_row,
                scrollable=True,
                withhold=withhold,
            )
            self._cursor.execute(sql, params)
        except psycopg.Error as e:
            raise SourceError(f"PostgreSQL execution failed: {e}") from e

    def seek(self, position: int) -> bool:
        if self._cursor is None or position < 0:
            return False
        try:
            self._cursor.scroll(position, mode="absolute")
        except (self._error, IndexError) as e:
            logger.debug("Seek to %d failed: %s", position, e)
            return False
        return True

    def row_count(self) -> int:
        try:
            with self._connection.cursor() as cur:
                cur.execute(f"SELECT COUNT(*) FROM ({self._sql}) AS _counted", self._params)
                row = cur.fetchone()
        except self._error as e:
            raise SourceError(f"PostgreSQL row count failed: {e}") from e
        return int(row[0])

    def fetch_next(self) -> dict[str, Any] | None:
        if self._cursor is None:
            return None
        try:
            row = self._cursor.fetchone()
        except self._error as e:
            raise SourceError(f"PostgreSQL fetch failed: {e}") from e
        return dict(row) if row is not None else None

    def release(self) -> None:
        if self._cursor is not None:
            cursor, self._cursor = self._cursor, None
            cursor.close()

    def discover_columns(self) -> list[ColumnInfo]:
        if self._cursor is None or self._cursor.description is None:
            return []
        types = self._connection.adapters.types
        columns = []
        for desc in self._cursor.description:
            info = types.get(desc.type_code)
            columns.append(ColumnInfo(desc.name, info.name if info is not None else None))
        return columns
