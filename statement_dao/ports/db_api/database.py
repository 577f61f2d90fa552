"""DB-API adapter implementation for the core database port."""

from __future__ import annotations

import contextlib
from typing import Any, Mapping

from ...core.types import MaybeRow, QueryParams, RowMapping, Rows


class Database:
    """Thin DB-API wrapper that normalizes execute, row and rowcount behavior.

    The adapter only borrows the connection: committing, rolling back and
    pooling stay with the owner of `conn`.
    """

    def __init__(self, conn: Any):
        """Create database adapter.

        Args:
            conn: DB-API 2.0 connection object.
        """

        self._closed = False
        self.conn: Any | None = conn

    def _require_open_connection(self) -> Any:
        if self._closed or self.conn is None:
            raise RuntimeError("connection is closed")
        return self.conn

    def execute(self, sql: str, params: QueryParams = None) -> Any:
        """Execute SQL with optional parameters and return cursor."""

        conn = self._require_open_connection()
        cur = conn.cursor()
        try:
            if params is None:
                cur.execute(sql)
            else:
                cur.execute(sql, params)
        except BaseException:
            _close_cursor(cur)
            raise
        return cur

    def fetchone(self, sql: str, params: QueryParams = None) -> MaybeRow:
        """Execute query and return one normalized row mapping."""

        cur = self.execute(sql, params)
        with contextlib.closing(cur):
            row = cur.fetchone()
            if row is None:
                return None
            return row_to_mapping(cur, row)

    def fetchall(self, sql: str, params: QueryParams = None) -> Rows:
        """Execute query and return all rows as normalized mappings."""

        cur = self.execute(sql, params)
        with contextlib.closing(cur):
            return [row_to_mapping(cur, r) for r in cur.fetchall()]

    def update(self, sql: str, params: QueryParams = None) -> int:
        """Execute a write statement and return the affected-row count.

        Drivers report `-1` (or nothing) for statements without a row count,
        such as DDL; those count as 0.
        """

        cur = self.execute(sql, params)
        with contextlib.closing(cur):
            return affected_rows(cur)

    def close(self) -> None:
        """Close the underlying connection."""

        if self._closed:
            return
        conn = self.conn
        self._closed = True
        self.conn = None
        close = getattr(conn, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> Database:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.close()


def row_to_mapping(cursor: Any, row: Any) -> RowMapping:
    """Normalize a driver row object to a column-name mapping.

    Supports mapping rows directly and tuple/list rows via
    `cursor.description`.
    """

    if isinstance(row, Mapping):
        return row

    if isinstance(row, (tuple, list)):
        desc = getattr(cursor, "description", None)
        if not desc:
            raise TypeError(
                "Cursor has no description; cannot map tuple rows to dict."
            )
        cols = [d[0] for d in desc]
        return dict(zip(cols, row, strict=True))

    keys = getattr(row, "keys", None)
    if callable(keys):
        # sqlite3.Row and similar mapping-like row factories.
        return {key: row[key] for key in keys()}

    raise TypeError(f"Unsupported row type: {type(row)}")


def affected_rows(cursor: Any) -> int:
    """Return a cursor's row count clamped to a non-negative integer."""

    count = getattr(cursor, "rowcount", None)
    if not isinstance(count, int) or count < 0:
        return 0
    return count


def _close_cursor(cursor: Any) -> None:
    close = getattr(cursor, "close", None)
    if callable(close):
        close()
