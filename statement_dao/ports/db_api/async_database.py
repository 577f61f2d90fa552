"""Async DB adapter implementation for the core async database port."""

from __future__ import annotations

import inspect
from typing import Any

from ...core._async_utils import _maybe_await
from ...core.types import MaybeRow, QueryParams, Rows
from .database import affected_rows, row_to_mapping


class AsyncDatabase:
    """Async database wrapper that normalizes execute, row and rowcount behavior.

    Works with async drivers (e.g. `aiosqlite`, `psycopg.AsyncConnection`) and
    with plain sync DB-API connections, awaiting results only when needed.
    """

    def __init__(self, conn: Any):
        """Create async database adapter.

        Args:
            conn: Async (or sync) DB connection object.
        """

        self._closed = False
        self.conn = conn

    def _require_open_connection(self) -> Any:
        if self._closed:
            raise RuntimeError("connection is closed")
        return self.conn

    async def execute(self, sql: str, params: QueryParams = None) -> Any:
        """Execute SQL with optional parameters and return cursor."""

        conn = self._require_open_connection()
        cur = await _maybe_await(conn.cursor())
        try:
            if params is None:
                await _maybe_await(cur.execute(sql))
            else:
                await _maybe_await(cur.execute(sql, params))
        except BaseException:
            await _close_cursor(cur)
            raise
        return cur

    async def fetchone(self, sql: str, params: QueryParams = None) -> MaybeRow:
        """Execute query and return one normalized row mapping."""

        cur = await self.execute(sql, params)
        try:
            row = await _maybe_await(cur.fetchone())
            if row is None:
                return None
            return row_to_mapping(cur, row)
        finally:
            await _close_cursor(cur)

    async def fetchall(self, sql: str, params: QueryParams = None) -> Rows:
        """Execute query and return all rows as normalized mappings."""

        cur = await self.execute(sql, params)
        try:
            rows = await _maybe_await(cur.fetchall())
            return [row_to_mapping(cur, r) for r in rows]
        finally:
            await _close_cursor(cur)

    async def update(self, sql: str, params: QueryParams = None) -> int:
        """Execute a write statement and return the affected-row count."""

        cur = await self.execute(sql, params)
        try:
            return affected_rows(cur)
        finally:
            await _close_cursor(cur)

    def close(self) -> None:
        """Close a sync connection.

        Raises:
            RuntimeError: If the connection closes asynchronously; use
                `aclose()` for those.
        """

        if self._closed:
            return
        close = getattr(self.conn, "close", None)
        if callable(close) and inspect.iscoroutinefunction(
            getattr(type(self.conn), "close", None)
        ):
            raise RuntimeError(
                "connection closes asynchronously; use `await aclose()` instead"
            )
        self._closed = True
        if callable(close):
            close()

    async def aclose(self) -> None:
        """Close the underlying connection, awaiting when required."""

        if self._closed:
            return
        self._closed = True
        close = getattr(self.conn, "close", None)
        if callable(close):
            await _maybe_await(close())

    async def __aenter__(self) -> AsyncDatabase:
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        await self.aclose()


async def _close_cursor(cursor: Any) -> None:
    close = getattr(cursor, "close", None)
    if callable(close):
        await _maybe_await(close())
