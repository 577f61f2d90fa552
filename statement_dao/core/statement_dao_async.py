"""Statement-keyed data access object for async database handles."""

from __future__ import annotations

import logging
from typing import Any, List, TypeVar

from .contracts import AsyncDatabasePort
from .statement_dao import (
    DELETE_STATEMENT,
    INSERT_STATEMENT,
    SELECT_STATEMENT,
    UPDATE_STATEMENT,
    StatementDaoBase,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AsyncStatementDao(StatementDaoBase[T, AsyncDatabasePort]):
    """Async counterpart of `StatementDao` with identical dispatch rules."""

    async def select(self, params: Any = None) -> List[T]:
        return await self.select_by_statement(SELECT_STATEMENT, params)

    async def select_by_statement(self, key: str, params: Any = None) -> List[T]:
        return await self.select_sql(self.resolve_statement(key), params)

    async def select_sql(self, sql: str, params: Any = None) -> List[T]:
        binding = self._bind(params)
        db = self._require_db()
        logger.debug("Running async query with %s binding.", binding.kind)
        rows = await db.fetchall(sql, binding.params())
        return self._map_rows(rows)

    async def insert(self, dto: Any = None) -> int:
        return await self.insert_by_statement(INSERT_STATEMENT, dto)

    async def insert_by_statement(self, key: str, dto: Any = None) -> int:
        return await self.execute(self.resolve_statement(key), dto)

    async def update(self, dto: Any = None) -> int:
        return await self.update_by_statement(UPDATE_STATEMENT, dto)

    async def update_by_statement(self, key: str, dto: Any = None) -> int:
        return await self.execute(self.resolve_statement(key), dto)

    async def delete(self, dto: Any = None) -> int:
        return await self.delete_by_statement(DELETE_STATEMENT, dto)

    async def delete_by_statement(self, key: str, dto: Any = None) -> int:
        return await self.execute(self.resolve_statement(key), dto)

    async def execute(self, sql: str, param: Any = None) -> int:
        """Run a write statement and return the affected-row count."""

        binding = self._bind(param)
        db = self._require_db()
        count = await db.update(sql, binding.params())
        logger.debug(
            "Async statement with %s binding affected %d row(s).", binding.kind, count
        )
        return count
