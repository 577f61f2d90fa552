"""Core port contracts used by adapters and statement DAOs."""

from __future__ import annotations

from typing import Any, List, Mapping, Protocol, runtime_checkable

from .types import QueryParams, RowMapping


class DatabasePort(Protocol):
    """Database handle behavior required by `StatementDao`."""

    def execute(self, sql: str, params: QueryParams = None) -> Any: ...

    def fetchall(self, sql: str, params: QueryParams = None) -> List[RowMapping]: ...

    def update(self, sql: str, params: QueryParams = None) -> int: ...


class AsyncDatabasePort(Protocol):
    """Database handle behavior required by `AsyncStatementDao`."""

    async def execute(self, sql: str, params: QueryParams = None) -> Any: ...

    async def fetchall(self, sql: str, params: QueryParams = None) -> List[RowMapping]: ...

    async def update(self, sql: str, params: QueryParams = None) -> int: ...


@runtime_checkable
class ParameterSource(Protocol):
    """Object that exposes its own named parameters.

    Models implementing this are bound through `to_params()` instead of field
    reflection.
    """

    def to_params(self) -> Mapping[str, Any]: ...
