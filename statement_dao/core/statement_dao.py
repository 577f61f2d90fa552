"""Statement-keyed data access object for sync database handles."""

from __future__ import annotations

import logging
from typing import Any, Generic, Iterable, List, Optional, Type, TypeVar

from .contracts import DatabasePort
from .errors import ConfigurationError
from .models import require_model_class, row_to_model
from .params import Binding, bind
from .types import RowMapping, StatementMap

logger = logging.getLogger(__name__)

T = TypeVar("T")
DB = TypeVar("DB")

SELECT_STATEMENT = "select"
INSERT_STATEMENT = "insert"
UPDATE_STATEMENT = "update"
DELETE_STATEMENT = "delete"


class StatementDaoBase(Generic[T, DB]):
    """Configuration and dispatch shared by sync and async statement DAOs.

    Holds the optional model class, the database handle and the statement map.
    All three can be replaced after construction; they are only required to be
    set by the time an operation runs.
    """

    def __init__(
        self,
        model: Optional[Type[T]] = None,
        *,
        db: Optional[DB] = None,
        statements: Optional[StatementMap] = None,
    ):
        """Create a DAO.

        Args:
            model: Class that result rows map into and whose instances bind
                their fields as named parameters. `None` returns rows as dicts.
            db: Database handle used for every call.
            statements: Mapping of statement key to SQL text.
        """

        if model is not None:
            require_model_class(model)
        self._model = model
        self._db = db
        self._statements = statements

    @property
    def model(self) -> Optional[Type[T]]:
        return self._model

    @model.setter
    def model(self, model: Optional[Type[T]]) -> None:
        if model is not None:
            require_model_class(model)
        self._model = model

    @property
    def db(self) -> Optional[DB]:
        return self._db

    @db.setter
    def db(self, db: Optional[DB]) -> None:
        self._db = db

    @property
    def statements(self) -> Optional[StatementMap]:
        return self._statements

    @statements.setter
    def statements(self, statements: Optional[StatementMap]) -> None:
        self._statements = statements

    def resolve_statement(self, key: str) -> str:
        """Return the SQL text configured for a statement key.

        Raises:
            ConfigurationError: If no statement map is configured, or the key is
                missing or maps to empty SQL text.
        """

        if self._statements is None:
            raise ConfigurationError(
                f'No statement map configured; cannot resolve statement key "{key}".',
                key=key,
            )
        sql = self._statements.get(key)
        if not sql:
            raise ConfigurationError.missing_statement(key)
        logger.debug('Resolved statement key "%s".', key)
        return sql

    def _require_db(self) -> DB:
        if self._db is None:
            raise ConfigurationError("Database handle is not configured.")
        return self._db

    def _bind(self, params: Any) -> Binding:
        return bind(params, self._model)

    def _map_rows(self, rows: Iterable[RowMapping]) -> List[Any]:
        if self._model is None:
            return [dict(row) for row in rows]
        return [row_to_model(self._model, row) for row in rows]


class StatementDao(StatementDaoBase[T, DatabasePort]):
    """Run statement-map SQL against a `DatabasePort` and map rows to `T`.

    Parameters may be a `T` instance (fields bound by name), a mapping (keys
    bound by name), a list/tuple (bound by position), an explicit `Binding`,
    or `None`. Selects return `T` instances, or plain dicts when no model is
    configured. Writes return the number of affected rows.
    """

    def select(self, params: Any = None) -> List[T]:
        """Run the ``"select"`` statement."""

        return self.select_by_statement(SELECT_STATEMENT, params)

    def select_by_statement(self, key: str, params: Any = None) -> List[T]:
        """Run the statement stored under `key` and map its rows.

        Raises:
            ConfigurationError: If `key` has no SQL or the DAO is unconfigured.
            InvalidParameterError: If `params` has an unsupported shape.
        """

        return self.select_sql(self.resolve_statement(key), params)

    def select_sql(self, sql: str, params: Any = None) -> List[T]:
        """Run an ad hoc query and map its rows.

        An empty result is always an empty list.
        """

        binding = self._bind(params)
        db = self._require_db()
        logger.debug("Running query with %s binding.", binding.kind)
        return self._map_rows(db.fetchall(sql, binding.params()))

    def insert(self, dto: Any = None) -> int:
        """Run the ``"insert"`` statement."""

        return self.insert_by_statement(INSERT_STATEMENT, dto)

    def insert_by_statement(self, key: str, dto: Any = None) -> int:
        return self.execute(self.resolve_statement(key), dto)

    def update(self, dto: Any = None) -> int:
        """Run the ``"update"`` statement."""

        return self.update_by_statement(UPDATE_STATEMENT, dto)

    def update_by_statement(self, key: str, dto: Any = None) -> int:
        """Run the statement stored under `key`.

        Without `dto` this runs arbitrary DDL/DML with no parameters.
        """

        return self.execute(self.resolve_statement(key), dto)

    def delete(self, dto: Any = None) -> int:
        """Run the ``"delete"`` statement."""

        return self.delete_by_statement(DELETE_STATEMENT, dto)

    def delete_by_statement(self, key: str, dto: Any = None) -> int:
        return self.execute(self.resolve_statement(key), dto)

    def execute(self, sql: str, param: Any = None) -> int:
        """Run an INSERT, UPDATE, DELETE or DDL statement.

        Args:
            sql: SQL text to execute.
            param: Model instance, mapping, list/tuple, `Binding`, or `None`
                for no parameters.

        Returns:
            Number of affected rows (0 when the driver reports none).

        Raises:
            InvalidParameterError: If `param` has an unsupported shape.
        """

        binding = self._bind(param)
        db = self._require_db()
        count = db.update(sql, binding.params())
        logger.debug("Statement with %s binding affected %d row(s).", binding.kind, count)
        return count
