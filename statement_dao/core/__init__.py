"""Public core API for statement-keyed data access."""

from .contracts import AsyncDatabasePort, DatabasePort, ParameterSource
from .errors import ConfigurationError, DaoError, InvalidParameterError
from .models import bean_params, model_fields, row_to_model
from .params import (
    UNBOUND,
    BeanBinding,
    Binding,
    NamedBinding,
    PositionalBinding,
    Unbound,
    bind,
)
from .statement_dao import (
    DELETE_STATEMENT,
    INSERT_STATEMENT,
    SELECT_STATEMENT,
    UPDATE_STATEMENT,
    StatementDao,
)
from .statement_dao_async import AsyncStatementDao

__all__ = [
    "DatabasePort",
    "AsyncDatabasePort",
    "ParameterSource",
    "DaoError",
    "ConfigurationError",
    "InvalidParameterError",
    "Binding",
    "Unbound",
    "UNBOUND",
    "BeanBinding",
    "NamedBinding",
    "PositionalBinding",
    "bind",
    "StatementDao",
    "AsyncStatementDao",
    "SELECT_STATEMENT",
    "INSERT_STATEMENT",
    "UPDATE_STATEMENT",
    "DELETE_STATEMENT",
    "bean_params",
    "model_fields",
    "row_to_model",
]
