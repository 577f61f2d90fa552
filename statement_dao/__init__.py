"""Statement-keyed data access objects over DB-API connections."""

from .core import (
    DELETE_STATEMENT,
    INSERT_STATEMENT,
    SELECT_STATEMENT,
    UNBOUND,
    UPDATE_STATEMENT,
    AsyncDatabasePort,
    AsyncStatementDao,
    BeanBinding,
    Binding,
    ConfigurationError,
    DaoError,
    DatabasePort,
    InvalidParameterError,
    NamedBinding,
    ParameterSource,
    PositionalBinding,
    StatementDao,
    Unbound,
    bean_params,
    bind,
    model_fields,
    row_to_model,
)
from .ports import AsyncDatabase, Database

__all__ = [
    "StatementDao",
    "AsyncStatementDao",
    "Database",
    "AsyncDatabase",
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
    "bean_params",
    "model_fields",
    "row_to_model",
    "SELECT_STATEMENT",
    "INSERT_STATEMENT",
    "UPDATE_STATEMENT",
    "DELETE_STATEMENT",
]
