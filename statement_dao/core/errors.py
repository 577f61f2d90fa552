"""Exceptions raised by statement DAOs."""

from __future__ import annotations

from typing import Optional, Sequence


class DaoError(Exception):
    """Base class for statement DAO errors."""


class ConfigurationError(DaoError):
    """Raised when a DAO is used before it is fully configured.

    Covers a missing database handle, a missing statement map, and statement
    keys that are absent from the map or map to empty SQL text.
    """

    def __init__(self, message: str, *, key: Optional[str] = None):
        super().__init__(message)
        self.key = key

    @classmethod
    def missing_statement(cls, key: str) -> ConfigurationError:
        return cls(f'No SQL statement found for statement key "{key}".', key=key)


class InvalidParameterError(DaoError, TypeError):
    """Raised when a parameter value has none of the accepted shapes."""

    def __init__(self, accepted: Sequence[str], actual: str):
        self.accepted = tuple(accepted)
        self.actual = actual
        if len(self.accepted) > 1:
            shapes = ", ".join(self.accepted[:-1]) + f" or {self.accepted[-1]}"
        else:
            shapes = "".join(self.accepted)
        super().__init__(
            f"Parameters must be of type {shapes}; type passed was {actual}."
        )
