"""Public port exports for concrete adapter implementations."""

from .db_api import AsyncDatabase, Database

__all__ = [
    "Database",
    "AsyncDatabase",
]
