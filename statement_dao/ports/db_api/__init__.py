"""DB-API adapter exports."""

from .async_database import AsyncDatabase
from .database import Database

__all__ = [
    "AsyncDatabase",
    "Database",
]
