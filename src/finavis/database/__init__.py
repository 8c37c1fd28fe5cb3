"""Database layer for finavis application."""

from finavis.database.base import Database
from finavis.database.factories import create_memory_database, create_sqlite_database

__all__ = ["Database", "create_memory_database", "create_sqlite_database"]
