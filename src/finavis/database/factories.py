"""Factories for the ledger database.

The ledger file holds the journal, the closed-period history and the
fiscal period settings, so one file is one set of books.
"""

import os
from pathlib import Path
from typing import Optional

from finavis.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV = "FINAVIS_DB_PATH"
DEFAULT_LEDGER_PATH = Path.home() / ".finavis" / "finavis.db"


def resolve_ledger_path(database_path: Optional[str] = None) -> Path:
    """Pick the ledger file: explicit path, then FINAVIS_DB_PATH, then the default."""
    chosen = database_path or os.environ.get(DB_PATH_ENV)
    return Path(chosen).expanduser() if chosen else DEFAULT_LEDGER_PATH


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Open the books stored in a SQLite file, creating its directory if needed."""
    ledger = resolve_ledger_path(database_path)
    ledger.parent.mkdir(parents=True, exist_ok=True)
    return SQLAlchemyDatabase(f"sqlite:///{ledger}")


def create_memory_database() -> SQLAlchemyDatabase:
    """Books that live only as long as the process."""
    return SQLAlchemyDatabase("sqlite:///:memory:")
