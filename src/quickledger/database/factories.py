"""Database factory functions for creating database instances."""

from typing import Optional

from quickledger.config import resolve_database_path
from quickledger.database.sqlalchemy_db import SQLAlchemyDatabase


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite-backed database.

    Args:
        database_path: SQLite file; see ``resolve_database_path`` for the fallbacks
    """
    return SQLAlchemyDatabase(f"sqlite:///{resolve_database_path(database_path)}")
