"""Database layer for quickledger."""

from quickledger.database.base import (
    CategoryDirectory,
    Database,
    SequenceStore,
    TransactionSink,
)
from quickledger.database.factories import create_sqlite_database

__all__ = [
    "CategoryDirectory",
    "Database",
    "SequenceStore",
    "TransactionSink",
    "create_sqlite_database",
]
