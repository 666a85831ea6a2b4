"""Shared pytest fixtures for quickledger tests."""

import os
import tempfile
from datetime import datetime

import pytest
from dateutil import tz

from quickledger.config import QuickEntrySettings
from quickledger.database.factories import create_sqlite_database
from quickledger.database.memory import (
    InMemoryCategoryDirectory,
    InMemorySequenceStore,
    InMemoryTransactionSink,
)
from quickledger.domain.entities import CategoryRecord
from quickledger.domain.entry import QuickEntryService

USER = "alice"


@pytest.fixture
def settings():
    """Default settings, independent of QUICKLEDGER_* environment variables."""
    return QuickEntrySettings()


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def sample_categories():
    """A small directory covering expense and income categories."""
    return [
        CategoryRecord("101", "餐飲", "01", "早餐", frozenset({"早點"})),
        CategoryRecord("101", "餐飲", "02", "午餐", frozenset({"中餐", "lunch"})),
        CategoryRecord("101", "餐飲", "04", "咖啡", frozenset({"拿鐵", "coffee"})),
        CategoryRecord("102", "交通", "01", "計程車", frozenset({"小黃", "taxi"})),
        CategoryRecord("801", "薪資", "01", "薪水", frozenset({"薪資", "salary"})),
    ]


@pytest.fixture
def directory(sample_categories):
    """In-memory category directory for USER."""
    return InMemoryCategoryDirectory({USER: sample_categories})


@pytest.fixture
def sequence_store():
    return InMemorySequenceStore()


@pytest.fixture
def sink():
    return InMemoryTransactionSink()


@pytest.fixture
def service(directory, sequence_store, sink, settings):
    """QuickEntryService wired to in-memory collaborators."""
    return QuickEntryService(directory, sequence_store, sink, settings=settings)


@pytest.fixture
def fixed_now():
    """2025-07-15 12:30 in Taipei."""
    return datetime(2025, 7, 15, 12, 30, tzinfo=tz.gettz("Asia/Taipei"))


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
