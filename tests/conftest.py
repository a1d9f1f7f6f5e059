"""Test configuration and fixtures"""

import pytest
import tempfile
import shutil
import os
from datetime import datetime, timedelta, timezone
from pathlib import Path
from fastapi.testclient import TestClient

from issuetrack.lifecycle.engine import IssueLifecycle
from issuetrack.main import create_app
from issuetrack.storage.database import reset_database_globals
from issuetrack.storage.migrations import initialize_database
from issuetrack.storage.repository import InMemoryRepository
from issuetrack.storage.sql_repository import SqlAlchemyRepository


class FakeClock:
    """Clock that moves forward one second on every reading"""

    def __init__(self, start: datetime = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)):
        self.now = start
        self.readings = 0

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        self.readings += 1
        return self.now


@pytest.fixture
def temp_dir(monkeypatch):
    """Create a temporary directory for test isolation"""
    for var in ("ISSUETRACK_STORAGE", "ISSUETRACK_DATABASE_URL", "ISSUETRACK_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    temp_dir = tempfile.mkdtemp()
    original_cwd = os.getcwd()
    os.chdir(temp_dir)

    yield Path(temp_dir)

    os.chdir(original_cwd)
    shutil.rmtree(temp_dir, ignore_errors=True)

@pytest.fixture
def clock():
    return FakeClock()

@pytest.fixture
def repository():
    """Fresh in-memory repository seeded with users 1..3"""
    return InMemoryRepository()

@pytest.fixture
def lifecycle(repository, clock):
    return IssueLifecycle(repository, clock=clock)

@pytest.fixture
def client(clock):
    """Test client over an app backed by a fresh in-memory repository"""
    app = create_app(repository=InMemoryRepository(), clock=clock)
    with TestClient(app) as client:
        yield client

@pytest.fixture
def sqlite_db(temp_dir):
    """Migrated SQLite database in .issuetrack/ of a temp working directory"""
    reset_database_globals()
    initialize_database()

    try:
        yield temp_dir / ".issuetrack" / "database.db"
    finally:
        reset_database_globals()

@pytest.fixture
def sql_lifecycle(sqlite_db, clock):
    return IssueLifecycle(SqlAlchemyRepository(), clock=clock)
