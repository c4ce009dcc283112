"""
Pytest configuration and shared fixtures for testing.

Provides reusable test fixtures:
- test_db: In-memory SQLite database for isolated testing
- test_client: FastAPI TestClient for API integration tests
- memory_store: Dict-backed key-value store
- make_shift: Factory for Shift objects with sensible defaults
"""

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# ruff: noqa: E402
from app.core.models import Shift, ShiftType
from app.core.storage import InMemoryKeyValueStore, SqlKeyValueStore
from app.database.database import Base, get_db
from app.main import app


@pytest.fixture(scope="function")
def test_db():
    """
    Create an in-memory SQLite database for testing.

    StaticPool keeps a single connection, so the TestClient's worker thread
    sees the same in-memory database as the test itself.

    Yields:
        SQLAlchemy Session: Database session for test use
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()

    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def sql_store(test_db):
    """Key-value store over the in-memory test database."""
    return SqlKeyValueStore(test_db)


@pytest.fixture(scope="function")
def memory_store():
    return InMemoryKeyValueStore()


@pytest.fixture(scope="function")
def test_client(test_db):
    """
    Create FastAPI TestClient with test database dependency override.

    Args:
        test_db: Test database session fixture

    Yields:
        TestClient: FastAPI test client for API testing
    """

    def override_get_db():
        try:
            yield test_db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def make_shift():
    """
    Factory for shifts.

    Usage:
        make_shift("08:00", "17:00", break_minutes=60)
    """

    def _make(
        start: str = "08:00",
        end: str = "17:00",
        break_minutes: int = 0,
        type: ShiftType = ShiftType.WORK,
        note: str = "",
        **kwargs,
    ) -> Shift:
        return Shift(start=start, end=end, break_minutes=break_minutes, type=type, note=note, **kwargs)

    return _make
