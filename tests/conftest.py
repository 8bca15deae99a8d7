"""Pytest fixtures and configuration for todaylist tests."""

import pytest
import uuid
from datetime import datetime, timezone
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from todaylist.database.database import Base
from todaylist.database import models  # noqa: F401
from todaylist.database.repository import TaskRepository
from todaylist.database.settings_repository import SettingsRepository
from todaylist.engine.clock import FixedClock
from todaylist.models.task import Task


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def db_engine():
    """In-memory SQLite engine shared by every session of one test."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture(scope="function")
def db_session(session_factory):
    """Create a database session for testing."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def task_repository(db_session: Session):
    """Create a TaskRepository instance for testing."""
    return TaskRepository(db_session)


@pytest.fixture
def settings_repository(db_session: Session):
    """Create a SettingsRepository instance for testing."""
    return SettingsRepository(db_session)


@pytest.fixture
def now():
    """Fixed reference instant: 2025-06-15 12:00 UTC."""
    return datetime(2025, 6, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock(now):
    return FixedClock(now)


@pytest.fixture
def sample_task_base(now):
    """Base task data for creating test tasks.

    Returns a dict with default task attributes that can be overridden.
    """
    return {
        "id": str(uuid.uuid4()),
        "content": "Test Task",
        "is_completed": False,
        "order": 1.0,
        "created_at": now,
    }


@pytest.fixture
def sample_task(sample_task_base):
    """Create a sample Task object for testing."""
    return Task(**sample_task_base)


@pytest.fixture
def make_task(sample_task_base):
    """Factory for tasks with a fresh id and overridden fields."""
    def _make(**overrides) -> Task:
        return Task(**{**sample_task_base, "id": str(uuid.uuid4()), **overrides})
    return _make


@pytest.fixture
def test_client(db_session: Session, session_factory, fixed_clock, monkeypatch):
    """Create a FastAPI test client wired to the in-memory database and a fixed clock."""
    from todaylist.api.app import app, get_clock, get_reset_orchestrator
    from todaylist.database.database import get_db
    from todaylist.database.sources import SessionResetHourSource, SessionTaskSource
    from todaylist.engine.orchestrator import ResetOrchestrator

    monkeypatch.setenv("INIT_DB_ON_STARTUP", "false")
    monkeypatch.setenv("RESET_LOOP_ENABLED", "false")

    orchestrator = ResetOrchestrator(
        SessionTaskSource(session_factory),
        SessionResetHourSource(session_factory),
        clock=fixed_clock,
    )

    # Override the get_db dependency to use our test database session
    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Don't close the session here, let the fixture handle it

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: fixed_clock
    app.dependency_overrides[get_reset_orchestrator] = lambda: orchestrator

    with TestClient(app) as client:
        yield client

    # Clean up dependency overrides
    app.dependency_overrides.clear()
