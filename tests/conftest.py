"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory SQLite status store, settings factories, an assembled
tracking engine with in-process locks, and fake jobs / queue handles.
Dependencies: pytest, sqlalchemy
System role: Test infrastructure and fixture management
"""

import uuid
from typing import Any, Callable

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from job_status.boundary.db.base import Base
from job_status.boundary.db.CRUD.job_status_crud import JobStatusCRUD
from job_status.boundary.db.CRUD.job_status_history_crud import JobStatusHistoryCRUD
from job_status.boundary.db.models import JobStatusHistoryModel, JobStatusModel  # noqa: F401
from job_status.boundary.lock import InMemoryLockProvider
from job_status.configs import JobStatusSettings, Settings
from job_status.dependencies import JobStatusTracking


class FakeQueueJob:
    """Runner-side job handle with controllable attempts and payload."""

    def __init__(
        self,
        job_status_id: uuid.UUID | None = None,
        attempts: int = 1,
        max_tries: int | None = 3,
        job_id: str = "job-123",
        queue: str = "default",
        failed: bool = False,
    ) -> None:
        self.job_status_id = job_status_id
        self._attempts = attempts
        self._max_tries = max_tries
        self.job_id = job_id
        self.queue = queue
        self.failed = failed

    def attempts(self) -> int:
        return self._attempts

    def max_tries(self) -> int | None:
        return self._max_tries

    def get_job_id(self) -> str:
        return self.job_id

    def get_queue(self) -> str:
        return self.queue

    def has_failed(self) -> bool:
        return self.failed

    def payload(self) -> dict[str, Any]:
        return {"job_status_id": str(self.job_status_id) if self.job_status_id else None}


class SampleJob:
    """Plain job participating in tracking through composition."""

    def __init__(self, tracking: JobStatusTracking, data: dict | None = None, prepare: bool = True) -> None:
        self.tracker = tracking.track(self)
        if prepare:
            self.tracker.prepare_status(data)

    def get_job_status_id(self):
        return self.tracker.get_job_status_id()


class UniqueSampleJob(SampleJob):
    """Job declaring a logical uniqueness key."""

    def __init__(self, tracking: JobStatusTracking, key: Any, **kwargs: Any) -> None:
        self.key = key
        super().__init__(tracking, **kwargs)

    def unique_id(self) -> Any:
        return self.key


@pytest.fixture
def engine():
    """
    Create in-memory SQLite database with all tables.

    Yields:
        Engine: Test engine (single shared connection)
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine) -> sessionmaker:
    """Session factory bound to the test database."""
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db_session(session_factory):
    """Open session for direct assertions against the store."""
    session = session_factory()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def job_status_settings() -> JobStatusSettings:
    """Tracking settings with defaults (everything tracked)."""
    return JobStatusSettings()


@pytest.fixture
def lock_provider() -> InMemoryLockProvider:
    return InMemoryLockProvider()


@pytest.fixture
def make_tracking(session_factory, lock_provider) -> Callable[..., JobStatusTracking]:
    """
    Build a tracking engine with overridden job-status settings.

    Usage:
        tracking = make_tracking(track_history=False, event_manager="legacy")
    """

    def _make(**overrides: Any) -> JobStatusTracking:
        settings = Settings(job_status=JobStatusSettings(**overrides))
        return JobStatusTracking(settings, session_factory=session_factory, lock_provider=lock_provider)

    return _make


@pytest.fixture
def tracking(make_tracking) -> JobStatusTracking:
    """Tracking engine with default settings."""
    return make_tracking()


@pytest.fixture
def crud() -> JobStatusCRUD:
    return JobStatusCRUD()


@pytest.fixture
def history_crud() -> JobStatusHistoryCRUD:
    return JobStatusHistoryCRUD()


@pytest.fixture
def load_record(session_factory, crud) -> Callable[[uuid.UUID], JobStatusModel | None]:
    """Read a status record through a fresh session."""

    def _load(status_id: uuid.UUID) -> JobStatusModel | None:
        with session_factory() as session:
            return crud.get_by_id(session, status_id)

    return _load


@pytest.fixture
def load_history(session_factory, history_crud) -> Callable[[uuid.UUID], list]:
    """Read the history rows of a status record through a fresh session."""

    def _load(status_id: uuid.UUID) -> list:
        with session_factory() as session:
            return list(history_crud.get_for_job_status(session, status_id))

    return _load


@pytest.fixture
def sample_job(tracking) -> SampleJob:
    """A tracked job whose status record already exists."""
    return SampleJob(tracking)


@pytest.fixture
def queue_job_factory() -> Callable[..., FakeQueueJob]:
    return FakeQueueJob


@pytest.fixture
def sample_job_class() -> type[SampleJob]:
    return SampleJob


@pytest.fixture
def unique_job_class() -> type[UniqueSampleJob]:
    return UniqueSampleJob
