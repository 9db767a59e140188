"""
Dependency injection container.

Builds the tracking engine from settings once: status store, lock
provider, updater, creation guard and the configured event manager.
Components receive their settings here rather than looking them up.

Dependencies: job_status.configs, job_status.boundary, job_status.core
System role: DI container for the tracking engine
"""

import logging
from functools import lru_cache
from typing import Any

from sqlalchemy.orm import sessionmaker

from job_status.boundary.db.connection import get_session_factory, resolve_database_url, session_scope
from job_status.boundary.db.CRUD.job_status_crud import JobStatusCRUD
from job_status.boundary.db.CRUD.job_status_history_crud import JobStatusHistoryCRUD
from job_status.boundary.db.models.job_status_model import JobStatusModel
from job_status.boundary.lock import InMemoryLockProvider, LockProvider, RedisLockProvider
from job_status.configs import Settings, get_settings
from job_status.core.contracts import StatusId, StatusReference, coerce_status_id
from job_status.core.creation_guard import CreationGuard
from job_status.core.event_managers import EventManager, import_string, resolve_event_manager
from job_status.core.events import LifecycleEvent
from job_status.core.exceptions import ConfigurationError
from job_status.core.job_status_updater import JobStatusUpdater
from job_status.core.trackable import Trackable, TrackingState

logger = logging.getLogger(__name__)


def resolve_model(dotted_path: str) -> type[JobStatusModel]:
    """
    Resolve the configured status-record model.

    Raises:
        ConfigurationError: Path is not a JobStatusModel subclass
    """
    model = import_string(dotted_path)
    if not (isinstance(model, type) and issubclass(model, JobStatusModel)):
        raise ConfigurationError(f"{dotted_path} is not a JobStatusModel", option="model")
    return model


def build_lock_provider(settings: Settings) -> LockProvider:
    """Redis locks when REDIS_URL is set, process-local locks otherwise."""
    if settings.lock.url:
        return RedisLockProvider.from_url(settings.lock.url)
    logger.info(f"{__name__}:build_lock_provider - REDIS_URL unset, using in-process locks")
    return InMemoryLockProvider()


class JobStatusTracking:
    """
    Assembled tracking engine.

    Attributes:
        settings: Tracking settings
        session_factory: Status store session factory
        updater: Shared JobStatusUpdater
        guard: Shared CreationGuard
        event_manager: Configured transition policy
    """

    def __init__(
        self,
        settings: Settings,
        session_factory: sessionmaker | None = None,
        lock_provider: LockProvider | None = None,
    ) -> None:
        """
        Wire the engine.

        Args:
            settings: Application settings
            session_factory: Override the status store (defaults to the
                configured database_connection or primary database)
            lock_provider: Override the creation lock provider

        Raises:
            ConfigurationError: Unknown model or event manager
        """
        self.settings = settings.job_status
        if session_factory is None:
            url = resolve_database_url(settings.database, self.settings.database_connection)
            session_factory = get_session_factory(url, settings.database.echo_sql)
        self.session_factory = session_factory

        crud = JobStatusCRUD(resolve_model(self.settings.model))
        self.updater = JobStatusUpdater(
            self.settings,
            session_factory,
            crud,
            JobStatusHistoryCRUD(),
        )
        self.guard = CreationGuard(
            self.settings,
            lock_provider or build_lock_provider(settings),
            session_factory,
            crud,
        )
        manager_class = resolve_event_manager(self.settings.event_manager)
        self.event_manager: EventManager = manager_class(self.updater)

    def track(self, job: Any) -> Trackable:
        """Attach a fresh tracker to job (call prepare_status() next)."""
        return Trackable(job, self.settings, self.guard, self.updater)

    def resume(self, job_status_id: StatusId | str | None) -> Trackable:
        """
        Tracker for a record created elsewhere, e.g. inside a worker.

        Progress counters are seeded from the stored record so throttled
        writes and increments continue from the persisted values. An empty,
        malformed or unknown id yields a tracker whose updates are no-ops.
        """
        try:
            status_id = coerce_status_id(job_status_id)
        except ValueError as e:
            logger.error(f"{__name__}:resume - {type(e).__name__}: {e}")
            status_id = None

        state = self._load_state(status_id) if status_id else TrackingState(should_track=False)
        reference = StatusReference(state.status_id) if state.status_id else None
        return Trackable(reference, self.settings, self.guard, self.updater, state)

    def _load_state(self, status_id: StatusId) -> TrackingState:
        try:
            with session_scope(self.session_factory) as session:
                record = self.updater.get_job_status(session, status_id)
                if record is not None:
                    return TrackingState(
                        status_id=status_id,
                        progress_now=record.progress_now,
                        progress_max=record.progress_max,
                    )
        except Exception as e:
            logger.error(
                f"{__name__}:resume - {type(e).__name__}: {e}",
                extra={"job_status_id": str(status_id)},
            )
            return TrackingState(should_track=False)

        logger.debug(
            f"{__name__}:resume - Status record not found",
            extra={"job_status_id": str(status_id)},
        )
        return TrackingState(should_track=False)

    def notify(self, event: LifecycleEvent) -> None:
        """Feed a lifecycle notification to the configured policy."""
        try:
            self.event_manager.handle(event)
        except Exception as e:
            logger.error(
                f"{__name__}:notify - {type(e).__name__}: {e}",
                extra={"event": type(event).__name__},
            )


@lru_cache
def get_tracking() -> JobStatusTracking:
    """
    Get the tracking engine singleton built from environment settings.

    Returns:
        JobStatusTracking: Shared engine instance
    """
    return JobStatusTracking(get_settings())
