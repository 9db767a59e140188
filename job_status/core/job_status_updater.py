"""
Status updater.

Applies partial updates to an existing status record and appends history.
Accepts either a lifecycle event (the tracked job is resolved from the
queue payload and the attempt count is taken from the runner) or a job
exposing get_job_status_id().

Every failure is logged and absorbed: a tracking problem never faults the
job being tracked.

Dependencies: sqlalchemy, job_status.boundary.db
System role: Update and history-append pipeline
"""

import logging
from typing import Any

from sqlalchemy.orm import sessionmaker

from job_status.boundary.db.connection import session_scope
from job_status.boundary.db.CRUD.job_status_crud import JobStatusCRUD
from job_status.boundary.db.CRUD.job_status_history_crud import JobStatusHistoryCRUD
from job_status.boundary.db.models.job_status_model import JobStatusEnum, JobStatusModel
from job_status.configs.job_status import JobStatusSettings
from job_status.core.contracts import StatusId, StatusReference, TrackableJob, coerce_status_id
from job_status.core.events import LifecycleEvent

logger = logging.getLogger(__name__)

HISTORY_FIELDS = ("status", "status_message", "progress_now", "progress_max")


def apply_regression_guard(current_status: Any, data: dict[str, Any]) -> dict[str, Any]:
    """
    Drop a stale 'finished' status aimed at a failed record.

    Only failed -> finished is guarded; every other field of the update
    still applies, and no other ordering is defended.

    Args:
        current_status: Status currently stored on the record
        data: Incoming field-value map

    Returns:
        dict: The map to persist (a copy when the status was dropped)
    """
    if (
        current_status == JobStatusEnum.FAILED
        and "status" in data
        and data["status"] == JobStatusEnum.FINISHED
    ):
        data = {field: value for field, value in data.items() if field != "status"}
    return data


class JobStatusUpdater:
    """Merge field updates into status records and record history."""

    def __init__(
        self,
        settings: JobStatusSettings,
        session_factory: sessionmaker,
        crud: JobStatusCRUD,
        history_crud: JobStatusHistoryCRUD,
    ) -> None:
        """
        Initialize updater.

        Args:
            settings: Tracking settings (history gating)
            session_factory: Factory for the status store
            crud: Status record CRUD (bound to the configured model)
            history_crud: History CRUD
        """
        self.settings = settings
        self.session_factory = session_factory
        self.crud = crud
        self.history_crud = history_crud

    def update(
        self,
        job: Any,
        data: dict[str, Any],
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """
        Apply data to the status record addressed by job.

        Silently does nothing when the job is untracked or its record is gone.

        Args:
            job: Lifecycle event, or a job exposing get_job_status_id()
            data: Fields to persist in one round trip
            metadata: Extra values merged into the history snapshot
        """
        if isinstance(job, LifecycleEvent):
            self._update_event(job, dict(data), metadata)
        else:
            self._update_job(job, dict(data), metadata)

    def _update_event(
        self,
        event: LifecycleEvent,
        data: dict[str, Any],
        metadata: dict[str, Any] | None,
    ) -> None:
        job = self.parse_job(event)
        status_id = self.get_job_status_id(job)
        if status_id is None:
            return

        try:
            data["attempts"] = event.job.attempts()
        except Exception:
            try:
                data["attempts"] = job.attempts()
            except Exception as e:
                logger.error(
                    f"{__name__}:update - Attempt count unavailable: {type(e).__name__}: {e}",
                    extra={"job_status_id": str(status_id), "event": type(event).__name__},
                )

        self._apply(status_id, data, metadata)

    def _update_job(
        self,
        job: Any,
        data: dict[str, Any],
        metadata: dict[str, Any] | None,
    ) -> None:
        status_id = self.get_job_status_id(job)
        if status_id is None:
            return
        self._apply(status_id, data, metadata)

    def parse_job(self, event: LifecycleEvent) -> Any:
        """
        Resolve the tracked job behind an event.

        Uses the event's command when present, otherwise rebuilds a
        StatusReference from the queue payload. Malformed payloads are
        logged and yield None.
        """
        if event.command is not None:
            return event.command
        try:
            return StatusReference.from_payload(event.job.payload())
        except Exception as e:
            logger.error(
                f"{__name__}:parse_job - {type(e).__name__}: {e}",
                extra={"event": type(event).__name__},
            )
            return None

    def get_job_status_id(self, job: Any) -> StatusId | None:
        """Return the status-record id carried by job, or None."""
        if job is None or not isinstance(job, TrackableJob):
            return None
        try:
            return coerce_status_id(job.get_job_status_id())
        except Exception as e:
            logger.error(f"{__name__}:get_job_status_id - {type(e).__name__}: {e}")
            return None

    def get_job_status(self, session, status_id: StatusId) -> JobStatusModel | None:
        """Load the status record, None when it no longer exists."""
        return self.crud.get_by_id(session, status_id)

    def _apply(
        self,
        status_id: StatusId,
        data: dict[str, Any],
        metadata: dict[str, Any] | None,
    ) -> None:
        try:
            if "status" in data and data["status"] is not None:
                data["status"] = JobStatusEnum(data["status"])

            with session_scope(self.session_factory) as session:
                record = self.get_job_status(session, status_id)
                if record is None:
                    logger.debug(
                        f"{__name__}:update - Status record not found",
                        extra={"job_status_id": str(status_id)},
                    )
                    return

                data = apply_regression_guard(record.status, data)
                if not data:
                    return

                before = {field: getattr(record, field) for field in HISTORY_FIELDS}
                self.crud.update_instance(session, record, **data)
                changes = [
                    field for field in HISTORY_FIELDS
                    if getattr(record, field) != before[field]
                ]

                if self.settings.track_history and changes:
                    self.history_crud.append(
                        session,
                        record,
                        metadata=self.history_metadata(record, changes, metadata),
                    )
        except Exception as e:
            logger.error(
                f"{__name__}:update - {type(e).__name__}: {e}",
                extra={"job_status_id": str(status_id), "fields": sorted(data)},
            )

    @staticmethod
    def history_metadata(
        record: JobStatusModel,
        changes: list[str],
        extra: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Snapshot stored with each history row."""
        snapshot = {
            "changes": changes,
            "attempts": record.attempts,
            "job_id": record.job_id,
            "queue": record.queue,
        }
        if extra:
            snapshot.update(extra)
        return snapshot
