"""
Creation guard.

Creates a job's status record exactly once per logical unique job. Jobs
that declare a uniqueness key (a unique_id() method or a truthy
should_be_unique attribute) are created inside a short-lived lock keyed by
job type and key; if the lock is held elsewhere, or anything about
creation fails, no record is created and the caller disables tracking.

Dependencies: sqlalchemy, job_status.boundary
System role: Exactly-once status-record creation
"""

import hashlib
import json
import logging
from typing import Any

from sqlalchemy.orm import sessionmaker

from job_status.boundary.db.connection import session_scope
from job_status.boundary.db.CRUD.job_status_crud import JobStatusCRUD
from job_status.boundary.lock.lock_provider import LockProvider, LockToken
from job_status.configs.job_status import JobStatusSettings
from job_status.core.contracts import StatusId
from job_status.core.exceptions import LockError, UniqueKeyError

logger = logging.getLogger(__name__)


def job_class_path(job: Any) -> str:
    """Fully qualified class name of a job."""
    cls = type(job)
    return f"{cls.__module__}.{cls.__qualname__}"


def display_name(job: Any) -> str:
    """Job's display_name() when it defines one, otherwise its class path."""
    if hasattr(job, "display_name"):
        return job.display_name()
    return job_class_path(job)


def requires_unique_lock(job: Any) -> bool:
    """True when creation must be serialized for this job."""
    return hasattr(job, "unique_id") or bool(getattr(job, "should_be_unique", False))


class CreationGuard:
    """Serialize status-record creation per logical unique job."""

    def __init__(
        self,
        settings: JobStatusSettings,
        lock_provider: LockProvider,
        session_factory: sessionmaker,
        crud: JobStatusCRUD,
    ) -> None:
        """
        Initialize creation guard.

        Args:
            settings: Tracking settings (lock ttl/wait/prefix)
            lock_provider: Default lock provider
            session_factory: Factory for the status store
            crud: Status record CRUD (bound to the configured model)
        """
        self.settings = settings
        self.lock_provider = lock_provider
        self.session_factory = session_factory
        self.crud = crud

    def lock_key(self, job: Any) -> str | None:
        """
        Compute the creation lock key for job.

        Returns:
            str | None: Lock key, or None when the job needs no lock

        Raises:
            UniqueKeyError: unique_id() raised, or returned a value JSON
                cannot encode (e.g. a circular structure); other values
                such as UUIDs and datetimes are keyed by their str()
        """
        if not requires_unique_lock(job):
            return None

        job_type = job_class_path(job)
        try:
            unique_id = job.unique_id() if hasattr(job, "unique_id") else ""
            serialized = json.dumps(unique_id, sort_keys=True, default=str)
        except Exception as e:
            raise UniqueKeyError(job_type, f"{type(e).__name__}: {e}") from e

        digest = hashlib.sha256(serialized.encode("utf-8")).hexdigest()
        return f"{self.settings.lock_prefix}:{job_type}:{digest}"

    def lock_provider_for(self, job: Any) -> LockProvider:
        """The job's own provider (unique_via()) or the default one."""
        if hasattr(job, "unique_via"):
            return job.unique_via()
        return self.lock_provider

    def build_payload(self, job: Any, data: dict[str, Any]) -> dict[str, Any]:
        """
        Merge caller-supplied fields with values derived from the job.

        Caller values win. Derived values: unique_id, batch correlation
        (current_step is best-effort under concurrent batch processing)
        and type, defaulting to the job's display name.
        """
        data = dict(data)

        if hasattr(job, "unique_id") and "unique_id" not in data:
            try:
                unique_id = job.unique_id()
                if unique_id is not None:
                    data["unique_id"] = str(unique_id)
            except Exception as e:
                logger.debug(f"{__name__}:build_payload - unique_id skipped: {type(e).__name__}: {e}")

        if hasattr(job, "batch") and "batch_id" not in data:
            try:
                batch = job.batch()
                if batch is not None:
                    data["batch_id"] = str(batch.id)
                    data["total_jobs"] = batch.total_jobs
                    data["current_step"] = batch.processed_jobs() + 1
            except Exception as e:
                logger.debug(f"{__name__}:build_payload - batch skipped: {type(e).__name__}: {e}")

        return {"type": display_name(job), **data}

    def create(self, job: Any, data: dict[str, Any] | None = None) -> StatusId | None:
        """
        Create the status record for job.

        Args:
            job: Job being tracked
            data: Initial field values

        Returns:
            StatusId | None: New record id, or None when creation was
            skipped (lock held, key error, store failure)
        """
        job_type = job_class_path(job)
        try:
            key = self.lock_key(job)
        except UniqueKeyError as e:
            logger.warning(f"{__name__}:create - Tracking disabled: {e}", extra=e.details)
            return None

        if key is None:
            return self._create_record(job, data or {})

        try:
            provider = self.lock_provider_for(job)
            token = provider.acquire(
                key,
                ttl=self.settings.lock_ttl_seconds,
                wait=self.settings.lock_wait_seconds,
            )
        except Exception as e:
            logger.warning(
                f"{__name__}:create - Tracking disabled, lock backend failed: {type(e).__name__}: {e}",
                extra={"job_type": job_type, "lock_key": key},
            )
            return None

        if token is None:
            error = LockError(key, {"job_type": job_type})
            logger.info(f"{__name__}:create - Tracking disabled: {error}", extra=error.details)
            return None

        try:
            return self._create_record(job, data or {})
        finally:
            self._release(provider, token)

    def _release(self, provider: LockProvider, token: LockToken) -> None:
        """Release the creation lock; a failure only logs (the lock expires on its own)."""
        try:
            provider.release(token)
        except Exception as e:
            logger.warning(
                f"{__name__}:create - Lock release failed: {type(e).__name__}: {e}",
                extra={"lock_key": token.key},
            )

    def _create_record(self, job: Any, data: dict[str, Any]) -> StatusId | None:
        try:
            payload = self.build_payload(job, data)
            with session_scope(self.session_factory) as session:
                record = self.crud.create(session, **payload)
                status_id = record.id
        except Exception as e:
            logger.error(
                f"{__name__}:create - {type(e).__name__}: {e}",
                extra={"job_type": job_class_path(job)},
            )
            return None

        logger.debug(
            f"{__name__}:create - Status record created",
            extra={"job_status_id": str(status_id), "job_type": payload["type"]},
        )
        return status_id
