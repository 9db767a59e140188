"""
Tracked task dispatcher.

Publishes a Celery task carrying the job's status-record id in its
message headers, then records the broker-assigned task id on the record.

Dependencies: celery, job_status.core
System role: Links dispatched messages to status records
"""

from typing import Any

from celery import Task
from celery.result import AsyncResult

from job_status.core.contracts import STATUS_ID_KEY
from job_status.core.job_status_updater import JobStatusUpdater


class TrackedDispatcher:
    """Dispatch tasks on behalf of tracked jobs."""

    def __init__(self, updater: JobStatusUpdater) -> None:
        self.updater = updater

    def dispatch(
        self,
        task: Task,
        job: Any,
        args: tuple | list | None = None,
        kwargs: dict[str, Any] | None = None,
        **options: Any,
    ) -> AsyncResult:
        """
        Publish task for job and store the resulting job_id.

        Args:
            task: Celery task to publish
            job: Tracked job (exposes get_job_status_id())
            args: Positional task arguments
            kwargs: Keyword task arguments
            **options: Extra apply_async options (queue, countdown, headers...)

        Returns:
            AsyncResult: Result handle of the published task
        """
        headers = dict(options.pop("headers", None) or {})
        status_id = job.get_job_status_id() if hasattr(job, "get_job_status_id") else None
        if status_id is not None:
            headers[STATUS_ID_KEY] = str(status_id)

        result = task.apply_async(args=args, kwargs=kwargs, headers=headers, **options)
        self.updater.update(job, {"job_id": result.id})
        return result
