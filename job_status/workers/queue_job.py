"""
Celery adapters for the queue-job capability surface.

Wraps a Celery task and its request context so lifecycle events expose
attempts, max tries, job/queue identifiers and the status-record id
carried in the message headers.

Dependencies: celery
System role: Runner-side job handle for Celery
"""

from typing import Any

from celery import Task

from job_status.core.contracts import STATUS_ID_KEY


def status_id_from_request(request: Any) -> str | None:
    """
    Read the status-record id carried by a task message.

    Custom headers surface as request attributes; older message protocols
    keep them under request.headers.
    """
    value = getattr(request, STATUS_ID_KEY, None)
    if value is None:
        headers = getattr(request, "headers", None) or {}
        value = headers.get(STATUS_ID_KEY)
    return value


class CeleryQueueJob:
    """QueueJob view of a Celery task execution."""

    def __init__(
        self,
        task: Task,
        request: Any = None,
        *,
        failed: bool = False,
        max_tries: int | None = None,
    ) -> None:
        """
        Args:
            task: Executing task
            request: Task request context (defaults to task.request)
            failed: Whether this execution ended in failure
            max_tries: Override for the attempt limit
        """
        self.task = task
        self.request = request if request is not None else task.request
        self._failed = failed
        self._max_tries = max_tries

    def attempts(self) -> int:
        return (getattr(self.request, "retries", 0) or 0) + 1

    def max_tries(self) -> int | None:
        """Attempt limit; None when the task retries without limit."""
        if self._max_tries is not None:
            return self._max_tries
        max_retries = getattr(self.task, "max_retries", None)
        if max_retries is None:
            return None
        return max_retries + 1

    def get_job_id(self) -> str | None:
        return getattr(self.request, "id", None)

    def get_queue(self) -> str | None:
        delivery_info = getattr(self.request, "delivery_info", None) or {}
        return delivery_info.get("routing_key")

    def has_failed(self) -> bool:
        return self._failed

    def payload(self) -> dict[str, Any]:
        return {STATUS_ID_KEY: status_id_from_request(self.request)}


class PublishedMessage:
    """Queue-job view of a message being published (no worker yet)."""

    def __init__(self, task_name: str | None, headers: dict[str, Any] | None) -> None:
        self.task_name = task_name
        self.headers = headers or {}

    def attempts(self) -> int:
        return (self.headers.get("retries") or 0) + 1

    def max_tries(self) -> int | None:
        return None

    def get_job_id(self) -> str | None:
        return self.headers.get("id")

    def get_queue(self) -> str | None:
        return None

    def has_failed(self) -> bool:
        return False

    def payload(self) -> dict[str, Any]:
        return {STATUS_ID_KEY: self.headers.get(STATUS_ID_KEY)}


def task_tracker(tracking: Any, task: Task) -> Any:
    """
    Tracker for the job a running task belongs to.

    Lets task bodies report progress and messages; untracked messages get
    a tracker whose updates are no-ops.

    Usage:
        @celery_app.task(bind=True)
        def export(self, rows):
            tracker = task_tracker(get_tracking(), self)
            tracker.set_progress_max(len(rows))
            for row in rows:
                ...
                tracker.increment_progress(every=10)
    """
    return tracking.resume(status_id_from_request(task.request))
