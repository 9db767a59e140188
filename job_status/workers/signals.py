"""
Celery signal binding.

Translates Celery task signals into lifecycle events for the configured
event manager:

    before_task_publish -> JobQueueing
    after_task_publish  -> JobQueued
    task_prerun         -> JobProcessing
    task_postrun        -> JobProcessed (failed unless state is SUCCESS)
    task_retry          -> JobReleasedAfterException, or JobRetryRequested
                           when the retry carries no exception
    task_failure        -> JobTimedOut for time-limit errors, else JobFailed

Celery sends task_failure only when no further retry is scheduled, so the
failing attempt is reported as the last one.

Dependencies: celery, job_status.core
System role: Queue lifecycle notification source
"""

import logging
from typing import Any

from celery import states
from celery.exceptions import SoftTimeLimitExceeded, TimeLimitExceeded
from celery.signals import (
    after_task_publish,
    before_task_publish,
    task_failure,
    task_postrun,
    task_prerun,
    task_retry,
)

from job_status.core.events import (
    JobFailed,
    JobProcessed,
    JobProcessing,
    JobQueued,
    JobQueueing,
    JobReleasedAfterException,
    JobRetryRequested,
    JobTimedOut,
)
from job_status.dependencies import JobStatusTracking
from job_status.workers.queue_job import CeleryQueueJob, PublishedMessage

logger = logging.getLogger(__name__)

TIME_LIMIT_ERRORS = (SoftTimeLimitExceeded, TimeLimitExceeded)


class CelerySignalBinding:
    """Connects Celery task signals to a tracking engine."""

    def __init__(self, tracking: JobStatusTracking) -> None:
        self.tracking = tracking
        self._connections = [
            (before_task_publish, self.on_before_publish),
            (after_task_publish, self.on_after_publish),
            (task_prerun, self.on_prerun),
            (task_postrun, self.on_postrun),
            (task_retry, self.on_retry),
            (task_failure, self.on_failure),
        ]

    def connect(self) -> None:
        for signal, handler in self._connections:
            signal.connect(handler, weak=False, dispatch_uid=f"job_status.{handler.__name__}")
        logger.info(f"{__name__}:connect - Celery signals connected")

    def disconnect(self) -> None:
        for signal, handler in self._connections:
            signal.disconnect(handler, dispatch_uid=f"job_status.{handler.__name__}")

    def on_before_publish(self, sender: str | None = None, headers: dict | None = None, **kwargs: Any) -> None:
        self.tracking.notify(JobQueueing(job=PublishedMessage(sender, headers)))

    def on_after_publish(self, sender: str | None = None, headers: dict | None = None, **kwargs: Any) -> None:
        message = PublishedMessage(sender, headers)
        self.tracking.notify(JobQueued(job=message, job_id=message.get_job_id()))

    def on_prerun(self, sender: Any = None, task: Any = None, **kwargs: Any) -> None:
        self.tracking.notify(JobProcessing(job=CeleryQueueJob(task or sender)))

    def on_postrun(
        self,
        sender: Any = None,
        task: Any = None,
        state: str | None = None,
        **kwargs: Any,
    ) -> None:
        job = CeleryQueueJob(task or sender, failed=state != states.SUCCESS)
        self.tracking.notify(JobProcessed(job=job))

    def on_retry(
        self,
        sender: Any = None,
        request: Any = None,
        reason: Any = None,
        **kwargs: Any,
    ) -> None:
        job = CeleryQueueJob(sender, request)
        cause = getattr(reason, "exc", None)
        if cause is not None:
            self.tracking.notify(JobReleasedAfterException(job=job))
        else:
            self.tracking.notify(JobRetryRequested(job=job))

    def on_failure(
        self,
        sender: Any = None,
        exception: BaseException | None = None,
        **kwargs: Any,
    ) -> None:
        if isinstance(exception, TIME_LIMIT_ERRORS):
            self.tracking.notify(JobTimedOut(job=CeleryQueueJob(sender, failed=True)))
            return

        attempts = CeleryQueueJob(sender).attempts()
        job = CeleryQueueJob(sender, failed=True, max_tries=attempts)
        self.tracking.notify(JobFailed(job=job, exception=exception))


def connect_signals(tracking: JobStatusTracking) -> CelerySignalBinding:
    """Bind Celery signals to tracking and return the binding."""
    binding = CelerySignalBinding(tracking)
    binding.connect()
    return binding
