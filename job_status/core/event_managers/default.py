"""
Default transition policy.

Distinguishes permanent failure from a pending retry by comparing the
attempt count with the job's maximum tries.

Dependencies: job_status.core
System role: Strict lifecycle state machine
"""

from job_status.boundary.db.models.job_status_model import JobStatusEnum
from job_status.core.contracts import QueueJob
from job_status.core.event_managers.base import EventManager, now
from job_status.core.events import (
    JobExceptionOccurred,
    JobFailed,
    JobProcessed,
    JobProcessing,
    JobQueued,
    JobQueueing,
    JobReleasedAfterException,
    JobRetryRequested,
    JobTimedOut,
)


def failure_status(job: QueueJob) -> JobStatusEnum:
    """FAILED once attempts reach max tries, RETRYING before that."""
    max_tries = job.max_tries()
    if max_tries is None or job.attempts() >= max_tries:
        return JobStatusEnum.FAILED
    return JobStatusEnum.RETRYING


class DefaultEventManager(EventManager):
    """Strict policy: final failures are reported as failed."""

    def queueing(self, event: JobQueueing) -> None:
        # Record is created when the job is constructed
        pass

    def queued(self, event: JobQueued) -> None:
        # job_id is recorded by the dispatcher and again when processing starts
        pass

    def before(self, event: JobProcessing) -> None:
        self.get_updater().update(event, {
            "status": JobStatusEnum.EXECUTING,
            "job_id": event.job.get_job_id(),
            "queue": event.job.get_queue(),
            "started_at": now(),
        })

    def after(self, event: JobProcessed) -> None:
        if not event.job.has_failed():
            self.get_updater().update(event, {
                "status": JobStatusEnum.FINISHED,
                "finished_at": now(),
            })

    def failing(self, event: JobFailed) -> None:
        self.get_updater().update(event, {
            "status": failure_status(event.job),
            "finished_at": now(),
        })

    def exception_occurred(self, event: JobExceptionOccurred) -> None:
        self.get_updater().update(event, {
            "status": failure_status(event.job),
            "finished_at": now(),
        })

    def retry_requested(self, event: JobRetryRequested) -> None:
        self.get_updater().update(event, {"status": JobStatusEnum.RETRYING})

    def released_after_exception(self, event: JobReleasedAfterException) -> None:
        self.get_updater().update(event, {"status": JobStatusEnum.RETRYING})

    def timed_out(self, event: JobTimedOut) -> None:
        self.get_updater().update(event, {
            "status": JobStatusEnum.FAILED,
            "finished_at": now(),
        })
