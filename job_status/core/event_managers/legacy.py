"""
Legacy transition policy.

Reports every failure signal as retrying; only the timeout notification
marks a job failed. Kept for deployments relying on that convention.

Dependencies: job_status.core
System role: Legacy lifecycle state machine
"""

from job_status.boundary.db.models.job_status_model import JobStatusEnum
from job_status.core.event_managers.base import now
from job_status.core.event_managers.default import DefaultEventManager
from job_status.core.events import JobExceptionOccurred, JobFailed


class LegacyEventManager(DefaultEventManager):
    """Legacy policy: failures always report retrying."""

    def failing(self, event: JobFailed) -> None:
        self.get_updater().update(event, {
            "status": JobStatusEnum.RETRYING,
            "finished_at": now(),
        })

    def exception_occurred(self, event: JobExceptionOccurred) -> None:
        self.get_updater().update(event, {
            "status": JobStatusEnum.RETRYING,
            "finished_at": now(),
        })
