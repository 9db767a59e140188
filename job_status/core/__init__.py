"""
Core tracking engine.

Exports:
  - CreationGuard: Exactly-once status-record creation
  - JobStatusUpdater: Update and history-append pipeline
  - Trackable, TrackingState: Per-job tracking adapter
  - Lifecycle events and the TrackableJob capability
"""

from job_status.core.contracts import StatusReference, TrackableJob
from job_status.core.creation_guard import CreationGuard
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
    LifecycleEvent,
)
from job_status.core.job_status_updater import JobStatusUpdater, apply_regression_guard
from job_status.core.trackable import Trackable, TrackingState

__all__ = [
    "CreationGuard",
    "JobStatusUpdater",
    "apply_regression_guard",
    "Trackable",
    "TrackingState",
    "StatusReference",
    "TrackableJob",
    "LifecycleEvent",
    "JobQueueing",
    "JobQueued",
    "JobProcessing",
    "JobProcessed",
    "JobFailed",
    "JobExceptionOccurred",
    "JobRetryRequested",
    "JobReleasedAfterException",
    "JobTimedOut",
]
