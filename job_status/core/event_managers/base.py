"""
Transition policy contract.

An event manager maps each queue lifecycle notification to at most one
updater call. Implementations share identical signatures and are chosen
once, from configuration, when tracking is built.

Dependencies: abc, job_status.core
System role: Lifecycle state machine interface
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone

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
from job_status.core.job_status_updater import JobStatusUpdater

logger = logging.getLogger(__name__)

HANDLERS: dict[type[LifecycleEvent], str] = {
    JobQueueing: "queueing",
    JobQueued: "queued",
    JobProcessing: "before",
    JobProcessed: "after",
    JobFailed: "failing",
    JobExceptionOccurred: "exception_occurred",
    JobRetryRequested: "retry_requested",
    JobReleasedAfterException: "released_after_exception",
    JobTimedOut: "timed_out",
}


def now() -> datetime:
    return datetime.now(timezone.utc)


class EventManager(ABC):
    """Base class for lifecycle transition policies."""

    def __init__(self, updater: JobStatusUpdater) -> None:
        self._updater = updater

    def get_updater(self) -> JobStatusUpdater:
        return self._updater

    def handle(self, event: LifecycleEvent) -> None:
        """
        Route an event to the matching handler.

        Unknown event types are logged and ignored.
        """
        name = HANDLERS.get(type(event))
        if name is None:
            logger.warning(
                f"{__name__}:handle - Unhandled lifecycle event",
                extra={"event": type(event).__name__},
            )
            return
        getattr(self, name)(event)

    @abstractmethod
    def queueing(self, event: JobQueueing) -> None: ...

    @abstractmethod
    def queued(self, event: JobQueued) -> None: ...

    @abstractmethod
    def before(self, event: JobProcessing) -> None: ...

    @abstractmethod
    def after(self, event: JobProcessed) -> None: ...

    @abstractmethod
    def failing(self, event: JobFailed) -> None: ...

    @abstractmethod
    def exception_occurred(self, event: JobExceptionOccurred) -> None: ...

    @abstractmethod
    def retry_requested(self, event: JobRetryRequested) -> None: ...

    @abstractmethod
    def released_after_exception(self, event: JobReleasedAfterException) -> None: ...

    @abstractmethod
    def timed_out(self, event: JobTimedOut) -> None: ...
