"""
Queue lifecycle notifications.

Materialized events delivered by the queue integration. Each carries the
runner's job handle; queueing/queued events carry the dispatched job
itself, since no worker handle exists yet.

Dependencies: dataclasses
System role: Input vocabulary of the transition policy
"""

from dataclasses import dataclass, field
from typing import Any

from job_status.core.contracts import QueueJob


@dataclass
class LifecycleEvent:
    """
    Base lifecycle notification.

    Attributes:
        job: Runner-side job handle (QueueJob) or, before a worker picks
            the job up, the dispatched job object
        connection_name: Queue connection the event originated from
        command: The tracked job when the runner already has it in hand;
            otherwise resolved from the job payload
    """

    job: Any
    connection_name: str | None = None
    command: Any = field(default=None, repr=False)


@dataclass
class JobQueueing(LifecycleEvent):
    """Job is about to be pushed onto the queue."""


@dataclass
class JobQueued(LifecycleEvent):
    """Job was pushed onto the queue."""

    job_id: str | None = None


@dataclass
class JobProcessing(LifecycleEvent):
    """A worker started processing the job."""

    job: QueueJob


@dataclass
class JobProcessed(LifecycleEvent):
    """A worker finished processing the job (successfully or not)."""

    job: QueueJob


@dataclass
class JobFailed(LifecycleEvent):
    """The job failed at the bus level."""

    job: QueueJob
    exception: BaseException | None = None


@dataclass
class JobExceptionOccurred(LifecycleEvent):
    """The job raised while being processed."""

    job: QueueJob
    exception: BaseException | None = None


@dataclass
class JobRetryRequested(LifecycleEvent):
    """A retry of the job was explicitly requested."""

    job: QueueJob


@dataclass
class JobReleasedAfterException(LifecycleEvent):
    """The job was released back onto the queue after raising."""

    job: QueueJob


@dataclass
class JobTimedOut(LifecycleEvent):
    """The job exceeded its time limit."""

    job: QueueJob
