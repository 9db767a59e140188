"""
Capability protocols shared by the tracking engine.

Jobs participate in tracking by exposing a status-record id; everything
else (uniqueness key, display name, batch membership, attempts, custom
lock provider) is optional and discovered with hasattr checks.

Dependencies: typing
System role: Job and queue capability surface
"""

import uuid
from typing import Any, Protocol, runtime_checkable

StatusId = uuid.UUID

STATUS_ID_KEY = "job_status_id"


@runtime_checkable
class TrackableJob(Protocol):
    """Minimal capability a job needs to receive status updates."""

    def get_job_status_id(self) -> StatusId | None: ...


class Batch(Protocol):
    """Batch membership exposed by jobs that belong to a batch."""

    id: str
    total_jobs: int

    def processed_jobs(self) -> int: ...


class QueueJob(Protocol):
    """Runner-side handle of a job being processed by the queue."""

    def attempts(self) -> int: ...

    def max_tries(self) -> int | None: ...

    def get_job_id(self) -> str | None: ...

    def get_queue(self) -> str | None: ...

    def has_failed(self) -> bool: ...

    def payload(self) -> dict[str, Any]: ...


def coerce_status_id(value: Any) -> StatusId | None:
    """
    Normalize a status id read from a job, header or payload.

    Raises:
        ValueError: If value is not a valid UUID
    """
    if value is None or value == "":
        return None
    if isinstance(value, uuid.UUID):
        return value
    return uuid.UUID(str(value))


class StatusReference:
    """
    Lightweight stand-in for a job, rebuilt from a queue payload.

    Workers never see the original job object; the status-record id
    travels with the message and is enough to address updates.
    """

    def __init__(self, job_status_id: StatusId) -> None:
        self.job_status_id = job_status_id

    def get_job_status_id(self) -> StatusId | None:
        return self.job_status_id

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "StatusReference | None":
        """
        Build a reference from a message payload.

        Returns None when the message carries no status id (untracked job).

        Raises:
            ValueError: If the carried id is malformed
        """
        status_id = coerce_status_id(payload.get(STATUS_ID_KEY))
        if status_id is None:
            return None
        return cls(status_id)

    def __repr__(self) -> str:
        return f"StatusReference({self.job_status_id})"
