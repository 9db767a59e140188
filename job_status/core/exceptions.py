"""
Exception hierarchy for the job status tracking engine.

Tracking failures are raised at the boundaries and absorbed by the
tracking pipeline so they never fault the job being tracked. Only
ConfigurationError (startup) and JobStatusNotFoundError (read-side
queries) reach callers.

Dependencies: None (pure domain layer)
System role: Centralized exception definitions
"""

from typing import Any


class JobStatusException(Exception):
    """Base exception for all tracking engine errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(JobStatusException):
    """Raised when tracking configuration cannot be resolved."""

    def __init__(
        self,
        message: str,
        option: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if option:
            details["option"] = option
        super().__init__(message, details)


class UniqueKeyError(JobStatusException):
    """Raised when a job's uniqueness lock key cannot be computed."""

    def __init__(
        self,
        job_type: str,
        reason: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["job_type"] = job_type
        super().__init__(f"Cannot compute uniqueness key for {job_type}: {reason}", details)


class LockError(JobStatusException):
    """Creation lock held elsewhere; tracking is disabled, never raised to the job."""

    def __init__(self, key: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["lock_key"] = key
        super().__init__(f"Creation lock unavailable: {key}", details)


class JobStatusNotFoundError(JobStatusException):
    """Raised when a status record cannot be found."""

    def __init__(self, job_status_id: Any, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["job_status_id"] = str(job_status_id)
        super().__init__(f"Job status not found: {job_status_id}", details)
