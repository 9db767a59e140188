"""
Tracking adapter for job objects.

Composition instead of inheritance: a job owns a Trackable (created by
JobStatusTracking.track(job)) that carries the job's TrackingState and
exposes the progress/status operations. The job itself only needs to
expose get_job_status_id(), usually by delegating to its tracker.

Usage:
    class ExportJob:
        def __init__(self, tracking, user_id):
            self.user_id = user_id
            self.tracker = tracking.track(self)
            self.tracker.prepare_status({"input": {"user_id": user_id}})

        def get_job_status_id(self):
            return self.tracker.get_job_status_id()

        def unique_id(self):
            return self.user_id

Dependencies: job_status.core
System role: Per-job tracking state and progress throttling
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from job_status.boundary.db.models.job_status_model import JobStatusEnum
from job_status.configs.job_status import JobStatusSettings
from job_status.core.contracts import StatusId
from job_status.core.creation_guard import CreationGuard, display_name
from job_status.core.job_status_updater import JobStatusUpdater


@dataclass
class TrackingState:
    """
    Owned tracking state of one job instance.

    Attributes:
        status_id: Status record id, None while untracked
        progress_now: Latest in-memory progress (persisted or not)
        progress_max: Latest progress maximum
        should_track: False once tracking was disabled for this instance
    """

    status_id: StatusId | None = None
    progress_now: int = 0
    progress_max: int = 0
    should_track: bool = True


class Trackable:
    """Status and progress operations bound to a single job instance."""

    def __init__(
        self,
        job: Any,
        settings: JobStatusSettings,
        guard: CreationGuard,
        updater: JobStatusUpdater,
        state: TrackingState | None = None,
    ) -> None:
        self.job = job
        self.settings = settings
        self.guard = guard
        self.updater = updater
        self.state = state or TrackingState()

    def get_job_status_id(self) -> StatusId | None:
        """Status record id, or None when the job is not tracked."""
        return self.state.status_id

    @property
    def is_tracking(self) -> bool:
        return self.state.should_track and self.state.status_id is not None

    def disable(self) -> None:
        """Stop tracking; must be called before prepare_status() to skip creation."""
        self.state.should_track = False

    def prepare_status(self, data: dict[str, Any] | None = None) -> None:
        """
        Create the status record through the creation guard.

        Call once, when the job is constructed. On any failure tracking is
        disabled for the rest of this instance's life and never retried.

        Args:
            data: Initial field values (custom fields, chain info, input)
        """
        if not self.state.should_track:
            return

        data = dict(data or {})
        if not self.settings.track_input:
            data.pop("input", None)
        if not self.settings.track_output:
            data.pop("output", None)

        status_id = self.guard.create(self.job, data)
        if status_id is None:
            self.state.should_track = False
            return
        self.state.status_id = status_id

    def prepare_for_execution(self, extra: dict[str, Any] | None = None) -> None:
        """Create the record inside the worker and mark it executing at once."""
        self.prepare_status(extra)
        self.update({
            "status": JobStatusEnum.EXECUTING,
            "started_at": datetime.now(timezone.utc),
        })

    def set_progress_max(self, value: int) -> None:
        """Persist the progress maximum immediately."""
        self.update({"progress_max": value})
        self.state.progress_max = value

    def set_progress_now(self, value: int, every: int = 1) -> None:
        """
        Record current progress, persisting every Nth value.

        Persists when value is a multiple of every or equals the progress
        maximum; the in-memory value always moves so increment_progress()
        composes between checkpoints.

        Args:
            value: Current progress value
            every: Write throttle; values <= 0 behave as 1
        """
        if every <= 0:
            every = 1

        if value % every == 0 or value == self.state.progress_max:
            self.update({"progress_now": value})
        self.state.progress_now = value

    def increment_progress(self, offset: int = 1, every: int = 1) -> None:
        """Advance progress by offset from the latest in-memory value."""
        self.set_progress_now(self.state.progress_now + offset, every)

    def set_input(self, value: dict[str, Any]) -> None:
        """Store job input; ignored when track_input is off."""
        if not self.settings.track_input:
            return
        self.update({"input": value})

    def set_output(self, value: dict[str, Any]) -> None:
        """Store job output; ignored when track_output is off."""
        if not self.settings.track_output:
            return
        self.update({"output": value})

    def set_status_message(self, message: str) -> None:
        self.update({"status_message": message})

    def set_chain(self, chain_id: str, current_step: int, total_jobs: int) -> None:
        """Record chain correlation (current_step is 1-based)."""
        self.update({
            "chain_id": chain_id,
            "current_step": current_step,
            "total_jobs": total_jobs,
        })

    def update(self, data: dict[str, Any], metadata: dict[str, Any] | None = None) -> None:
        """Send data to the updater; no-op while untracked."""
        if not self.is_tracking:
            return
        self.updater.update(self, data, metadata)

    def get_display_name(self) -> str:
        return display_name(self.job)
