"""
Job status ORM model.

One row per tracked job instance: current lifecycle state, progress
counters, input/output snapshots and batch/chain correlation fields.

Dependencies: sqlalchemy, job_status.boundary.db.base
System role: Durable status record for background jobs
"""

import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, Integer, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from job_status.boundary.db.base import Base, TimestampMixin, UUIDMixin


class JobStatusEnum(str, enum.Enum):
    """
    Job lifecycle states.

    QUEUED: Job dispatched, waiting for a worker
    EXECUTING: Worker is running the job
    FINISHED: Job completed successfully
    FAILED: Job failed permanently (retries exhausted or timed out)
    RETRYING: Job failed but will be attempted again
    """

    QUEUED = "queued"
    EXECUTING = "executing"
    FINISHED = "finished"
    FAILED = "failed"
    RETRYING = "retrying"

    @property
    def has_ended(self) -> bool:
        """True for the terminal states (finished or failed)."""
        return self in (JobStatusEnum.FINISHED, JobStatusEnum.FAILED)

    @property
    def is_finished(self) -> bool:
        return self is JobStatusEnum.FINISHED

    @property
    def is_failed(self) -> bool:
        return self is JobStatusEnum.FAILED

    @property
    def is_executing(self) -> bool:
        return self is JobStatusEnum.EXECUTING

    @property
    def is_queued(self) -> bool:
        return self is JobStatusEnum.QUEUED

    @property
    def is_retrying(self) -> bool:
        return self is JobStatusEnum.RETRYING

    @classmethod
    def values(cls) -> list[str]:
        """Return all status values as plain strings."""
        return [member.value for member in cls]


def status_column_type() -> Enum:
    """Enum column storing lowercase status values as VARCHAR(16)."""
    return Enum(
        JobStatusEnum,
        native_enum=False,
        length=16,
        values_callable=lambda members: [member.value for member in members],
    )


class JobStatusModel(Base, UUIDMixin, TimestampMixin):
    """
    Status record for a single tracked job instance.

    Created once per job instance (under the creation lock when the job
    declares a uniqueness key) and updated by lifecycle notifications and
    by the job itself while it runs. The job only keeps this row's id.

    Attributes:
        id: UUID primary key (auto-generated)
        type: Job display name or class path
        status: Current lifecycle state (indexed)
        status_message: Free-text description of the current step
        progress_now: Current progress counter (may exceed progress_max)
        progress_max: Target progress counter
        input: Job input snapshot (gated by track_input)
        output: Job output snapshot (gated by track_output)
        job_id: Identifier assigned by the queue once enqueued
        queue: Queue name the job was processed on
        unique_id: Logical deduplication key
        batch_id: Owning batch identifier
        chain_id: Owning chain identifier
        current_step: Approximate position within batch/chain (best-effort)
        total_jobs: Number of jobs in the batch/chain
        attempts: Attempt count reported by the queue
        started_at: When a worker began executing the job
        finished_at: When the job finished, failed or was released
        histories: Append-only status history (cascading delete)

    Relationships:
        histories: One-to-many with JobStatusHistoryModel
    """

    __tablename__ = "job_statuses"

    type: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[JobStatusEnum] = mapped_column(
        status_column_type(),
        nullable=False,
        default=JobStatusEnum.QUEUED,
        index=True,
    )
    status_message: Mapped[str | None] = mapped_column(Text, nullable=True)

    progress_now: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    progress_max: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    input: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    output: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    job_id: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    queue: Mapped[str | None] = mapped_column(String(255), nullable=True)
    unique_id: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)

    batch_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    chain_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    current_step: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
        doc="Approximate; concurrent batch workers may observe the same step",
    )
    total_jobs: Mapped[int | None] = mapped_column(Integer, nullable=True)

    attempts: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    started_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    finished_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    histories = relationship(
        "JobStatusHistoryModel",
        back_populates="job_status",
        cascade="all, delete-orphan",
        order_by="[JobStatusHistoryModel.sequence, JobStatusHistoryModel.created_at]",
    )

    @property
    def is_ended(self) -> bool:
        return JobStatusEnum(self.status).has_ended

    @property
    def is_finished(self) -> bool:
        return JobStatusEnum(self.status).is_finished

    @property
    def is_failed(self) -> bool:
        return JobStatusEnum(self.status).is_failed

    @property
    def is_executing(self) -> bool:
        return JobStatusEnum(self.status).is_executing

    @property
    def is_queued(self) -> bool:
        return JobStatusEnum(self.status).is_queued

    @property
    def is_retrying(self) -> bool:
        return JobStatusEnum(self.status).is_retrying

    @property
    def progress_percentage(self) -> float:
        """Progress as a percentage, 0 when no maximum is set."""
        if not self.progress_max:
            return 0.0
        return round(self.progress_now / self.progress_max * 100, 2)
