"""
Job status history ORM model.

Append-only snapshot of a status record, written after each persisted
status or progress change. Rows are never updated; they are removed only
by cascade when the parent status record is deleted. Rows are ordered by
a per-record sequence number; created_at alone can tie within one clock
tick.

Dependencies: sqlalchemy, job_status.boundary.db.base
System role: Audit trail for job lifecycle
"""

from uuid import UUID

from sqlalchemy import ForeignKey, Index, Integer, JSON, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from job_status.boundary.db.base import Base, CreatedAtMixin, UUIDMixin
from job_status.boundary.db.models.job_status_model import JobStatusEnum, status_column_type


class JobStatusHistoryModel(Base, UUIDMixin, CreatedAtMixin):
    """
    Immutable history row owned by a JobStatusModel.

    Attributes:
        id: UUID primary key (auto-generated)
        job_status_id: Owning status record (cascade delete)
        sequence: 1-based position within the owning record's history
        status: Status after the change (indexed)
        status_message: Message after the change
        progress_now: Progress counter after the change
        progress_max: Progress maximum after the change
        history_metadata: Arbitrary snapshot (stored in the "metadata" column)
        created_at: When the change was recorded (no updated_at)
    """

    __tablename__ = "job_status_histories"
    __table_args__ = (Index("ix_job_status_histories_job_status_id_sequence", "job_status_id", "sequence"),)

    job_status_id: Mapped[UUID] = mapped_column(
        ForeignKey("job_statuses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    sequence: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    status: Mapped[JobStatusEnum] = mapped_column(
        status_column_type(),
        nullable=False,
        index=True,
    )
    status_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    progress_now: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    progress_max: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    history_metadata: Mapped[dict | None] = mapped_column(
        "metadata",
        JSON,
        nullable=True,
        doc="Snapshot of attempts, job/queue identifiers and changed fields",
    )

    job_status = relationship("JobStatusModel", back_populates="histories")
