"""
Job status history CRUD operations.

Append-only: rows are inserted from a status record snapshot and read
back in the order they were appended. No update path exists.

Dependencies: sqlalchemy, job_status.boundary.db.models
System role: Status history persistence
"""

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from job_status.boundary.db.CRUD.base_crud import BaseCRUD
from job_status.boundary.db.models.job_status_history_model import JobStatusHistoryModel
from job_status.boundary.db.models.job_status_model import JobStatusModel


class JobStatusHistoryCRUD(BaseCRUD[JobStatusHistoryModel]):
    """CRUD operations for status history rows."""

    def __init__(self) -> None:
        super().__init__(JobStatusHistoryModel)

    def append(
        self,
        session: Session,
        job_status: JobStatusModel,
        metadata: dict[str, Any] | None = None,
    ) -> JobStatusHistoryModel:
        """
        Insert a snapshot of the record's current (post-update) values.

        Args:
            session: Database session
            job_status: Status record after the update was flushed
            metadata: Arbitrary snapshot stored alongside the values

        Returns:
            The created history row
        """
        return self.create(
            session,
            job_status_id=job_status.id,
            sequence=self.next_sequence(session, job_status.id),
            status=job_status.status,
            status_message=job_status.status_message,
            progress_now=job_status.progress_now,
            progress_max=job_status.progress_max,
            history_metadata=metadata,
        )

    def next_sequence(self, session: Session, job_status_id: UUID) -> int:
        """Position of the next history row for a status record, starting at 1."""
        stmt = select(func.max(self.model.sequence)).where(self.model.job_status_id == job_status_id)
        return (session.execute(stmt).scalar() or 0) + 1

    def get_for_job_status(
        self,
        session: Session,
        job_status_id: UUID,
    ) -> Sequence[JobStatusHistoryModel]:
        """
        Retrieve the history of a status record, oldest first.

        Args:
            session: Database session
            job_status_id: Owning status record id

        Returns:
            Sequence of history rows
        """
        stmt = (
            select(self.model)
            .where(self.model.job_status_id == job_status_id)
            .order_by(self.model.sequence, self.model.created_at)
        )
        return session.execute(stmt).scalars().all()


job_status_history_crud = JobStatusHistoryCRUD()
