"""
Job status CRUD operations.

Extends BaseCRUD with status-record queries used by operators and by the
creation guard.

Dependencies: sqlalchemy, job_status.boundary.db.models
System role: Status record persistence
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from job_status.boundary.db.CRUD.base_crud import BaseCRUD
from job_status.boundary.db.models.job_status_model import JobStatusEnum, JobStatusModel


class JobStatusCRUD(BaseCRUD[JobStatusModel]):
    """
    CRUD operations for status records.

    The model is configurable so deployments can substitute a subclass
    of JobStatusModel carrying extra columns.
    """

    def __init__(self, model: type[JobStatusModel] = JobStatusModel) -> None:
        super().__init__(model)

    def get_by_status(
        self,
        session: Session,
        status: JobStatusEnum,
        limit: int | None = None,
    ) -> Sequence[JobStatusModel]:
        """
        Retrieve records in a given status, newest first.

        Args:
            session: Database session
            status: Lifecycle state to filter by
            limit: Maximum number of records to return

        Returns:
            Sequence of matching records
        """
        stmt = (
            select(self.model)
            .where(self.model.status == status)
            .order_by(self.model.created_at.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        return session.execute(stmt).scalars().all()

    def get_by_job_id(self, session: Session, job_id: str) -> JobStatusModel | None:
        """Retrieve the record for a queue-assigned job id."""
        stmt = select(self.model).where(self.model.job_id == job_id)
        return session.execute(stmt).scalars().first()

    def get_by_unique_id(self, session: Session, unique_id: str) -> Sequence[JobStatusModel]:
        """Retrieve every record created for a logical uniqueness key."""
        stmt = (
            select(self.model)
            .where(self.model.unique_id == unique_id)
            .order_by(self.model.created_at)
        )
        return session.execute(stmt).scalars().all()


job_status_crud = JobStatusCRUD()
