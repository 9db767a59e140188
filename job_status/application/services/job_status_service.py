"""
Job status service.

Read-side queries for operators and dashboards: current state of a job,
its history and jobs by status.

Dependencies: sqlalchemy, job_status.boundary.db
System role: Status reporting
"""

from typing import Any
from uuid import UUID

from sqlalchemy.orm import Session

from job_status.boundary.db.CRUD.job_status_crud import JobStatusCRUD, job_status_crud
from job_status.boundary.db.CRUD.job_status_history_crud import job_status_history_crud
from job_status.boundary.db.models.job_status_model import JobStatusEnum, JobStatusModel
from job_status.core.exceptions import JobStatusNotFoundError


def _isoformat(value) -> str | None:
    return value.isoformat() if value is not None else None


class JobStatusService:
    """
    Job status reporting service.

    Wraps the status and history CRUDs with dict views suitable for
    JSON responses.
    """

    def __init__(self, db: Session, crud: JobStatusCRUD = job_status_crud) -> None:
        """
        Initialize job status service.

        Args:
            db: Session for the status store
            crud: Status record CRUD (custom model deployments pass their own)
        """
        self.db = db
        self.crud = crud

    def _get_or_raise(self, job_status_id: UUID) -> JobStatusModel:
        record = self.crud.get_by_id(self.db, job_status_id)
        if record is None:
            raise JobStatusNotFoundError(job_status_id)
        return record

    def get_job_status(self, job_status_id: UUID) -> dict[str, Any]:
        """
        Get the current state of a tracked job.

        Args:
            job_status_id: Status record id

        Returns:
            dict: Status record fields plus derived flags

        Raises:
            JobStatusNotFoundError: If the record doesn't exist
        """
        return self._to_dict(self._get_or_raise(job_status_id))

    @staticmethod
    def _to_dict(record: JobStatusModel) -> dict[str, Any]:
        return {
            "id": str(record.id),
            "type": record.type,
            "status": JobStatusEnum(record.status).value,
            "status_message": record.status_message,
            "progress_now": record.progress_now,
            "progress_max": record.progress_max,
            "progress_percentage": record.progress_percentage,
            "is_ended": record.is_ended,
            "input": record.input,
            "output": record.output,
            "job_id": record.job_id,
            "queue": record.queue,
            "unique_id": record.unique_id,
            "batch_id": record.batch_id,
            "chain_id": record.chain_id,
            "current_step": record.current_step,
            "total_jobs": record.total_jobs,
            "attempts": record.attempts,
            "started_at": _isoformat(record.started_at),
            "finished_at": _isoformat(record.finished_at),
            "created_at": _isoformat(record.created_at),
            "updated_at": _isoformat(record.updated_at),
        }

    def get_history(self, job_status_id: UUID) -> list[dict[str, Any]]:
        """
        Get the status history of a tracked job, oldest first.

        Raises:
            JobStatusNotFoundError: If the record doesn't exist
        """
        self._get_or_raise(job_status_id)
        rows = job_status_history_crud.get_for_job_status(self.db, job_status_id)
        return [
            {
                "sequence": row.sequence,
                "status": JobStatusEnum(row.status).value,
                "status_message": row.status_message,
                "progress_now": row.progress_now,
                "progress_max": row.progress_max,
                "metadata": row.history_metadata,
                "created_at": _isoformat(row.created_at),
            }
            for row in rows
        ]

    def list_by_status(
        self,
        status: JobStatusEnum | str,
        limit: int | None = 50,
    ) -> list[dict[str, Any]]:
        """List jobs currently in a status, newest first."""
        records = self.crud.get_by_status(self.db, JobStatusEnum(status), limit)
        return [self._to_dict(record) for record in records]
