"""
Database models package.

Exports:
  - JobStatusModel, JobStatusEnum: Status record ORM model and status enum
  - JobStatusHistoryModel: Append-only history ORM model

Dependencies: sqlalchemy, job_status.boundary.db.base
System role: Database model definitions for job status tracking
"""

from job_status.boundary.db.models.job_status_model import JobStatusEnum, JobStatusModel
from job_status.boundary.db.models.job_status_history_model import JobStatusHistoryModel

__all__ = [
    "JobStatusEnum",
    "JobStatusModel",
    "JobStatusHistoryModel",
]
