"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_engine(), get_session_factory(), session_scope(): Connection management
  - JobStatusModel, JobStatusHistoryModel, JobStatusEnum: Status entities
  - job_status_crud, job_status_history_crud: CRUD operation singletons

Dependencies: sqlalchemy, job_status.configs
System role: Persistent store for status records and their history
"""

from job_status.boundary.db.base import Base, TimestampMixin, UUIDMixin
from job_status.boundary.db.connection import (
    get_engine,
    get_session_factory,
    resolve_database_url,
    session_scope,
)
from job_status.boundary.db.models import JobStatusEnum, JobStatusHistoryModel, JobStatusModel
from job_status.boundary.db.CRUD import (
    BaseCRUD,
    JobStatusCRUD,
    JobStatusHistoryCRUD,
    job_status_crud,
    job_status_history_crud,
)

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    # Connection
    "get_engine",
    "get_session_factory",
    "resolve_database_url",
    "session_scope",
    # Models
    "JobStatusEnum",
    "JobStatusModel",
    "JobStatusHistoryModel",
    # CRUD classes
    "BaseCRUD",
    "JobStatusCRUD",
    "JobStatusHistoryCRUD",
    # CRUD singletons
    "job_status_crud",
    "job_status_history_crud",
]
