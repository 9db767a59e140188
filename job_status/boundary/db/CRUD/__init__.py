"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from job_status.boundary.db.CRUD import job_status_crud

    with session_scope(factory) as session:
        record = job_status_crud.get_by_id(session, status_id)
"""

from job_status.boundary.db.CRUD.base_crud import BaseCRUD
from job_status.boundary.db.CRUD.job_status_crud import JobStatusCRUD, job_status_crud
from job_status.boundary.db.CRUD.job_status_history_crud import (
    JobStatusHistoryCRUD,
    job_status_history_crud,
)

__all__ = [
    "BaseCRUD",
    "JobStatusCRUD",
    "job_status_crud",
    "JobStatusHistoryCRUD",
    "job_status_history_crud",
]
