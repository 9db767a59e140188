"""
Test suite for BaseCRUD generic operations.

Tests create, read, update and delete against an in-memory SQLite store
using the status-record model as the concrete target.

System role: Verification of the generic persistence layer
"""

import uuid

from sqlalchemy.orm import Session

from job_status.boundary.db.CRUD.base_crud import BaseCRUD
from job_status.boundary.db.models import JobStatusEnum, JobStatusModel


class TestBaseCRUDCreate:
    """Test suite for BaseCRUD.create() method."""

    def test_create_should_assign_id_and_defaults(self, db_session: Session) -> None:
        """Test created records receive a UUID, timestamps and column defaults."""
        # Arrange
        crud = BaseCRUD(JobStatusModel)

        # Act
        record = crud.create(db_session, type="ExportJob")

        # Assert
        assert isinstance(record.id, uuid.UUID)
        assert record.status == JobStatusEnum.QUEUED
        assert record.progress_now == 0
        assert record.progress_max == 0
        assert record.attempts == 0
        assert record.created_at is not None


class TestBaseCRUDRead:
    """Test suite for BaseCRUD read methods."""

    def test_get_by_id_should_return_none_when_missing(self, db_session: Session) -> None:
        """Test lookup of an unknown id yields None."""
        # Arrange
        crud = BaseCRUD(JobStatusModel)

        # Act
        result = crud.get_by_id(db_session, uuid.uuid4())

        # Assert
        assert result is None

    def test_get_all_should_respect_limit(self, db_session: Session) -> None:
        """Test get_all() returns at most limit records."""
        # Arrange
        crud = BaseCRUD(JobStatusModel)
        for index in range(3):
            crud.create(db_session, type=f"Job{index}")

        # Act
        limited = crud.get_all(db_session, limit=2)
        everything = crud.get_all(db_session)

        # Assert
        assert len(limited) == 2
        assert len(everything) == 3


class TestBaseCRUDUpdate:
    """Test suite for BaseCRUD.update_instance() method."""

    def test_update_instance_should_apply_all_fields(self, db_session: Session) -> None:
        """Test several fields are written in one call."""
        # Arrange
        crud = BaseCRUD(JobStatusModel)
        record = crud.create(db_session, type="ExportJob")

        # Act
        crud.update_instance(
            db_session,
            record,
            status=JobStatusEnum.EXECUTING,
            progress_max=10,
            status_message="Exporting",
        )

        # Assert
        reloaded = crud.get_by_id(db_session, record.id)
        assert reloaded.status == JobStatusEnum.EXECUTING
        assert reloaded.progress_max == 10
        assert reloaded.status_message == "Exporting"


class TestBaseCRUDDelete:
    """Test suite for BaseCRUD.delete_by_id() method."""

    def test_delete_by_id_should_report_whether_a_row_was_removed(self, db_session: Session) -> None:
        """Test delete returns True once and False for unknown ids."""
        # Arrange
        crud = BaseCRUD(JobStatusModel)
        record = crud.create(db_session, type="ExportJob")

        # Act
        deleted = crud.delete_by_id(db_session, record.id)
        deleted_again = crud.delete_by_id(db_session, record.id)

        # Assert
        assert deleted is True
        assert deleted_again is False
