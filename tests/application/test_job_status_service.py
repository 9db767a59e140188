"""
Test suite for JobStatusService.

Tests the read-side views of status records and their history.

System role: Verification of status reporting
"""

import uuid

import pytest
from sqlalchemy.orm import Session

from job_status.application.services.job_status_service import JobStatusService
from job_status.boundary.db.models import JobStatusEnum
from job_status.core.exceptions import JobStatusNotFoundError


@pytest.fixture
def service(db_session: Session) -> JobStatusService:
    return JobStatusService(db_session)


class TestGetJobStatus:
    """Test suite for JobStatusService.get_job_status() method."""

    def test_get_job_status_should_return_record_view(self, service, sample_job) -> None:
        # Arrange
        sample_job.tracker.set_progress_max(4)
        sample_job.tracker.set_progress_now(1)

        # Act
        view = service.get_job_status(sample_job.get_job_status_id())

        # Assert
        assert view["id"] == str(sample_job.get_job_status_id())
        assert view["status"] == "queued"
        assert view["progress_percentage"] == 25.0
        assert view["is_ended"] is False
        assert view["type"].endswith("SampleJob")

    def test_get_job_status_should_raise_when_missing(self, service) -> None:
        # Act & Assert
        with pytest.raises(JobStatusNotFoundError):
            service.get_job_status(uuid.uuid4())


class TestGetHistory:
    """Test suite for JobStatusService.get_history() method."""

    def test_get_history_should_list_changes(self, service, tracking, sample_job) -> None:
        # Arrange
        tracking.updater.update(sample_job, {"status": JobStatusEnum.EXECUTING})
        sample_job.tracker.set_status_message("Half done")

        # Act
        history = service.get_history(sample_job.get_job_status_id())

        # Assert
        assert [row["sequence"] for row in history] == [1, 2]
        assert [row["status"] for row in history] == ["executing", "executing"]
        assert history[1]["status_message"] == "Half done"
        assert history[1]["metadata"]["changes"] == ["status_message"]

    def test_get_history_should_raise_when_missing(self, service) -> None:
        # Act & Assert
        with pytest.raises(JobStatusNotFoundError):
            service.get_history(uuid.uuid4())


class TestListByStatus:
    """Test suite for JobStatusService.list_by_status() method."""

    def test_list_by_status_should_accept_string_status(self, service, tracking, sample_job_class) -> None:
        # Arrange
        failed = sample_job_class(tracking)
        sample_job_class(tracking)
        tracking.updater.update(failed, {"status": JobStatusEnum.FAILED})

        # Act
        views = service.list_by_status("failed")

        # Assert
        assert [view["id"] for view in views] == [str(failed.get_job_status_id())]
