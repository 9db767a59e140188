"""
Test suite for Trackable.

Tests record creation on construction, fail-closed disabling, progress
throttling, config-gated input/output and the convenience setters.

System role: Verification of per-job tracking behavior
"""

from unittest.mock import MagicMock

import pytest

from job_status.boundary.db.models import JobStatusEnum
from job_status.configs import Settings
from job_status.core.trackable import Trackable, TrackingState
from job_status.dependencies import JobStatusTracking


@pytest.fixture
def recording_tracker(tracking: JobStatusTracking) -> tuple[Trackable, MagicMock]:
    """Tracker with a mocked updater and a live status id."""
    updater = MagicMock()
    state = TrackingState(status_id=object(), progress_max=12)
    tracker = Trackable(object(), tracking.settings, tracking.guard, updater, state)
    return tracker, updater


def persisted_progress(updater: MagicMock) -> list[int]:
    return [c.args[1]["progress_now"] for c in updater.update.call_args_list if "progress_now" in c.args[1]]


class TestPrepareStatus:
    """Test suite for Trackable.prepare_status() method."""

    def test_prepare_status_should_create_queued_record(self, sample_job, load_record) -> None:
        """Test construction creates a queued record holding the id."""
        # Act
        record = load_record(sample_job.get_job_status_id())

        # Assert
        assert record is not None
        assert record.status == JobStatusEnum.QUEUED
        assert sample_job.tracker.is_tracking is True

    def test_prepare_status_should_store_initial_data(self, tracking, sample_job_class, load_record) -> None:
        """Test initial fields and input are persisted."""
        # Act
        job = sample_job_class(tracking, data={"input": {"rows": 3}, "status_message": "Waiting"})

        # Assert
        record = load_record(job.get_job_status_id())
        assert record.input == {"rows": 3}
        assert record.status_message == "Waiting"

    def test_prepare_status_should_drop_input_when_not_tracked(
        self,
        make_tracking,
        sample_job_class,
        load_record,
    ) -> None:
        """Test track_input=False keeps input out of the record."""
        # Arrange
        tracking = make_tracking(track_input=False)

        # Act
        job = sample_job_class(tracking, data={"input": {"secret": "x"}})

        # Assert
        assert load_record(job.get_job_status_id()).input is None

    def test_prepare_status_should_disable_tracking_when_creation_fails(
        self,
        tracking,
        lock_provider,
        unique_job_class,
    ) -> None:
        """Test a held lock leaves the job untracked for good."""
        # Arrange
        first = unique_job_class(tracking, key="user-7", prepare=False)
        lock_provider.acquire(tracking.guard.lock_key(first), ttl=30)

        # Act
        first.tracker.prepare_status()

        # Assert
        assert first.get_job_status_id() is None
        assert first.tracker.state.should_track is False

    def test_prepare_status_should_not_raise_when_lock_backend_fails(
        self,
        session_factory,
        unique_job_class,
    ) -> None:
        """Test a lock backend outage leaves the job untracked but running."""
        # Arrange
        provider = MagicMock()
        provider.acquire.side_effect = ConnectionError("redis unreachable")
        tracking = JobStatusTracking(Settings(), session_factory=session_factory, lock_provider=provider)

        # Act
        job = unique_job_class(tracking, key="user-7")
        job.tracker.set_progress_now(1)

        # Assert
        assert job.get_job_status_id() is None
        assert job.tracker.is_tracking is False

    def test_prepare_status_should_not_create_when_disabled(self, tracking, sample_job_class) -> None:
        """Test disable() before preparation skips creation."""
        # Arrange
        job = sample_job_class(tracking, prepare=False)
        job.tracker.disable()

        # Act
        job.tracker.prepare_status()

        # Assert
        assert job.get_job_status_id() is None

    def test_untracked_job_updates_should_be_noops(self, tracking, sample_job_class) -> None:
        """Test every operation on an untracked job silently does nothing."""
        # Arrange
        job = sample_job_class(tracking, prepare=False)
        job.tracker.disable()
        job.tracker.updater = MagicMock()

        # Act
        job.tracker.set_progress_max(10)
        job.tracker.set_progress_now(10)
        job.tracker.set_status_message("Nope")

        # Assert
        job.tracker.updater.update.assert_not_called()


class TestProgress:
    """Test suite for progress operations."""

    def test_set_progress_now_should_persist_every_nth_and_final_value(self, recording_tracker) -> None:
        """Test values 1..12 with every=5 persist 5, 10 and 12."""
        # Arrange
        tracker, updater = recording_tracker

        # Act
        for value in range(1, 13):
            tracker.set_progress_now(value, every=5)

        # Assert
        assert persisted_progress(updater) == [5, 10, 12]
        assert tracker.state.progress_now == 12

    @pytest.mark.parametrize("every", [0, -3])
    def test_set_progress_now_should_treat_non_positive_every_as_one(self, recording_tracker, every) -> None:
        """Test every <= 0 persists every value."""
        # Arrange
        tracker, updater = recording_tracker

        # Act
        for value in range(1, 4):
            tracker.set_progress_now(value, every=every)

        # Assert
        assert persisted_progress(updater) == [1, 2, 3]

    def test_increment_progress_should_compose_between_checkpoints(self, recording_tracker) -> None:
        """Test increments continue from unpersisted in-memory values."""
        # Arrange
        tracker, updater = recording_tracker

        # Act
        for _ in range(6):
            tracker.increment_progress(offset=2, every=4)

        # Assert
        assert tracker.state.progress_now == 12
        assert persisted_progress(updater) == [4, 8, 12]

    def test_set_progress_max_should_persist_immediately(self, sample_job, load_record) -> None:
        """Test the maximum is written without throttling."""
        # Act
        sample_job.tracker.set_progress_max(250)

        # Assert
        assert load_record(sample_job.get_job_status_id()).progress_max == 250
        assert sample_job.tracker.state.progress_max == 250

    def test_progress_should_be_stored_end_to_end(self, sample_job, load_record) -> None:
        """Test throttled writes reach the store."""
        # Arrange
        tracker = sample_job.tracker
        tracker.set_progress_max(7)

        # Act
        for value in range(1, 8):
            tracker.set_progress_now(value, every=3)

        # Assert
        record = load_record(sample_job.get_job_status_id())
        assert record.progress_now == 7
        assert record.progress_percentage == 100.0


class TestSetters:
    """Test suite for payload and correlation setters."""

    def test_set_output_should_respect_track_output(self, make_tracking, sample_job_class, load_record) -> None:
        """Test output is ignored when not tracked and stored otherwise."""
        # Arrange
        gated = sample_job_class(make_tracking(track_output=False))
        open_job = sample_job_class(make_tracking())

        # Act
        gated.tracker.set_output({"url": "s3://x"})
        open_job.tracker.set_output({"url": "s3://y"})

        # Assert
        assert load_record(gated.get_job_status_id()).output is None
        assert load_record(open_job.get_job_status_id()).output == {"url": "s3://y"}

    def test_set_input_should_respect_track_input(self, make_tracking, sample_job_class, load_record) -> None:
        """Test set_input() obeys the same gate as initial data."""
        # Arrange
        job = sample_job_class(make_tracking(track_input=False))

        # Act
        job.tracker.set_input({"rows": 1})

        # Assert
        assert load_record(job.get_job_status_id()).input is None

    def test_set_chain_should_store_correlation(self, sample_job, load_record) -> None:
        """Test chain id, step and total are written together."""
        # Act
        sample_job.tracker.set_chain("chain-1", current_step=2, total_jobs=3)

        # Assert
        record = load_record(sample_job.get_job_status_id())
        assert (record.chain_id, record.current_step, record.total_jobs) == ("chain-1", 2, 3)

    def test_set_status_message_should_store_message(self, sample_job, load_record) -> None:
        # Act
        sample_job.tracker.set_status_message("Uploading")

        # Assert
        assert load_record(sample_job.get_job_status_id()).status_message == "Uploading"

    def test_prepare_for_execution_should_mark_executing(
        self,
        tracking,
        sample_job_class,
        load_record,
    ) -> None:
        """Test a worker-created record starts out executing."""
        # Arrange
        job = sample_job_class(tracking, prepare=False)

        # Act
        job.tracker.prepare_for_execution({"status_message": "Inline"})

        # Assert
        record = load_record(job.get_job_status_id())
        assert record.status == JobStatusEnum.EXECUTING
        assert record.started_at is not None
        assert record.status_message == "Inline"

    def test_get_display_name_should_default_to_class_path(self, sample_job) -> None:
        # Assert
        assert sample_job.tracker.get_display_name().endswith("SampleJob")
