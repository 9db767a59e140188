"""
Test suite for the Celery application factory.

System role: Verification of queue integration bootstrap
"""

import logging

import pytest

from job_status.configs import Settings
from job_status.workers.app import create_celery_app


@pytest.fixture
def restore_root_logger():
    """Undo the logging configuration applied by the factory."""
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    yield
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


class TestCreateCeleryApp:
    """Test suite for create_celery_app()."""

    def test_create_should_apply_settings_and_bind_signals(self, tracking, restore_root_logger) -> None:
        # Arrange
        settings = Settings()

        # Act
        celery_app, binding = create_celery_app(settings, tracking, name="exports")

        try:
            # Assert
            assert celery_app.main == "exports"
            assert celery_app.conf.task_serializer == "json"
            assert celery_app.conf.broker_url == settings.celery.broker_url
            assert celery_app.Task.max_retries == settings.celery.task_max_retries
            assert binding.tracking is tracking
        finally:
            binding.disconnect()
