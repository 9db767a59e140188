"""
Celery application factory.

Configures logging, builds the Celery app from settings and binds its
task signals to the tracking engine.

Dependencies: celery, job_status.configs
System role: Queue integration bootstrap
"""

from celery import Celery

from job_status.configs import Settings
from job_status.dependencies import JobStatusTracking
from job_status.observability import configure_logging
from job_status.workers.signals import CelerySignalBinding, connect_signals


def create_celery_app(
    settings: Settings,
    tracking: JobStatusTracking,
    name: str = "job_status",
) -> tuple[Celery, CelerySignalBinding]:
    """
    Create a Celery app whose tasks are tracked.

    Args:
        settings: Application settings (celery section)
        tracking: Tracking engine to notify
        name: Celery main module name

    Returns:
        tuple: The Celery app and the connected signal binding
    """
    configure_logging(settings.log_level)
    celery_config = settings.celery

    celery_app = Celery(
        name,
        broker=celery_config.broker_url,
        backend=celery_config.result_backend,
    )
    celery_app.conf.update(
        task_serializer=celery_config.task_serializer,
        accept_content=celery_config.accept_content,
        timezone=celery_config.timezone,
        task_soft_time_limit=celery_config.task_soft_time_limit,
        task_time_limit=celery_config.task_time_limit,
        task_track_started=True,
    )
    celery_app.Task.max_retries = celery_config.task_max_retries
    return celery_app, connect_signals(tracking)
