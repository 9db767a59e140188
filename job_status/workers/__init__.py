"""
Celery workers module.

Queue integration: task signals become lifecycle events and dispatched
tasks carry their status-record id.

Dependencies: celery, job_status.configs
System role: Queue lifecycle integration
"""

from job_status.workers.dispatcher import TrackedDispatcher
from job_status.workers.queue_job import CeleryQueueJob, status_id_from_request, task_tracker
from job_status.workers.signals import CelerySignalBinding, connect_signals

__all__ = [
    "TrackedDispatcher",
    "CeleryQueueJob",
    "status_id_from_request",
    "task_tracker",
    "CelerySignalBinding",
    "connect_signals",
]
