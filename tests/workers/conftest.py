"""
Worker test fixtures.

Provides fake Celery tasks carrying a request context shaped like the
one Celery exposes during execution.
"""

from types import SimpleNamespace
from typing import Any, Callable

import pytest


class FakeTask:
    """
    Bound task double.

    A plain class rather than a namespace: Celery signals hash the sender
    when dispatching.
    """

    def __init__(self, request: SimpleNamespace, max_retries: int | None, name: str = "tasks.export") -> None:
        self.name = name
        self.request = request
        self.max_retries = max_retries


@pytest.fixture
def make_task() -> Callable[..., FakeTask]:
    """
    Build a fake bound task.

    Usage:
        task = make_task(status_id, retries=1, max_retries=3)
    """

    def _make(
        status_id: Any = None,
        retries: int = 0,
        max_retries: int | None = 3,
        task_id: str = "task-1",
        queue: str = "exports",
    ) -> FakeTask:
        request = SimpleNamespace(
            id=task_id,
            retries=retries,
            delivery_info={"routing_key": queue},
            headers=None,
        )
        if status_id is not None:
            request.job_status_id = str(status_id)
        return FakeTask(request, max_retries)

    return _make
