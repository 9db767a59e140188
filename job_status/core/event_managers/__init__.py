"""
Lifecycle transition policies.

Exports:
  - EventManager: Policy base class
  - DefaultEventManager: Strict policy (failed vs retrying by attempts)
  - LegacyEventManager: Failures always retrying, timeout is final
  - resolve_event_manager(): Config-time policy selection
"""

from job_status.core.event_managers.base import EventManager
from job_status.core.event_managers.default import DefaultEventManager
from job_status.core.event_managers.legacy import LegacyEventManager
from job_status.core.event_managers.registry import import_string, resolve_event_manager

__all__ = [
    "EventManager",
    "DefaultEventManager",
    "LegacyEventManager",
    "import_string",
    "resolve_event_manager",
]
