"""
Event manager resolution.

Maps the event_manager setting ('default', 'legacy' or a dotted class
path) to an EventManager subclass once, at startup.

Dependencies: importlib
System role: Transition policy selection
"""

from importlib import import_module

from job_status.core.event_managers.base import EventManager
from job_status.core.event_managers.default import DefaultEventManager
from job_status.core.event_managers.legacy import LegacyEventManager
from job_status.core.exceptions import ConfigurationError

EVENT_MANAGERS: dict[str, type[EventManager]] = {
    "default": DefaultEventManager,
    "legacy": LegacyEventManager,
}


def import_string(dotted_path: str) -> type:
    """
    Import a class from a 'package.module.ClassName' path.

    Raises:
        ConfigurationError: If the path cannot be imported
    """
    module_path, _, class_name = dotted_path.rpartition(".")
    if not module_path:
        raise ConfigurationError(f"Not a dotted path: {dotted_path}")
    try:
        return getattr(import_module(module_path), class_name)
    except (ImportError, AttributeError) as e:
        raise ConfigurationError(f"Cannot import {dotted_path}: {e}") from e


def resolve_event_manager(name: str) -> type[EventManager]:
    """
    Resolve an event manager class from configuration.

    Args:
        name: 'default', 'legacy' or a dotted path to an EventManager subclass

    Returns:
        type[EventManager]: Selected policy class

    Raises:
        ConfigurationError: Unknown name or a class that is not an EventManager
    """
    if name in EVENT_MANAGERS:
        return EVENT_MANAGERS[name]

    manager_class = import_string(name)
    if not (isinstance(manager_class, type) and issubclass(manager_class, EventManager)):
        raise ConfigurationError(
            f"{name} is not an EventManager subclass",
            option="event_manager",
        )
    return manager_class
