"""
Logger configuration.

Tracking modules log with structured context passed through `extra`
(job_status_id, job_type, lock_key, event, ...). ContextFormatter appends
those values to each line so absorbed tracking failures stay traceable to
their status record.

Dependencies: logging (stdlib)
System role: Centralized logging configuration
"""

import logging
import sys

CONTEXT_FIELDS = ("job_status_id", "job_type", "lock_key", "event", "fields", "option")


class ContextFormatter(logging.Formatter):
    """Formatter rendering known `extra` fields as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = [
            f"{field}={getattr(record, field)}"
            for field in CONTEXT_FIELDS
            if hasattr(record, field)
        ]
        if context:
            line = f"{line} [{' '.join(context)}]"
        return line


def configure_logging(level: str = "INFO") -> None:
    """
    Install a single stdout handler on the root logger.

    Safe to call more than once; previous root handlers are replaced.

    Args:
        level: Root log level name (usually Settings.log_level)
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ContextFormatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    ))

    root_logger.setLevel(level.upper())
    root_logger.addHandler(handler)

    # Worker libraries are chatty at INFO
    for name in ("sqlalchemy.engine", "celery", "kombu"):
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a named logger.

    Args:
        name: Logger name (usually __name__)
    """
    return logging.getLogger(name)
