"""
Observability module.

Provides logging configuration for the tracking engine.
"""

from job_status.observability.logger import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
