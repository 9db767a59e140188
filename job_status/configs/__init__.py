"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings.
All config modules support environment variable mapping with validation.
"""

from job_status.configs.job_status import JobStatusSettings
from job_status.configs.settings import Settings, get_settings

__all__ = ["JobStatusSettings", "Settings", "get_settings"]
