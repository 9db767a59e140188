"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.

Dependencies: All config modules
System role: Central configuration aggregator
"""

from functools import lru_cache

from job_status.configs.base import BaseSettings
from job_status.configs.celery_config import CelerySettings
from job_status.configs.database import DatabaseSettings
from job_status.configs.job_status import JobStatusSettings
from job_status.configs.lock import LockSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    # Aggregated settings
    database: DatabaseSettings = DatabaseSettings()
    job_status: JobStatusSettings = JobStatusSettings()
    lock: LockSettings = LockSettings()
    celery: CelerySettings = CelerySettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Environment variables are loaded once at startup. Components receive
    the relevant settings section at construction time instead of
    calling this function themselves.

    Returns:
        Settings: Application settings instance

    Usage:
        from job_status.configs import get_settings
        settings = get_settings()
    """
    return Settings()
