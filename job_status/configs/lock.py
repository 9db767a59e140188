"""
Lock provider configuration settings.

Dependencies: pydantic_settings
System role: Distributed lock backend selection
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from job_status.configs.base import BaseSettings


class LockSettings(BaseSettings):
    """Redis lock backend configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="REDIS_",
        case_sensitive=False,
        extra="ignore",
    )

    url: str | None = Field(
        default=None,
        description="Redis URL for creation locks; unset uses an in-process lock",
    )
