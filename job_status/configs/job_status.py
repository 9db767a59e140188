"""
Job status tracking settings.

Selects the status-record model, the lifecycle event manager, the target
database and which payloads are recorded.

Dependencies: pydantic, pydantic_settings
System role: Tracking engine configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from job_status.configs.base import BaseSettings


class JobStatusSettings(BaseSettings):
    """Tracking engine configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="JOB_STATUS_",
        case_sensitive=False,
        extra="ignore",
    )

    model: str = Field(
        default="job_status.boundary.db.models.job_status_model.JobStatusModel",
        description="Dotted path of the status-record ORM class",
    )
    event_manager: str = Field(
        default="default",
        description="Lifecycle event manager: 'default', 'legacy' or a dotted class path",
    )
    database_connection: str | None = Field(
        default=None,
        description=(
            "Dedicated SQLAlchemy URL for status writes, so they commit outside "
            "the application's transactions. None uses the primary database."
        ),
    )

    track_input: bool = Field(default=True, description="Store job input payloads")
    track_output: bool = Field(default=True, description="Store job output payloads")
    track_history: bool = Field(
        default=True,
        description="Append a history row for every status or progress change",
    )

    lock_ttl_seconds: int = Field(
        default=10,
        description="Lifetime of the record-creation lock",
    )
    lock_wait_seconds: float = Field(
        default=0,
        description="How long to wait for the creation lock (0 = single attempt)",
    )
    lock_prefix: str = Field(
        default="job_status_unique",
        description="Key prefix for creation locks",
    )
