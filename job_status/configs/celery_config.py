"""
Celery configuration settings.

Broker, result backend and execution limits for the queue whose task
lifecycle is tracked. Time limits matter to tracking: a task stopped by
its soft or hard limit is reported as timed out (failed).

Dependencies: pydantic, pydantic_settings
System role: Task queue configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from job_status.configs.base import BaseSettings


class CelerySettings(BaseSettings):
    """Celery broker/backend and task execution configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CELERY_",
        case_sensitive=False,
        extra="ignore",
    )

    broker_host: str = Field(default="localhost", description="RabbitMQ host")
    broker_port: int = Field(default=5672, description="RabbitMQ port")
    broker_user: str = Field(default="guest", description="RabbitMQ user")
    broker_password: str = Field(default="guest", description="RabbitMQ password")
    broker_vhost: str = Field(default="/", description="RabbitMQ virtual host")
    broker: str | None = Field(
        default=None,
        description="Full broker URL; overrides the broker_* fields",
    )

    result_backend: str | None = Field(
        default=None,
        description="Result backend URL; None disables result storage",
    )

    task_serializer: str = Field(default="json", description="Task serialization format")
    accept_content: list[str] = Field(default=["json"], description="Accepted content types")
    timezone: str = Field(default="UTC", description="Celery timezone")

    task_max_retries: int = Field(
        default=3,
        description="Default retry limit; attempts allowed are this plus one",
    )
    task_soft_time_limit: int | None = Field(
        default=None,
        description="Seconds before SoftTimeLimitExceeded is raised in the task",
    )
    task_time_limit: int | None = Field(
        default=None,
        description="Seconds before the worker process running the task is killed",
    )

    @property
    def broker_url(self) -> str:
        """
        Construct the broker URL.

        Returns:
            str: Celery-compatible broker URL
        """
        if self.broker:
            return self.broker
        return (
            f"amqp://{self.broker_user}:{self.broker_password}"
            f"@{self.broker_host}:{self.broker_port}/{self.broker_vhost}"
        )
