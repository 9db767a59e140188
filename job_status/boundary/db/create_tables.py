"""
Database table creation script.

Creates the status and history tables using SQLAlchemy metadata.

Dependencies: sqlalchemy, job_status.configs
System role: Database schema initialization

Usage:
    python -m job_status.boundary.db.create_tables
"""

import logging

from sqlalchemy.engine import Engine

from job_status.boundary.db.base import Base
from job_status.boundary.db.connection import get_engine, resolve_database_url
from job_status.configs import get_settings

# Import all models to register them with Base.metadata
from job_status.boundary.db.models.job_status_model import JobStatusModel  # noqa: F401
from job_status.boundary.db.models.job_status_history_model import JobStatusHistoryModel  # noqa: F401

logger = logging.getLogger(__name__)


def _default_engine() -> Engine:
    settings = get_settings()
    url = resolve_database_url(settings.database, settings.job_status.database_connection)
    return get_engine(url, settings.database.echo_sql)


def create_all_tables(engine: Engine | None = None) -> None:
    """
    Create all tables from registered ORM models.

    Idempotent: existing tables remain unchanged.

    Args:
        engine: Target engine (defaults to the configured status store)

    Raises:
        SQLAlchemyError: If database connection fails or table creation fails
    """
    engine = engine or _default_engine()
    Base.metadata.create_all(bind=engine)
    logger.info(f"{__name__}:create_all_tables - Tables created", extra={"url": str(engine.url)})


def drop_all_tables(engine: Engine | None = None) -> None:
    """
    Drop the status and history tables and their data.

    WARNING: Irreversible data loss. Only use in development environments.
    """
    engine = engine or _default_engine()
    Base.metadata.drop_all(bind=engine)
    logger.info(f"{__name__}:drop_all_tables - Tables dropped", extra={"url": str(engine.url)})


if __name__ == "__main__":
    from job_status.observability import configure_logging

    configure_logging()
    create_all_tables()
