"""
Database connection management.

Provides SQLAlchemy engines and session factories keyed by connection URL,
so status writes can target a dedicated database and commit outside the
application's own transactions.

Dependencies: sqlalchemy, job_status.configs
System role: Database connection lifecycle management
"""

from contextlib import contextmanager
from functools import lru_cache
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from job_status.configs.database import DatabaseSettings


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """Turn on FK enforcement so history rows cascade with their parent."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@lru_cache
def get_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create (once per URL) a SQLAlchemy engine.

    SQLite URLs get thread-shareable connections and foreign key
    enforcement; in-memory SQLite uses a single static connection.

    Args:
        database_url: SQLAlchemy URL
        echo: Echo SQL statements to logs

    Returns:
        Engine: Configured SQLAlchemy engine
    """
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in database_url or database_url.rstrip("/") == "sqlite:":
            kwargs["poolclass"] = StaticPool
        engine = create_engine(database_url, echo=echo, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,  # Verify connections before using
    )


def resolve_database_url(
    database: DatabaseSettings,
    database_connection: str | None = None,
) -> str:
    """
    Pick the URL status writes should use.

    Args:
        database: Primary database settings
        database_connection: Dedicated status-store URL, if configured

    Returns:
        str: database_connection when set, otherwise the primary URL
    """
    return database_connection or database.database_url


def get_session_factory(database_url: str, echo: bool = False) -> sessionmaker:
    """
    Create session factory for database operations.

    Returns sessionmaker bound to the cached engine with autoflush=False
    and expire_on_commit=False so loaded records stay readable after commit.

    Args:
        database_url: SQLAlchemy URL
        echo: Echo SQL statements to logs

    Returns:
        sessionmaker: Session factory configured for manual transaction control
    """
    engine = get_engine(database_url, echo)
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@contextmanager
def session_scope(session_factory: sessionmaker) -> Iterator[Session]:
    """
    Provide a transactional scope around a series of operations.

    Commits on success, rolls back and re-raises on error, always closes.

    Args:
        session_factory: Factory producing sessions

    Yields:
        Session: Database session

    Usage:
        with session_scope(factory) as session:
            job_status_crud.create(session, type="ExportJob")
    """
    session = session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
