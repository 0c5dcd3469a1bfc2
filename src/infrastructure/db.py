"""Database infrastructure for the dashboard snapshot store.

This module creates and reuses the SQLAlchemy engine backing the snapshot
repository. SQLite is the default; any SQLAlchemy URL can be configured
through ``DASHBOARD_DB_URL``.
"""

import os
from typing import Optional

import dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool

from src.application.ports.database import DatabaseEnginePort


def _get_env_var(name: str) -> str:
    """Read an environment variable or raise a descriptive error.

    Args:
        name: Name of the environment variable to read.

    Returns:
        str: The raw value of the environment variable.

    Raises:
        RuntimeError: If the environment variable is missing or empty.
    """
    dotenv.load_dotenv()
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing environment variable: {name}")
    return value


def _create_engine(db_url: str) -> Engine:
    """Create a configured SQLAlchemy engine.

    Args:
        db_url: Fully qualified database URL.

    Returns:
        Engine: SQLite engines use the default pool; server databases get a
        small pool with health checks.
    """
    if db_url.startswith("sqlite"):
        return create_engine(
            db_url,
            connect_args={"check_same_thread": False},
            future=True,
        )
    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=5,
        pool_pre_ping=True,
        future=True,
    )


_dashboard_engine: Optional[Engine] = None


def get_dashboard_engine(db_url: str | None = None) -> Engine:
    """Get a singleton SQLAlchemy engine for the snapshot store.

    Args:
        db_url: URL to use on first creation; ``DASHBOARD_DB_URL`` otherwise.

    Returns:
        Engine: Lazily initialized engine.
    """
    global _dashboard_engine
    if _dashboard_engine is None:
        url = db_url or _get_env_var("DASHBOARD_DB_URL")
        _dashboard_engine = _create_engine(url)
    return _dashboard_engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation backed by SQLAlchemy engines."""

    def __init__(self, db_url: str | None = None) -> None:
        """Initialize the adapter.

        Args:
            db_url: Optional URL overriding ``DASHBOARD_DB_URL``.
        """
        self._db_url = db_url

    def get_engine(self) -> Engine:
        """Get the engine for the snapshot store.

        Returns:
            Engine: SQLAlchemy engine.
        """
        return get_dashboard_engine(self._db_url)


__all__ = [
    "get_dashboard_engine",
    "SqlAlchemyDatabaseEngineAdapter",
]
