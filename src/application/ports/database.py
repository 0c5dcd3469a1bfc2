"""Database ports for the dashboard.

Infrastructure implementations provide concrete adapters that satisfy
these protocols.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the database engine of the snapshot store."""

    def get_engine(self) -> Engine:
        """Get the engine for the snapshot store.

        Returns:
            Engine: SQLAlchemy engine.
        """


__all__ = ["DatabaseEnginePort"]
