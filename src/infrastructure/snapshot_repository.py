"""SQLAlchemy-backed storage of the working portfolio snapshot."""

from collections.abc import Callable
from datetime import datetime, timezone

from sqlalchemy import text

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.snapshot_repository import SnapshotRepositoryPort
from src.domain.models.portfolio import PortfolioSnapshot
from src.infrastructure.interchange import dumps_snapshot, loads_snapshot
from src.infrastructure.settings import DEFAULT_STORAGE_KEY

CREATE_SNAPSHOTS_SQL = """
CREATE TABLE IF NOT EXISTS portfolio_snapshots (
    key TEXT PRIMARY KEY,
    payload TEXT NOT NULL,
    saved_at TEXT NOT NULL
)
"""

SELECT_SNAPSHOT_SQL = text(
    """
    SELECT payload, saved_at
    FROM portfolio_snapshots
    WHERE key = :key
    """
)

DELETE_SNAPSHOT_SQL = text(
    """
    DELETE FROM portfolio_snapshots
    WHERE key = :key
    """
)

INSERT_SNAPSHOT_SQL = text(
    """
    INSERT INTO portfolio_snapshots (key, payload, saved_at)
    VALUES (:key, :payload, :saved_at)
    """
)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SqlAlchemySnapshotRepository(SnapshotRepositoryPort):
    """Snapshot store keeping the interchange document in one table row."""

    def __init__(
        self,
        db_port: DatabaseEnginePort,
        storage_key: str = DEFAULT_STORAGE_KEY,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the snapshot store engine.
            storage_key: Row key of the working snapshot.
            clock: Source of the ``saved_at`` timestamp.
        """
        self._db_port = db_port
        self._storage_key = storage_key
        self._clock = clock
        self._prepared = False

    def _prepare(self) -> None:
        """Ensure the snapshots table exists."""
        if self._prepared:
            return
        engine = self._db_port.get_engine()
        with engine.begin() as conn:
            conn.exec_driver_sql(CREATE_SNAPSHOTS_SQL)
        self._prepared = True

    def load(self) -> PortfolioSnapshot | None:
        """Return the stored snapshot, or None when nothing is saved.

        Raises:
            InterchangeFormatError: If the stored payload is corrupt.
        """
        self._prepare()
        engine = self._db_port.get_engine()
        with engine.connect() as conn:
            row = conn.execute(
                SELECT_SNAPSHOT_SQL,
                {"key": self._storage_key},
            ).first()
        if row is None:
            return None
        return loads_snapshot(row.payload)

    def last_saved_at(self) -> datetime | None:
        """Return when the snapshot was last saved, if ever."""
        self._prepare()
        engine = self._db_port.get_engine()
        with engine.connect() as conn:
            row = conn.execute(
                SELECT_SNAPSHOT_SQL,
                {"key": self._storage_key},
            ).first()
        if row is None:
            return None
        return datetime.fromisoformat(row.saved_at)

    def save(self, snapshot: PortfolioSnapshot) -> None:
        """Replace the stored snapshot with ``snapshot``."""
        self._prepare()
        saved_at = self._clock()
        params = {
            "key": self._storage_key,
            "payload": dumps_snapshot(snapshot, saved_at),
            "saved_at": saved_at.isoformat(),
        }
        engine = self._db_port.get_engine()
        with engine.begin() as conn:
            conn.execute(DELETE_SNAPSHOT_SQL, {"key": self._storage_key})
            conn.execute(INSERT_SNAPSHOT_SQL, params)

    def clear(self) -> None:
        """Remove the stored snapshot."""
        self._prepare()
        engine = self._db_port.get_engine()
        with engine.begin() as conn:
            conn.execute(DELETE_SNAPSHOT_SQL, {"key": self._storage_key})


__all__ = [
    "SqlAlchemySnapshotRepository",
    "CREATE_SNAPSHOTS_SQL",
]
