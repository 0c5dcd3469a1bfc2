"""Application port for portfolio snapshot persistence."""

from datetime import datetime
from typing import Protocol

from src.domain.models.portfolio import PortfolioSnapshot


class SnapshotRepositoryPort(Protocol):
    """Port storing the single working snapshot of the household."""

    def load(self) -> PortfolioSnapshot | None:
        """Return the stored snapshot, or None when nothing is saved."""

    def save(self, snapshot: PortfolioSnapshot) -> None:
        """Persist ``snapshot``, replacing any stored one."""

    def clear(self) -> None:
        """Remove the stored snapshot."""

    def last_saved_at(self) -> datetime | None:
        """Return when the snapshot was last saved, if ever."""


class SnapshotSaverPort(Protocol):
    """Port for deferred saving of edited snapshots."""

    def schedule(self, snapshot: PortfolioSnapshot) -> None:
        """Queue ``snapshot`` for saving, superseding any queued one."""

    def flush(self) -> None:
        """Save the queued snapshot now."""

    def cancel(self) -> None:
        """Drop the queued snapshot without saving it."""


__all__ = ["SnapshotRepositoryPort", "SnapshotSaverPort"]
