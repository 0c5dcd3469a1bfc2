"""Use cases exporting and importing portfolio backups."""

from collections.abc import Callable
from datetime import datetime, timezone

from src.application.ports.snapshot_repository import (
    SnapshotRepositoryPort,
    SnapshotSaverPort,
)
from src.domain.models import PortfolioSnapshot
from src.infrastructure.interchange import (
    dumps_snapshot,
    export_filename,
    loads_snapshot,
)
from src.infrastructure.logging.logger import get_app_logger


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ExportPortfolioUseCase:
    """Serialize a snapshot to a backup document."""

    def __init__(self, clock: Callable[[], datetime] = _utc_now) -> None:
        self._clock = clock

    def execute(self, snapshot: PortfolioSnapshot) -> tuple[str, str]:
        """Return the backup file name and its JSON content."""
        now = self._clock()
        return export_filename(now.date()), dumps_snapshot(snapshot, now)


class ImportPortfolioUseCase:
    """Restore a snapshot from a backup document and save it."""

    def __init__(
        self,
        repository: SnapshotRepositoryPort,
        logger=None,
        saver: SnapshotSaverPort | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port receiving the imported snapshot.
            logger: Optional logger compatible with logging.Logger-like API.
            saver: Deferred saver whose queued edit the import replaces.
        """
        self._repository = repository
        self._logger = logger or get_app_logger()
        self._saver = saver

    def execute(self, text: str | bytes) -> PortfolioSnapshot:
        """Parse, persist and return the imported snapshot.

        Raises:
            InterchangeFormatError: If the backup cannot be parsed; storage
                is left untouched.
        """
        snapshot = loads_snapshot(text)
        if self._saver is not None:
            self._saver.cancel()
        self._repository.save(snapshot)
        self._logger.info(
            f"Imported snapshot: assets={len(snapshot.assets)}, "
            f"liabilities={len(snapshot.liabilities)}"
        )
        return snapshot


__all__ = ["ExportPortfolioUseCase", "ImportPortfolioUseCase"]
