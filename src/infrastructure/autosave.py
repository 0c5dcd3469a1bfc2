"""Debounced autosave of edited snapshots."""

import threading
from collections.abc import Callable

from src.application.ports.snapshot_repository import (
    SnapshotRepositoryPort,
    SnapshotSaverPort,
)
from src.domain.models.portfolio import PortfolioSnapshot
from src.infrastructure.logging.logger import get_app_logger

TimerFactory = Callable[[float, Callable[[], None]], threading.Timer]


class DebouncedSaver(SnapshotSaverPort):
    """Save the latest snapshot once edits pause for ``delay_seconds``.

    Each ``schedule`` cancels the pending save and starts a new timer, so a
    burst of edits results in a single write of the last snapshot.
    """

    def __init__(
        self,
        repository: SnapshotRepositoryPort,
        delay_seconds: float = 3.0,
        logger=None,
        timer_factory: TimerFactory = threading.Timer,
    ) -> None:
        """Initialize the saver.

        Args:
            repository: Destination of the saved snapshots.
            delay_seconds: Quiet period before saving.
            logger: Optional logger compatible with logging.Logger-like API.
            timer_factory: Builds the cancellable timer; injectable in tests.
        """
        self._repository = repository
        self._delay_seconds = delay_seconds
        self._logger = logger or get_app_logger()
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._pending: PortfolioSnapshot | None = None

    @property
    def has_pending(self) -> bool:
        """Return True while an edit is waiting to be saved."""
        with self._lock:
            return self._pending is not None

    def schedule(self, snapshot: PortfolioSnapshot) -> None:
        """Queue ``snapshot`` for saving, superseding any queued one."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._pending = snapshot
            timer = self._timer_factory(self._delay_seconds, self.flush)
            timer.daemon = True
            self._timer = timer
        timer.start()

    def flush(self) -> None:
        """Save the queued snapshot now, if any."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            snapshot = self._pending
            self._pending = None
        if snapshot is None:
            return
        self._repository.save(snapshot)
        self._logger.info(
            f"Snapshot saved: assets={len(snapshot.assets)}, "
            f"liabilities={len(snapshot.liabilities)}"
        )

    def cancel(self) -> None:
        """Drop the queued snapshot without saving it."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._pending = None


__all__ = ["DebouncedSaver"]
