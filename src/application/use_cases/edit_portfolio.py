"""Use case applying edits to the snapshot and persisting the result."""

from collections.abc import Callable

from src.application.ports.snapshot_repository import (
    SnapshotRepositoryPort,
    SnapshotSaverPort,
)
from src.domain.defaults import default_snapshot
from src.domain.models import PortfolioSnapshot
from src.infrastructure.logging.logger import get_app_logger

Edit = Callable[..., PortfolioSnapshot]


class EditPortfolioUseCase:
    """Apply pure snapshot edits and save after each one."""

    def __init__(
        self,
        repository: SnapshotRepositoryPort,
        saver: SnapshotSaverPort | None = None,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port storing the working snapshot.
            saver: Optional deferred saver; edits are saved immediately
                through the repository when omitted.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = repository
        self._saver = saver
        self._logger = logger or get_app_logger()

    def apply(
        self,
        snapshot: PortfolioSnapshot,
        edit: Edit,
        *args,
        **kwargs,
    ) -> PortfolioSnapshot:
        """Return ``edit(snapshot, *args, **kwargs)`` after saving it.

        Args:
            snapshot: Snapshot before the edit.
            edit: Pure function from ``src.domain.services.editing``.

        Returns:
            PortfolioSnapshot: Edited snapshot.

        Raises:
            PortfolioError: Propagated from the edit; nothing is saved.
        """
        updated = edit(snapshot, *args, **kwargs)
        if self._saver is not None:
            self._saver.schedule(updated)
        else:
            self._repository.save(updated)
        self._logger.info(f"Applied edit {getattr(edit, '__name__', edit)}")
        return updated

    def save_now(self, snapshot: PortfolioSnapshot) -> None:
        """Persist ``snapshot`` immediately, bypassing any debounce."""
        if self._saver is not None:
            self._saver.schedule(snapshot)
            self._saver.flush()
        else:
            self._repository.save(snapshot)

    def reset(self) -> PortfolioSnapshot:
        """Clear storage and return the demo household."""
        if self._saver is not None:
            self._saver.cancel()
        self._repository.clear()
        self._logger.info("Snapshot reset to defaults")
        return default_snapshot()


__all__ = ["EditPortfolioUseCase"]
