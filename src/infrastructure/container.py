"""Composition root for wiring infrastructure adapters."""

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.snapshot_repository import SnapshotRepositoryPort
from src.infrastructure.autosave import DebouncedSaver
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import DashboardSettings
from src.infrastructure.snapshot_repository import SqlAlchemySnapshotRepository


def build_settings() -> DashboardSettings:
    """Return settings sourced from the environment."""
    return DashboardSettings.from_env()


def build_database_adapter(
    settings: DashboardSettings | None = None,
) -> DatabaseEnginePort:
    """Return the database adapter instance."""
    resolved = settings or build_settings()
    return SqlAlchemyDatabaseEngineAdapter(resolved.db_url)


def build_snapshot_repository(
    db_port: DatabaseEnginePort | None = None,
    settings: DashboardSettings | None = None,
) -> SnapshotRepositoryPort:
    """Return the configured snapshot repository."""
    resolved = settings or build_settings()
    resolved_db = db_port or build_database_adapter(resolved)
    return SqlAlchemySnapshotRepository(
        resolved_db,
        storage_key=resolved.storage_key,
    )


def build_autosaver(
    repository: SnapshotRepositoryPort | None = None,
    settings: DashboardSettings | None = None,
) -> DebouncedSaver:
    """Return a debounced saver writing to the snapshot repository."""
    resolved = settings or build_settings()
    resolved_repository = repository or build_snapshot_repository(
        settings=resolved
    )
    return DebouncedSaver(
        resolved_repository,
        delay_seconds=resolved.autosave_delay_seconds,
        logger=get_app_logger(),
    )


__all__ = [
    "build_settings",
    "build_database_adapter",
    "build_snapshot_repository",
    "build_autosaver",
]
