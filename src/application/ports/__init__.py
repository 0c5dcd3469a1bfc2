"""Application ports package."""

from .database import DatabaseEnginePort
from .snapshot_repository import SnapshotRepositoryPort, SnapshotSaverPort

__all__ = [
    "DatabaseEnginePort",
    "SnapshotRepositoryPort",
    "SnapshotSaverPort",
]
