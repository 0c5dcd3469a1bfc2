"""Tests for the SQLAlchemy snapshot repository and the debounced saver."""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

from sqlalchemy import create_engine

from src.application.use_cases.edit_portfolio import EditPortfolioUseCase
from src.application.use_cases.transfer_portfolio import (
    ExportPortfolioUseCase,
    ImportPortfolioUseCase,
)
from src.domain.defaults import default_snapshot
from src.domain.models import Asset, PortfolioSnapshot
from src.domain.services import editing
from src.infrastructure.autosave import DebouncedSaver
from src.infrastructure.snapshot_repository import SqlAlchemySnapshotRepository


class _SqliteDbPort:
    def __init__(self, path) -> None:
        self.engine = create_engine(f"sqlite:///{path}", future=True)

    def get_engine(self):
        return self.engine


def _fixed_clock() -> datetime:
    return datetime(2024, 5, 1, 8, 30, tzinfo=timezone.utc)


def test_repository_round_trip(tmp_path) -> None:
    """Saved snapshots load back unchanged."""
    repository = SqlAlchemySnapshotRepository(
        _SqliteDbPort(tmp_path / "store.db"),
        clock=_fixed_clock,
    )
    snapshot = editing.update_asset(
        default_snapshot(), "p1", market_value=Decimal("400000.25")
    )

    assert repository.load() is None
    repository.save(snapshot)

    assert repository.load() == snapshot
    assert repository.last_saved_at() == _fixed_clock()


def test_repository_save_replaces_previous_snapshot(tmp_path) -> None:
    """Only one snapshot is kept per storage key."""
    db_port = _SqliteDbPort(tmp_path / "store.db")
    repository = SqlAlchemySnapshotRepository(db_port)

    repository.save(default_snapshot())
    repository.save(PortfolioSnapshot())

    assert repository.load() == PortfolioSnapshot()
    with db_port.engine.connect() as conn:
        count = conn.exec_driver_sql(
            "SELECT COUNT(*) FROM portfolio_snapshots"
        ).scalar()
    assert count == 1


def test_repository_keys_are_isolated_and_clearable(tmp_path) -> None:
    """Different storage keys do not see each other."""
    db_port = _SqliteDbPort(tmp_path / "store.db")
    first = SqlAlchemySnapshotRepository(db_port, storage_key="one")
    second = SqlAlchemySnapshotRepository(db_port, storage_key="two")

    first.save(default_snapshot())

    assert second.load() is None
    first.clear()
    assert first.load() is None
    assert first.last_saved_at() is None


class _FakeTimer:
    def __init__(self, delay, callback) -> None:
        self.delay = delay
        self.callback = callback
        self.daemon = False
        self.started = False
        self.cancelled = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        if not self.cancelled:
            self.callback()


def _saver(repository):
    timers: list[_FakeTimer] = []

    def factory(delay, callback):
        timer = _FakeTimer(delay, callback)
        timers.append(timer)
        return timer

    saver = DebouncedSaver(
        repository,
        delay_seconds=3.0,
        logger=MagicMock(),
        timer_factory=factory,
    )
    return saver, timers


def test_debounced_saver_writes_last_snapshot_once() -> None:
    """A burst of edits is saved once, with the latest snapshot."""
    repository = MagicMock()
    saver, timers = _saver(repository)
    first = default_snapshot()
    second = editing.delete_asset(first, "c1")

    saver.schedule(first)
    saver.schedule(second)

    assert len(timers) == 2
    assert timers[0].cancelled
    assert timers[1].started and timers[1].daemon
    assert timers[1].delay == 3.0
    assert saver.has_pending

    timers[0].fire()
    timers[1].fire()

    repository.save.assert_called_once_with(second)
    assert not saver.has_pending


def test_debounced_saver_flush_and_cancel() -> None:
    """flush saves immediately and cancel drops the pending snapshot."""
    repository = MagicMock()
    saver, timers = _saver(repository)

    saver.flush()
    repository.save.assert_not_called()

    saver.schedule(default_snapshot())
    saver.flush()
    repository.save.assert_called_once_with(default_snapshot())
    assert timers[0].cancelled

    saver.schedule(PortfolioSnapshot())
    saver.cancel()
    timers[1].fire()
    assert repository.save.call_count == 1
    assert not saver.has_pending


def test_import_supersedes_pending_autosave(tmp_path) -> None:
    """A queued edit never overwrites a backup imported after it."""
    repository = SqlAlchemySnapshotRepository(
        _SqliteDbPort(tmp_path / "store.db"),
        clock=_fixed_clock,
    )
    saver, timers = _saver(repository)
    editor = EditPortfolioUseCase(repository, logger=MagicMock(), saver=saver)
    importer = ImportPortfolioUseCase(
        repository, logger=MagicMock(), saver=saver
    )
    _, backup = ExportPortfolioUseCase().execute(default_snapshot())

    editor.apply(default_snapshot(), editing.delete_asset, "p1")
    imported = importer.execute(backup)
    for timer in timers:
        timer.fire()

    assert not saver.has_pending
    assert repository.load() == imported
    assert any(asset.id == "p1" for asset in repository.load().assets)


def test_repository_keeps_high_precision_amounts(tmp_path) -> None:
    """Stored amounts keep every digit."""
    repository = SqlAlchemySnapshotRepository(
        _SqliteDbPort(tmp_path / "store.db"),
        clock=_fixed_clock,
    )
    snapshot = PortfolioSnapshot(
        assets=(
            Asset(
                "a",
                "Fund",
                "investment",
                Decimal("123456789.123456789"),
                Decimal("100000000.000000001"),
            ),
        ),
    )

    repository.save(snapshot)

    assert repository.load() == snapshot
