"""Tests for the portfolio use cases."""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.application.use_cases.edit_portfolio import EditPortfolioUseCase
from src.application.use_cases.get_financial_snapshot import (
    GetFinancialSnapshotUseCase,
)
from src.application.use_cases.transfer_portfolio import (
    ExportPortfolioUseCase,
    ImportPortfolioUseCase,
)
from src.domain.defaults import default_snapshot
from src.domain.errors import EntityNotFoundError, InterchangeFormatError
from src.domain.models import Asset, PortfolioSnapshot, StressParameters
from src.domain.services import editing


def test_execute_falls_back_to_default_snapshot() -> None:
    """With nothing stored, metrics are computed for the demo household."""
    repository = MagicMock()
    repository.load.return_value = None
    logger = MagicMock()
    use_case = GetFinancialSnapshotUseCase(repository, logger=logger)

    result = use_case.execute()

    assert result.net_worth == Decimal("6024000")
    messages = [call.args[0] for call in logger.info.call_args_list]
    assert any("using defaults" in m for m in messages)
    assert any("net_worth=6024000" in m for m in messages)


def test_execute_uses_stored_snapshot_and_stress() -> None:
    """Stored snapshots are computed under the requested scenario."""
    stored = PortfolioSnapshot(
        assets=(Asset("fund", "Fund", "investment", Decimal("1000")),),
    )
    repository = MagicMock()
    repository.load.return_value = stored
    use_case = GetFinancialSnapshotUseCase(repository, logger=MagicMock())

    result = use_case.execute(StressParameters(Decimal("0.5"), 0))

    assert result.total_assets == Decimal("500")


def test_compute_uses_configured_cash_reserve() -> None:
    """The cash reserve asset id comes from configuration."""
    snapshot = PortfolioSnapshot(
        assets=(Asset("bank", "Bank", "cash", Decimal("750")),),
    )
    use_case = GetFinancialSnapshotUseCase(
        MagicMock(),
        logger=MagicMock(),
        cash_reserve_asset_id="bank",
    )

    result = use_case.compute(snapshot)

    assert result.cash_reserve == Decimal("750")


def test_compute_logs_validation_warnings() -> None:
    """Validation problems are logged but do not stop the computation."""
    logger = MagicMock()
    snapshot = PortfolioSnapshot(
        assets=(Asset("a", "A", "cash", 1), Asset("a", "B", "cash", 1)),
    )

    GetFinancialSnapshotUseCase(MagicMock(), logger=logger).compute(snapshot)

    logger.warning.assert_called()


def test_apply_saves_immediately_without_saver() -> None:
    """Without a saver each edit is written through the repository."""
    repository = MagicMock()
    use_case = EditPortfolioUseCase(repository, logger=MagicMock())

    updated = use_case.apply(
        default_snapshot(), editing.update_asset, "p1", market_value=1
    )

    repository.save.assert_called_once_with(updated)
    assert updated.find_asset("p1").market_value == Decimal("1")


def test_apply_schedules_through_saver() -> None:
    """With a saver, edits are scheduled instead of saved."""
    repository = MagicMock()
    saver = MagicMock()
    use_case = EditPortfolioUseCase(repository, saver=saver, logger=MagicMock())

    updated = use_case.apply(default_snapshot(), editing.delete_asset, "s1")

    saver.schedule.assert_called_once_with(updated)
    repository.save.assert_not_called()


def test_apply_propagates_edit_errors_without_saving() -> None:
    """Failed edits leave storage untouched."""
    repository = MagicMock()
    use_case = EditPortfolioUseCase(repository, logger=MagicMock())

    with pytest.raises(EntityNotFoundError):
        use_case.apply(default_snapshot(), editing.delete_asset, "missing")

    repository.save.assert_not_called()


def test_save_now_flushes_saver() -> None:
    """A manual save bypasses the debounce."""
    saver = MagicMock()
    use_case = EditPortfolioUseCase(MagicMock(), saver=saver, logger=MagicMock())
    snapshot = default_snapshot()

    use_case.save_now(snapshot)

    saver.schedule.assert_called_once_with(snapshot)
    saver.flush.assert_called_once_with()


def test_reset_clears_storage_and_returns_defaults() -> None:
    """Reset drops pending saves, clears storage and restores defaults."""
    repository = MagicMock()
    saver = MagicMock()
    use_case = EditPortfolioUseCase(repository, saver=saver, logger=MagicMock())

    result = use_case.reset()

    saver.cancel.assert_called_once_with()
    repository.clear.assert_called_once_with()
    assert result == default_snapshot()


def test_export_returns_dated_filename_and_json() -> None:
    """Exports are named after the export date."""
    clock = lambda: datetime(2024, 3, 9, 12, 0, tzinfo=timezone.utc)  # noqa: E731

    filename, payload = ExportPortfolioUseCase(clock=clock).execute(
        default_snapshot()
    )

    assert filename == "portfolio_backup_2024-03-09.json"
    assert '"exportDate": "2024-03-09T12:00:00+00:00"' in payload


def test_import_saves_parsed_snapshot() -> None:
    """Imported backups replace the stored snapshot."""
    repository = MagicMock()
    _, payload = ExportPortfolioUseCase().execute(default_snapshot())

    snapshot = ImportPortfolioUseCase(repository, logger=MagicMock()).execute(
        payload
    )

    assert snapshot == default_snapshot()
    repository.save.assert_called_once_with(snapshot)


def test_import_rejects_invalid_backup() -> None:
    """Broken backups raise and are not saved."""
    repository = MagicMock()

    with pytest.raises(InterchangeFormatError):
        ImportPortfolioUseCase(repository, logger=MagicMock()).execute("{")

    repository.save.assert_not_called()


def test_import_cancels_queued_edit_before_saving() -> None:
    """The imported snapshot replaces any edit still waiting to be saved."""
    events = MagicMock()
    _, payload = ExportPortfolioUseCase().execute(default_snapshot())

    ImportPortfolioUseCase(
        events.repository, logger=MagicMock(), saver=events.saver
    ).execute(payload)

    assert [call[0] for call in events.mock_calls] == [
        "saver.cancel",
        "repository.save",
    ]


def test_rejected_import_keeps_queued_edit() -> None:
    """A broken backup leaves the pending edit alone."""
    saver = MagicMock()

    with pytest.raises(InterchangeFormatError):
        ImportPortfolioUseCase(
            MagicMock(), logger=MagicMock(), saver=saver
        ).execute('{"assets": [], "liabilities": [], "x": NaN}')

    saver.cancel.assert_not_called()
