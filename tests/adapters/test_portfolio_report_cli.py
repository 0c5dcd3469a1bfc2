"""Tests for the portfolio_report_cli adapter."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

from src.adapters import portfolio_report_cli
from src.domain.defaults import default_snapshot
from src.infrastructure.interchange import dumps_snapshot
from src.infrastructure.settings import DashboardSettings

EXPORTED_AT = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _patch(monkeypatch, portfolio_file=None, stored=None):
    repository = MagicMock()
    repository.load.return_value = stored
    logger = MagicMock()
    settings = DashboardSettings(
        db_url="sqlite:///:memory:",
        portfolio_file=portfolio_file,
    )
    monkeypatch.setattr(portfolio_report_cli, "build_settings", lambda: settings)
    monkeypatch.setattr(
        portfolio_report_cli,
        "build_snapshot_repository",
        lambda settings: repository,
    )
    monkeypatch.setattr(portfolio_report_cli, "get_app_logger", lambda: logger)
    monkeypatch.delenv("STRESS_MARKET_CRASH", raising=False)
    monkeypatch.delenv("STRESS_INTEREST_HIKE", raising=False)
    return repository, logger


def test_main_prints_metrics_for_stored_snapshot(monkeypatch, capsys):
    """Without a file the stored (or default) snapshot is reported."""
    repository, _ = _patch(monkeypatch)

    exit_code = portfolio_report_cli.main()

    output = capsys.readouterr().out
    assert exit_code == 0
    repository.load.assert_called_once_with()
    assert "Net worth:          6,024,000" in output
    assert "Policy A loan" in output
    assert "unsecured" in output


def test_main_reads_backup_file_and_stress(monkeypatch, capsys, tmp_path):
    """PORTFOLIO_FILE and the stress variables drive the report."""
    backup = tmp_path / "backup.json"
    backup.write_text(
        dumps_snapshot(default_snapshot(), EXPORTED_AT),
        encoding="utf-8",
    )
    repository, _ = _patch(monkeypatch, portfolio_file=backup)
    monkeypatch.setenv("STRESS_MARKET_CRASH", "0.9")
    monkeypatch.setenv("STRESS_INTEREST_HIKE", "0.02")

    exit_code = portfolio_report_cli.main()

    output = capsys.readouterr().out
    assert exit_code == 0
    repository.load.assert_not_called()
    assert "crash=50%" in output
    assert "Net worth:          1,282,000" in output
    assert "liquidated" in output


def test_main_reports_invalid_stress(monkeypatch, capsys):
    """Non-numeric stress values are logged and fail the command."""
    _, logger = _patch(monkeypatch)
    monkeypatch.setenv("STRESS_MARKET_CRASH", "a lot")

    exit_code = portfolio_report_cli.main()

    assert exit_code == 1
    assert "STRESS_MARKET_CRASH" in capsys.readouterr().out
    logger.error.assert_called_once()


def test_main_reports_broken_backup(monkeypatch, capsys, tmp_path):
    """Corrupt backup files are reported instead of raising."""
    backup = tmp_path / "backup.json"
    backup.write_text("{not json", encoding="utf-8")
    _, logger = _patch(monkeypatch, portfolio_file=backup)

    exit_code = portfolio_report_cli.main()

    assert exit_code == 1
    assert capsys.readouterr().out.startswith("Error: Backup is not valid JSON")
    logger.error.assert_called_once()
