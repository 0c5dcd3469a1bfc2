"""CLI adapter printing the dashboard metrics for a stress scenario.

The snapshot comes from ``PORTFOLIO_FILE`` when set (a JSON backup) and from
the configured snapshot store otherwise. ``STRESS_MARKET_CRASH`` and
``STRESS_INTEREST_HIKE`` select the scenario as fractions.
"""

import os
from decimal import Decimal, InvalidOperation
from pathlib import Path

from src.application.use_cases.get_financial_snapshot import (
    GetFinancialSnapshotUseCase,
)
from src.domain.errors import PortfolioError
from src.domain.models import LiabilityRow, StressParameters
from src.infrastructure.container import build_settings, build_snapshot_repository
from src.infrastructure.interchange import loads_snapshot
from src.infrastructure.logging.logger import get_app_logger


def _stress_from_env() -> StressParameters:
    """Read the stress scenario from the environment, clamped to range."""
    return StressParameters(
        market_crash_fraction=_fraction_from_env("STRESS_MARKET_CRASH"),
        interest_hike_fraction=_fraction_from_env("STRESS_INTEREST_HIKE"),
    ).clamped()


def _fraction_from_env(name: str) -> Decimal:
    raw = os.getenv(name, "").strip()
    if not raw:
        return Decimal("0")
    try:
        return Decimal(raw)
    except InvalidOperation as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


def _format_row(row: LiabilityRow) -> str:
    if row.current_value is None:
        return f"  {row.name:<28} {row.tier:<16} unsecured"
    distance = row.liquidation_distance_pct
    distance_label = f"{distance:.1f}%" if distance is not None else "n/a"
    return (
        f"  {row.name:<28} {row.tier:<16} "
        f"value={row.current_value:,.0f} principal={row.principal:,.0f} "
        f"to_liquidation={distance_label}"
    )


def main() -> int:
    """Print metrics and the risk table; return the process exit code."""
    logger = get_app_logger()
    settings = build_settings()
    repository = build_snapshot_repository(settings=settings)
    use_case = GetFinancialSnapshotUseCase(
        repository,
        logger=logger,
        cash_reserve_asset_id=settings.cash_reserve_asset_id,
    )

    try:
        stress = _stress_from_env()
        if settings.portfolio_file:
            snapshot = loads_snapshot(
                Path(settings.portfolio_file).read_text(encoding="utf-8")
            )
        else:
            snapshot = use_case.load_snapshot()
    except (OSError, ValueError, PortfolioError) as exc:
        logger.error(f"Cannot build report: {exc}")
        print(f"Error: {exc}")
        return 1

    metrics = use_case.compute(snapshot, stress)
    print(
        f"Scenario: crash={stress.market_crash_fraction:.0%} "
        f"hike={stress.interest_hike_fraction:.2%}"
    )
    print(f"Net worth:          {metrics.net_worth:,.0f}")
    print(f"Monthly cash flow:  {metrics.net_cash_flow:,.0f}")
    print(f"FIRE progress:      {metrics.fire_progress_pct:.1f}%")
    print(f"Total liquidity:    {metrics.total_liquidity:,.0f}")
    print("Risk:")
    for row in metrics.liability_rows:
        print(_format_row(row))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
