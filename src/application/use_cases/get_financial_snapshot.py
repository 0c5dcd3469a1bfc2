"""Use case to compute the dashboard metrics for a stress scenario."""

from datetime import datetime

from src.application.ports.snapshot_repository import SnapshotRepositoryPort
from src.domain.constants import DEFAULT_CASH_RESERVE_ASSET_ID
from src.domain.defaults import default_snapshot
from src.domain.models import (
    FinancialSnapshot,
    PortfolioSnapshot,
    StressParameters,
)
from src.domain.services.finance import compute_financial_snapshot
from src.domain.services.validation import validate_portfolio
from src.infrastructure.logging.logger import get_app_logger


class GetFinancialSnapshotUseCase:
    """Compute derived metrics for the stored or a given snapshot."""

    def __init__(
        self,
        repository: SnapshotRepositoryPort,
        logger=None,
        cash_reserve_asset_id: str = DEFAULT_CASH_RESERVE_ASSET_ID,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port providing the stored snapshot.
            logger: Optional logger compatible with logging.Logger-like API.
            cash_reserve_asset_id: Asset counted as the cash reserve.
        """
        self._repository = repository
        self._logger = logger or get_app_logger()
        self._cash_reserve_asset_id = cash_reserve_asset_id

    def load_snapshot(self) -> PortfolioSnapshot:
        """Return the stored snapshot, or the demo household if none."""
        snapshot = self._repository.load()
        if snapshot is None:
            self._logger.info("No stored snapshot found; using defaults")
            return default_snapshot()
        return snapshot

    def execute(
        self,
        stress: StressParameters | None = None,
        include_bare_assets: bool = False,
    ) -> FinancialSnapshot:
        """Return metrics for the stored snapshot.

        Args:
            stress: Scenario to apply; no stress when omitted.
            include_bare_assets: Add risk rows for unpledged assets.

        Returns:
            FinancialSnapshot: Computed metrics and risk table.
        """
        return self.compute(
            self.load_snapshot(),
            stress,
            include_bare_assets=include_bare_assets,
        )

    def last_saved_at(self) -> datetime | None:
        """Return when the stored snapshot was last written."""
        return self._repository.last_saved_at()

    def compute(
        self,
        snapshot: PortfolioSnapshot,
        stress: StressParameters | None = None,
        include_bare_assets: bool = False,
    ) -> FinancialSnapshot:
        """Return metrics for an in-memory snapshot."""
        validate_portfolio(snapshot, self._logger)
        result = compute_financial_snapshot(
            snapshot,
            stress,
            cash_reserve_asset_id=self._cash_reserve_asset_id,
            include_bare_assets=include_bare_assets,
        )
        at_risk = [
            row.name
            for row in result.liability_rows
            if row.tier != "safe"
        ]
        self._logger.info(
            f"Metrics computed: net_worth={result.net_worth}, "
            f"net_cash_flow={result.net_cash_flow}, "
            f"crash={result.stress.market_crash_fraction}, "
            f"hike={result.stress.interest_hike_fraction}, "
            f"at_risk={len(at_risk)}"
        )
        return result


__all__ = ["GetFinancialSnapshotUseCase", "FinancialSnapshot"]
