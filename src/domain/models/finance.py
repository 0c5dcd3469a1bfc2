"""Domain models for derived financial metrics."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Literal

from src.domain.models.portfolio import Asset, StressParameters

RiskTier = Literal["safe", "warning", "top_up_required", "liquidated"]


@dataclass(frozen=True)
class AdjustedAsset:
    """Asset annotated with its stress-adjusted value."""

    asset: Asset
    current_value: Decimal

    @property
    def id(self) -> str:
        return self.asset.id

    @property
    def name(self) -> str:
        return self.asset.name

    @property
    def kind(self) -> str:
        return self.asset.kind


@dataclass(frozen=True)
class EquityBreakdownItem:
    """Net equity of one investment asset after its pledged loan."""

    name: str
    net_value: Decimal


@dataclass(frozen=True)
class AllocationSlice:
    """Amount aggregated for an asset or liability kind."""

    kind: str
    amount: Decimal


@dataclass(frozen=True)
class LiabilityRow:
    """Risk table row for a liability.

    The collateral fields are None when the liability is unsecured or its
    collateral reference is dangling.

    Attributes:
        liability_id: Id of the liability.
        name: Liability display name.
        kind: Liability kind.
        principal: Outstanding principal.
        annual_rate: Annual interest rate.
        collateral_asset_id: Resolved collateral id, if any.
        current_value: Stressed collateral value.
        cost_basis: Collateral cost basis.
        realized_income: Collateral realized income.
        total_roi_pct: Collateral ROI including realized income.
        ratio: Principal divided by stressed collateral value.
        maintenance_ratio: Collateral value over principal (share pledges).
        tier: Risk tier.
        top_up_line: Collateral value at which a top-up is demanded.
        liquidation_line: Collateral value at which the position is closed.
    """

    liability_id: str
    name: str
    kind: str
    principal: Decimal
    annual_rate: Decimal
    collateral_asset_id: str | None
    current_value: Decimal | None
    cost_basis: Decimal | None
    realized_income: Decimal | None
    total_roi_pct: Decimal
    ratio: Decimal
    maintenance_ratio: Decimal | None
    tier: RiskTier
    top_up_line: Decimal
    liquidation_line: Decimal
    row_type: Literal["liability"] = "liability"

    @property
    def liquidation_buffer(self) -> Decimal | None:
        """Return how far the collateral sits above the liquidation line."""
        if self.current_value is None or not self.liquidation_line:
            return None
        return self.current_value - self.liquidation_line

    @property
    def liquidation_distance_pct(self) -> Decimal | None:
        """Return the buffer as a percentage of the liquidation line."""
        if self.current_value is None or not self.liquidation_line:
            return None
        return (self.current_value / self.liquidation_line - 1) * 100


@dataclass(frozen=True)
class BareAssetRow:
    """Risk table row for an asset no liability is secured against."""

    asset_id: str
    name: str
    kind: str
    current_value: Decimal
    cost_basis: Decimal
    realized_income: Decimal
    total_roi_pct: Decimal
    tier: RiskTier = "safe"
    row_type: Literal["bare_asset"] = "bare_asset"


RiskRow = LiabilityRow | BareAssetRow


@dataclass(frozen=True)
class FinancialSnapshot:
    """Every metric displayed by the dashboard for one evaluation."""

    stress: StressParameters
    adjusted_assets: tuple[AdjustedAsset, ...]
    total_assets: Decimal
    total_liabilities: Decimal
    net_worth: Decimal
    monthly_active_income: Decimal
    monthly_passive_income: Decimal
    monthly_income: Decimal
    extra_interest_burden: Decimal
    monthly_expense: Decimal
    net_cash_flow: Decimal
    fire_goal: Decimal
    fire_progress_pct: Decimal
    total_cost_basis: Decimal
    total_realized_income: Decimal
    total_profit: Decimal
    roi_pct: Decimal
    investment_loans_total: Decimal
    net_investment_equity: Decimal
    cash_reserve: Decimal
    unused_credit_limit: Decimal
    total_liquidity: Decimal
    investment_equity_breakdown: tuple[EquityBreakdownItem, ...]
    asset_allocation: tuple[AllocationSlice, ...]
    liability_breakdown: tuple[AllocationSlice, ...]
    risk_rows: tuple[RiskRow, ...]

    @property
    def liability_rows(self) -> tuple[LiabilityRow, ...]:
        """Return only the liability rows of the risk table."""
        return tuple(
            row for row in self.risk_rows if isinstance(row, LiabilityRow)
        )


__all__ = [
    "RiskTier",
    "AdjustedAsset",
    "EquityBreakdownItem",
    "AllocationSlice",
    "LiabilityRow",
    "BareAssetRow",
    "RiskRow",
    "FinancialSnapshot",
]
