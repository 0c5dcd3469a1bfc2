"""Domain models package."""

from .finance import (
    AdjustedAsset,
    AllocationSlice,
    BareAssetRow,
    EquityBreakdownItem,
    FinancialSnapshot,
    LiabilityRow,
    RiskRow,
    RiskTier,
)
from .portfolio import (
    Asset,
    AssetKind,
    IncomeExpense,
    Liability,
    LiabilityKind,
    PortfolioSnapshot,
    StressParameters,
)

__all__ = [
    "Asset",
    "AssetKind",
    "Liability",
    "LiabilityKind",
    "IncomeExpense",
    "StressParameters",
    "PortfolioSnapshot",
    "AdjustedAsset",
    "AllocationSlice",
    "BareAssetRow",
    "EquityBreakdownItem",
    "FinancialSnapshot",
    "LiabilityRow",
    "RiskRow",
    "RiskTier",
]
