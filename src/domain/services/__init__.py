"""Domain services package."""

from .editing import (
    add_asset,
    add_liability,
    delete_asset,
    delete_liability,
    update_asset,
    update_income_expense,
    update_liability,
)
from .finance import compute_financial_snapshot
from .normalization import normalize_asset_kind, normalize_liability_kind
from .risk import (
    build_risk_rows,
    classify_liability,
    risk_tier_rank,
    total_roi_pct,
)
from .stress import adjust_assets, extra_interest_burden, stress_severity
from .validation import validate_portfolio

__all__ = [
    "add_asset",
    "add_liability",
    "delete_asset",
    "delete_liability",
    "update_asset",
    "update_income_expense",
    "update_liability",
    "compute_financial_snapshot",
    "normalize_asset_kind",
    "normalize_liability_kind",
    "build_risk_rows",
    "classify_liability",
    "risk_tier_rank",
    "total_roi_pct",
    "adjust_assets",
    "extra_interest_burden",
    "stress_severity",
    "validate_portfolio",
]
