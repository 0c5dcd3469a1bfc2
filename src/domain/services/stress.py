"""Stress scenario adjustments."""

from collections.abc import Iterable
from decimal import Decimal

from src.domain.constants import (
    ASSET_KIND_INVESTMENT,
    ELEVATED_HIKE_FRACTION,
    MODERATE_CRASH_FRACTION,
    MONTHS_PER_YEAR,
    RATE_SENSITIVE_LIABILITY_KINDS,
    SEVERE_CRASH_FRACTION,
)
from src.domain.models.finance import AdjustedAsset
from src.domain.models.portfolio import Asset, Liability, StressParameters
from src.utils.decimal_utils import ZERO


def adjust_assets(
    assets: Iterable[Asset],
    stress: StressParameters,
) -> tuple[AdjustedAsset, ...]:
    """Apply the market crash to investment assets.

    Real estate and cash are treated as non-volatile and keep their market
    value.

    Args:
        assets: Assets in display order.
        stress: Scenario to apply.

    Returns:
        tuple[AdjustedAsset, ...]: Assets with their stressed value.
    """
    remaining = 1 - stress.market_crash_fraction
    return tuple(
        AdjustedAsset(
            asset=asset,
            current_value=(
                asset.market_value * remaining
                if asset.kind == ASSET_KIND_INVESTMENT
                else asset.market_value
            ),
        )
        for asset in assets
    )


def extra_interest_burden(
    liabilities: Iterable[Liability],
    stress: StressParameters,
) -> Decimal:
    """Return the extra monthly interest caused by the rate shock.

    Mortgage and credit-line payments are contractually fixed, so only
    share pledges and policy loans react.
    """
    return sum(
        (
            item.principal * stress.interest_hike_fraction / MONTHS_PER_YEAR
            for item in liabilities
            if item.kind in RATE_SENSITIVE_LIABILITY_KINDS
        ),
        ZERO,
    )


def stress_severity(stress: StressParameters) -> tuple[str, str]:
    """Return display badges for the market and rate sliders.

    Returns:
        tuple[str, str]: Market label (normal, moderate, severe) and rate
        label (normal, elevated).
    """
    if stress.market_crash_fraction > SEVERE_CRASH_FRACTION:
        market = "severe"
    elif stress.market_crash_fraction > MODERATE_CRASH_FRACTION:
        market = "moderate"
    else:
        market = "normal"
    rate = (
        "elevated"
        if stress.interest_hike_fraction > ELEVATED_HIKE_FRACTION
        else "normal"
    )
    return market, rate


__all__ = ["adjust_assets", "extra_interest_burden", "stress_severity"]
