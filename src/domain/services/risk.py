"""Margin risk classification for secured liabilities."""

from collections.abc import Iterable
from decimal import Decimal

from src.domain.constants import (
    LIABILITY_KIND_SHARE_PLEDGE,
    LOAN_LIQUIDATION_RATIO,
    LOAN_TOP_UP_RATIO,
    LOAN_WARNING_RATIO,
    PLEDGE_LIQUIDATION_RATIO,
    PLEDGE_TOP_UP_RATIO,
    PLEDGE_WARNING_RATIO,
    RISK_TIER_LIQUIDATED,
    RISK_TIER_SAFE,
    RISK_TIER_TOP_UP_REQUIRED,
    RISK_TIER_WARNING,
    RISK_TIERS,
)
from src.domain.models.finance import (
    AdjustedAsset,
    BareAssetRow,
    LiabilityRow,
    RiskRow,
    RiskTier,
)
from src.domain.models.portfolio import Liability
from src.utils.decimal_utils import ZERO, percent_of


def risk_tier_rank(tier: str) -> int:
    """Return the position of ``tier`` in safe < ... < liquidated."""
    return RISK_TIERS.index(tier)


def total_roi_pct(
    current_value: Decimal,
    realized_income: Decimal,
    cost_basis: Decimal,
) -> Decimal:
    """Return ROI including realized income against the cost basis.

    Args:
        current_value: Stressed value of the asset.
        realized_income: Income already received from the asset.
        cost_basis: Amount invested.

    Returns:
        Decimal: Percentage, or zero when the cost basis is not positive.
    """
    if cost_basis <= 0:
        return ZERO
    return percent_of(current_value + realized_income - cost_basis, cost_basis)


def classify_pledge(maintenance_ratio: Decimal) -> RiskTier:
    """Map a share-pledge maintenance ratio (collateral / loan) to a tier."""
    if maintenance_ratio <= PLEDGE_LIQUIDATION_RATIO:
        return RISK_TIER_LIQUIDATED
    if maintenance_ratio <= PLEDGE_TOP_UP_RATIO:
        return RISK_TIER_TOP_UP_REQUIRED
    if maintenance_ratio <= PLEDGE_WARNING_RATIO:
        return RISK_TIER_WARNING
    return RISK_TIER_SAFE


def classify_borrowing(borrowing_ratio: Decimal) -> RiskTier:
    """Map a borrowing ratio (loan / collateral) to a tier."""
    if borrowing_ratio >= LOAN_LIQUIDATION_RATIO:
        return RISK_TIER_LIQUIDATED
    if borrowing_ratio >= LOAN_TOP_UP_RATIO:
        return RISK_TIER_TOP_UP_REQUIRED
    if borrowing_ratio >= LOAN_WARNING_RATIO:
        return RISK_TIER_WARNING
    return RISK_TIER_SAFE


def classify_liability(
    liability: Liability,
    collateral: AdjustedAsset | None,
) -> LiabilityRow:
    """Build the risk row of a liability against its stressed collateral.

    Unsecured liabilities, dangling collateral references and zero principal
    are all ``safe`` with zero trigger lines. Collateral worth nothing while
    principal is outstanding is ``liquidated``.

    Args:
        liability: Liability to classify.
        collateral: Stress-adjusted collateral asset, if resolvable.

    Returns:
        LiabilityRow: Ratios, tier, trigger lines and collateral ROI.
    """
    if collateral is None:
        return _unsecured_row(liability)

    asset = collateral.asset
    value = collateral.current_value
    ratio = ZERO
    maintenance_ratio = None
    tier: RiskTier = RISK_TIER_SAFE
    top_up_line = ZERO
    liquidation_line = ZERO
    roi = ZERO

    if liability.principal > 0:
        is_pledge = liability.kind == LIABILITY_KIND_SHARE_PLEDGE
        if is_pledge:
            top_up_line = liability.principal * PLEDGE_TOP_UP_RATIO
            liquidation_line = liability.principal * PLEDGE_LIQUIDATION_RATIO
            maintenance_ratio = value / liability.principal
            tier = classify_pledge(maintenance_ratio)
        else:
            top_up_line = liability.principal / LOAN_TOP_UP_RATIO
            liquidation_line = liability.principal / LOAN_LIQUIDATION_RATIO

        if value > 0:
            ratio = liability.principal / value
            if not is_pledge:
                tier = classify_borrowing(ratio)
        else:
            tier = RISK_TIER_LIQUIDATED
        roi = total_roi_pct(value, asset.realized_income, asset.cost_basis)

    return LiabilityRow(
        liability_id=liability.id,
        name=liability.name,
        kind=liability.kind,
        principal=liability.principal,
        annual_rate=liability.annual_rate,
        collateral_asset_id=asset.id,
        current_value=value,
        cost_basis=asset.cost_basis,
        realized_income=asset.realized_income,
        total_roi_pct=roi,
        ratio=ratio,
        maintenance_ratio=maintenance_ratio,
        tier=tier,
        top_up_line=top_up_line,
        liquidation_line=liquidation_line,
    )


def _unsecured_row(liability: Liability) -> LiabilityRow:
    return LiabilityRow(
        liability_id=liability.id,
        name=liability.name,
        kind=liability.kind,
        principal=liability.principal,
        annual_rate=liability.annual_rate,
        collateral_asset_id=None,
        current_value=None,
        cost_basis=None,
        realized_income=None,
        total_roi_pct=ZERO,
        ratio=ZERO,
        maintenance_ratio=None,
        tier=RISK_TIER_SAFE,
        top_up_line=ZERO,
        liquidation_line=ZERO,
    )


def bare_asset_row(adjusted: AdjustedAsset) -> BareAssetRow:
    """Build the row shown for an asset with no liability against it."""
    asset = adjusted.asset
    return BareAssetRow(
        asset_id=asset.id,
        name=asset.name,
        kind=asset.kind,
        current_value=adjusted.current_value,
        cost_basis=asset.cost_basis,
        realized_income=asset.realized_income,
        total_roi_pct=total_roi_pct(
            adjusted.current_value,
            asset.realized_income,
            asset.cost_basis,
        ),
    )


def build_risk_rows(
    liabilities: Iterable[Liability],
    adjusted_assets: Iterable[AdjustedAsset],
    *,
    include_bare_assets: bool = False,
) -> tuple[RiskRow, ...]:
    """Build the risk table.

    Each liability is evaluated against the full value of its collateral,
    even when several liabilities share the same asset.

    Args:
        liabilities: Liabilities in display order.
        adjusted_assets: Stress-adjusted assets.
        include_bare_assets: Append one row per asset no liability
            references.

    Returns:
        tuple[RiskRow, ...]: Liability rows, then bare asset rows.
    """
    liabilities = tuple(liabilities)
    adjusted_assets = tuple(adjusted_assets)
    by_id = {adjusted.id: adjusted for adjusted in adjusted_assets}

    rows: list[RiskRow] = [
        classify_liability(item, by_id.get(item.collateral_asset_id))
        for item in liabilities
    ]
    if include_bare_assets:
        referenced = {item.collateral_asset_id for item in liabilities}
        rows.extend(
            bare_asset_row(adjusted)
            for adjusted in adjusted_assets
            if adjusted.id not in referenced
        )
    return tuple(rows)


__all__ = [
    "risk_tier_rank",
    "total_roi_pct",
    "classify_pledge",
    "classify_borrowing",
    "classify_liability",
    "bare_asset_row",
    "build_risk_rows",
]
