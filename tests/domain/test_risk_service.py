"""Tests for the collateral risk classifier."""

from decimal import Decimal

import pytest

from src.domain.models import AdjustedAsset, Asset, Liability
from src.domain.services.risk import (
    build_risk_rows,
    classify_borrowing,
    classify_liability,
    classify_pledge,
    risk_tier_rank,
    total_roi_pct,
)


def _collateral(value: str, cost: str = "0", income: str = "0") -> AdjustedAsset:
    asset = Asset("a", "Collateral", "investment", Decimal(value),
                  Decimal(cost), Decimal(income))
    return AdjustedAsset(asset=asset, current_value=asset.market_value)


@pytest.mark.parametrize(
    ("ratio", "expected"),
    [
        ("1.2", "liquidated"),
        ("1.3", "liquidated"),
        ("1.35", "top_up_required"),
        ("1.4", "top_up_required"),
        ("1.45", "warning"),
        ("1.5", "warning"),
        ("1.51", "safe"),
    ],
)
def test_classify_pledge_boundaries(ratio: str, expected: str) -> None:
    """Pledge thresholds are inclusive toward the riskier tier."""
    assert classify_pledge(Decimal(ratio)) == expected


@pytest.mark.parametrize(
    ("ratio", "expected"),
    [
        ("0.59", "safe"),
        ("0.6", "warning"),
        ("0.7", "top_up_required"),
        ("0.8", "liquidated"),
        ("1.2", "liquidated"),
    ],
)
def test_classify_borrowing_boundaries(ratio: str, expected: str) -> None:
    """Borrowing thresholds are inclusive toward the riskier tier."""
    assert classify_borrowing(Decimal(ratio)) == expected


def test_pledge_at_exact_liquidation_line() -> None:
    """A pledge worth exactly 1.3 times its principal is liquidated."""
    loan = Liability("p", "Pledge", "share_pledge", Decimal("500000"), 0, "a")

    row = classify_liability(loan, _collateral("650000"))

    assert row.maintenance_ratio == Decimal("1.3")
    assert row.tier == "liquidated"
    assert row.liquidation_buffer == Decimal("0")


def test_pledge_tiers_follow_collateral_value() -> None:
    """Pledge rows move through the tiers as collateral falls."""
    loan = Liability("p", "Pledge", "share_pledge", Decimal("500000"), 0, "a")

    tiers = [
        classify_liability(loan, _collateral(value)).tier
        for value in ("800000", "750000", "700000", "650000")
    ]

    assert tiers == ["safe", "warning", "top_up_required", "liquidated"]


def test_policy_loan_lines_and_ratio() -> None:
    """Non-pledge lines are principal over the borrowing thresholds."""
    loan = Liability("l", "Loan", "policy_loan", Decimal("70"), 0, "a")

    row = classify_liability(loan, _collateral("100", cost="80", income="4"))

    assert row.ratio == Decimal("0.7")
    assert row.maintenance_ratio is None
    assert row.tier == "top_up_required"
    assert row.top_up_line == Decimal("100")
    assert row.liquidation_line == Decimal("87.5")
    assert row.total_roi_pct == Decimal("30")


def test_worthless_collateral_is_liquidated() -> None:
    """Collateral worth nothing with principal outstanding is liquidated."""
    for kind in ("share_pledge", "policy_loan"):
        loan = Liability("l", "Loan", kind, Decimal("100"), 0, "a")
        row = classify_liability(loan, _collateral("0"))
        assert row.tier == "liquidated"
        assert row.ratio == Decimal("0")


def test_zero_principal_is_safe() -> None:
    """A repaid loan has no trigger lines."""
    loan = Liability("l", "Loan", "share_pledge", Decimal("0"), 0, "a")

    row = classify_liability(loan, _collateral("100"))

    assert row.tier == "safe"
    assert row.top_up_line == Decimal("0")
    assert row.liquidation_line == Decimal("0")
    assert row.liquidation_distance_pct is None


def test_unsecured_liability_row() -> None:
    """Missing collateral gives a safe row without collateral data."""
    loan = Liability("l", "Credit", "credit_line", Decimal("100"), 0)

    row = classify_liability(loan, None)

    assert row.tier == "safe"
    assert row.collateral_asset_id is None
    assert row.current_value is None
    assert row.cost_basis is None


def test_dangling_collateral_reference_is_unsecured() -> None:
    """A liability pointing at a deleted asset is treated as unsecured."""
    loan = Liability("l", "Loan", "policy_loan", Decimal("100"), 0, "gone")

    rows = build_risk_rows([loan], [_collateral("50")])

    assert rows[0].tier == "safe"
    assert rows[0].current_value is None


def test_shared_collateral_uses_full_value_for_each_loan() -> None:
    """Each liability sharing an asset sees the asset's full value."""
    loans = [
        Liability("x", "X", "policy_loan", Decimal("50"), 0, "a"),
        Liability("y", "Y", "policy_loan", Decimal("50"), 0, "a"),
    ]

    rows = build_risk_rows(loans, [_collateral("100")])

    assert [row.current_value for row in rows] == [Decimal("100")] * 2
    assert [row.tier for row in rows] == ["safe", "safe"]


def test_build_risk_rows_appends_bare_assets() -> None:
    """Bare asset rows follow the liability rows."""
    home = Asset("h", "Home", "real_estate", Decimal("10"))
    rows = build_risk_rows(
        [Liability("l", "Loan", "policy_loan", Decimal("1"), 0, "a")],
        [_collateral("100"), AdjustedAsset(home, home.market_value)],
        include_bare_assets=True,
    )

    assert [row.row_type for row in rows] == ["liability", "bare_asset"]
    assert rows[1].asset_id == "h"


def test_liquidation_distance_pct() -> None:
    """Distance is the buffer relative to the liquidation line."""
    loan = Liability("p", "Pledge", "share_pledge", Decimal("100"), 0, "a")

    row = classify_liability(loan, _collateral("195"))

    assert row.liquidation_distance_pct == Decimal("50")


def test_total_roi_pct_guards_zero_cost() -> None:
    """ROI is zero without a positive cost basis."""
    assert total_roi_pct(Decimal("5"), Decimal("1"), Decimal("0")) == 0
    assert total_roi_pct(Decimal("90"), Decimal("20"), Decimal("100")) == 10


def test_risk_tier_rank_orders_tiers() -> None:
    """Tier ranks grow with severity."""
    ranks = [
        risk_tier_rank(tier)
        for tier in ("safe", "warning", "top_up_required", "liquidated")
    ]
    assert ranks == sorted(ranks)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("649995", "liquidated"),
        ("650000", "liquidated"),
        ("650005", "top_up_required"),
        ("700000", "top_up_required"),
        ("750000", "warning"),
    ],
)
def test_pledge_straddles_each_boundary(value: str, expected: str) -> None:
    """Maintenance ratios of 1.29999, 1.3, 1.30001, 1.4 and 1.5."""
    loan = Liability("p", "Pledge", "share_pledge", Decimal("500000"), 0, "a")

    assert classify_liability(loan, _collateral(value)).tier == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("1000000", "liquidated"),
        ("1142858", "warning"),
    ],
)
def test_policy_loan_straddles_top_up_boundary(
    value: str, expected: str
) -> None:
    """A 800,000 loan flips tiers exactly at ratios 0.8 and 0.7."""
    loan = Liability("l", "Loan", "policy_loan", Decimal("800000"), 0, "a")

    assert classify_liability(loan, _collateral(value)).tier == expected


def test_policy_loan_at_exact_top_up_ratio() -> None:
    """A borrowing ratio of exactly 0.7 requires a top-up."""
    loan = Liability("l", "Loan", "policy_loan", Decimal("700000"), 0, "a")

    row = classify_liability(loan, _collateral("1000000"))

    assert row.ratio == Decimal("0.7")
    assert row.tier == "top_up_required"
