"""Domain services for the derived financial metrics."""

from decimal import Decimal

from src.domain.constants import (
    ASSET_KIND_INVESTMENT,
    ASSET_KINDS,
    DEFAULT_CASH_RESERVE_ASSET_ID,
    LIABILITY_KINDS,
    RATE_SENSITIVE_LIABILITY_KINDS,
)
from src.domain.models.finance import (
    AdjustedAsset,
    AllocationSlice,
    EquityBreakdownItem,
    FinancialSnapshot,
)
from src.domain.models.portfolio import (
    Liability,
    PortfolioSnapshot,
    StressParameters,
)
from src.domain.services.risk import build_risk_rows
from src.domain.services.stress import adjust_assets, extra_interest_burden
from src.utils.decimal_utils import ZERO, percent_of


def compute_financial_snapshot(
    snapshot: PortfolioSnapshot,
    stress: StressParameters | None = None,
    *,
    cash_reserve_asset_id: str | None = DEFAULT_CASH_RESERVE_ASSET_ID,
    include_bare_assets: bool = False,
) -> FinancialSnapshot:
    """Compute every dashboard metric for a snapshot under a scenario.

    The function is pure: identical inputs give identical outputs, nothing
    is rounded, and negative outcomes are returned as-is.

    Args:
        snapshot: Assets, liabilities and income/expense figures.
        stress: Scenario to apply; no stress when omitted.
        cash_reserve_asset_id: Asset counted as the cash reserve in total
            liquidity.
        include_bare_assets: Add risk rows for assets without liabilities.

    Returns:
        FinancialSnapshot: Aggregates, breakdowns and the risk table.
    """
    stress = stress or StressParameters()
    flows = snapshot.income_expense
    adjusted = adjust_assets(snapshot.assets, stress)

    total_assets = sum((a.current_value for a in adjusted), ZERO)
    total_liabilities = sum(
        (item.principal for item in snapshot.liabilities), ZERO
    )
    net_worth = total_assets - total_liabilities

    monthly_income = flows.active_income + flows.passive_income
    extra_interest = extra_interest_burden(snapshot.liabilities, stress)
    monthly_expense = (
        flows.mortgage_payment
        + flows.credit_payment
        + flows.base_living_expense
        + extra_interest
    )

    total_cost_basis = sum((a.cost_basis for a in snapshot.assets), ZERO)
    total_realized_income = sum(
        (a.realized_income for a in snapshot.assets), ZERO
    )
    # Profit reflects standing gains, so it ignores the stress scenario.
    total_market_value = sum((a.market_value for a in snapshot.assets), ZERO)
    total_profit = total_market_value + total_realized_income - total_cost_basis
    roi_pct = (
        percent_of(total_profit, total_cost_basis)
        if total_cost_basis > 0
        else ZERO
    )

    investment_loans_total = sum(
        (
            item.principal
            for item in snapshot.liabilities
            if item.kind in RATE_SENSITIVE_LIABILITY_KINDS
        ),
        ZERO,
    )
    investment_value = sum(
        (a.current_value for a in adjusted if a.kind == ASSET_KIND_INVESTMENT),
        ZERO,
    )
    net_investment_equity = investment_value - investment_loans_total
    cash_reserve = next(
        (a.current_value for a in adjusted if a.id == cash_reserve_asset_id),
        ZERO,
    )
    total_liquidity = (
        net_investment_equity + cash_reserve + flows.unused_credit_limit
    )

    return FinancialSnapshot(
        stress=stress,
        adjusted_assets=adjusted,
        total_assets=total_assets,
        total_liabilities=total_liabilities,
        net_worth=net_worth,
        monthly_active_income=flows.active_income,
        monthly_passive_income=flows.passive_income,
        monthly_income=monthly_income,
        extra_interest_burden=extra_interest,
        monthly_expense=monthly_expense,
        net_cash_flow=monthly_income - monthly_expense,
        fire_goal=flows.fire_goal,
        fire_progress_pct=percent_of(net_worth, flows.fire_goal),
        total_cost_basis=total_cost_basis,
        total_realized_income=total_realized_income,
        total_profit=total_profit,
        roi_pct=roi_pct,
        investment_loans_total=investment_loans_total,
        net_investment_equity=net_investment_equity,
        cash_reserve=cash_reserve,
        unused_credit_limit=flows.unused_credit_limit,
        total_liquidity=total_liquidity,
        investment_equity_breakdown=_equity_breakdown(
            adjusted, snapshot.liabilities
        ),
        asset_allocation=_asset_allocation(adjusted),
        liability_breakdown=_liability_breakdown(snapshot.liabilities),
        risk_rows=build_risk_rows(
            snapshot.liabilities,
            adjusted,
            include_bare_assets=include_bare_assets,
        ),
    )


def _equity_breakdown(
    adjusted: tuple[AdjustedAsset, ...],
    liabilities: tuple[Liability, ...],
) -> tuple[EquityBreakdownItem, ...]:
    items = []
    for asset in adjusted:
        if asset.kind != ASSET_KIND_INVESTMENT:
            continue
        loan = next(
            (
                item
                for item in liabilities
                if item.collateral_asset_id == asset.id
            ),
            None,
        )
        principal = loan.principal if loan is not None else ZERO
        items.append(
            EquityBreakdownItem(
                name=asset.name,
                net_value=asset.current_value - principal,
            )
        )
    return tuple(items)


def _asset_allocation(
    adjusted: tuple[AdjustedAsset, ...],
) -> tuple[AllocationSlice, ...]:
    totals: dict[str, Decimal] = {kind: ZERO for kind in ASSET_KINDS}
    for asset in adjusted:
        totals[asset.kind] = totals.get(asset.kind, ZERO) + asset.current_value
    return tuple(
        AllocationSlice(kind=kind, amount=amount)
        for kind, amount in totals.items()
    )


def _liability_breakdown(
    liabilities: tuple[Liability, ...],
) -> tuple[AllocationSlice, ...]:
    totals: dict[str, Decimal] = {kind: ZERO for kind in LIABILITY_KINDS}
    for item in liabilities:
        totals[item.kind] = totals.get(item.kind, ZERO) + item.principal
    return tuple(
        AllocationSlice(kind=kind, amount=amount)
        for kind, amount in totals.items()
        if amount > 0
    )


__all__ = ["compute_financial_snapshot"]
