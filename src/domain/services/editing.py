"""Pure state transitions on a portfolio snapshot.

Every function returns a new ``PortfolioSnapshot`` and leaves its input
untouched; persisting the result is the caller's job.
"""

from dataclasses import fields, replace
from decimal import Decimal

from src.domain.constants import (
    ASSET_KIND_INVESTMENT,
    LIABILITY_KIND_MORTGAGE,
    LIABILITY_KIND_POLICY_LOAN,
    PAIRED_LOAN_MAINTENANCE_THRESHOLD,
    PAIRED_LOAN_RATE,
    PAIRED_LOAN_SUFFIX,
)
from src.domain.errors import DuplicateEntityError, EntityNotFoundError
from src.domain.models.portfolio import (
    Asset,
    IncomeExpense,
    Liability,
    PortfolioSnapshot,
)
from src.utils.decimal_utils import coerce_decimal

_INCOME_EXPENSE_FIELDS = frozenset(f.name for f in fields(IncomeExpense))


def add_asset(
    snapshot: PortfolioSnapshot,
    asset: Asset,
    initial_loan=None,
    *,
    liability_id: str | None = None,
) -> PortfolioSnapshot:
    """Add an asset, optionally with a loan secured against it.

    Args:
        snapshot: Current snapshot.
        asset: Asset to append.
        initial_loan: Principal of a paired loan; ignored unless positive.
        liability_id: Id for the paired loan, ``<asset id>-loan`` by default.

    Returns:
        PortfolioSnapshot: Snapshot including the new entities.

    Raises:
        DuplicateEntityError: If the asset or paired loan id already exists.
    """
    if snapshot.find_asset(asset.id) is not None:
        raise DuplicateEntityError("asset", asset.id)
    liabilities = snapshot.liabilities
    loan = coerce_decimal(initial_loan)
    if loan > 0:
        paired = Liability(
            id=liability_id or f"{asset.id}-loan",
            name=f"{asset.name}{PAIRED_LOAN_SUFFIX}",
            kind=(
                LIABILITY_KIND_POLICY_LOAN
                if asset.kind == ASSET_KIND_INVESTMENT
                else LIABILITY_KIND_MORTGAGE
            ),
            principal=loan,
            annual_rate=PAIRED_LOAN_RATE,
            collateral_asset_id=asset.id,
            maintenance_threshold=PAIRED_LOAN_MAINTENANCE_THRESHOLD,
        )
        if snapshot.find_liability(paired.id) is not None:
            raise DuplicateEntityError("liability", paired.id)
        liabilities = (*liabilities, paired)
    return replace(
        snapshot,
        assets=(*snapshot.assets, asset),
        liabilities=liabilities,
    )


def add_liability(
    snapshot: PortfolioSnapshot,
    liability: Liability,
) -> PortfolioSnapshot:
    """Add a standalone liability."""
    if snapshot.find_liability(liability.id) is not None:
        raise DuplicateEntityError("liability", liability.id)
    return replace(snapshot, liabilities=(*snapshot.liabilities, liability))


def update_asset(
    snapshot: PortfolioSnapshot,
    asset_id: str,
    *,
    market_value=None,
    cost_basis=None,
    realized_income=None,
) -> PortfolioSnapshot:
    """Edit the value fields of an asset.

    Raises:
        EntityNotFoundError: If no asset has ``asset_id``.
    """
    if snapshot.find_asset(asset_id) is None:
        raise EntityNotFoundError("asset", asset_id)
    changes = _changes(
        market_value=market_value,
        cost_basis=cost_basis,
        realized_income=realized_income,
    )
    return replace(
        snapshot,
        assets=tuple(
            replace(asset, **changes) if asset.id == asset_id else asset
            for asset in snapshot.assets
        ),
    )


def update_liability(
    snapshot: PortfolioSnapshot,
    liability_id: str,
    *,
    principal=None,
    annual_rate=None,
) -> PortfolioSnapshot:
    """Edit the principal or rate of a liability.

    Raises:
        EntityNotFoundError: If no liability has ``liability_id``.
    """
    if snapshot.find_liability(liability_id) is None:
        raise EntityNotFoundError("liability", liability_id)
    changes = _changes(principal=principal, annual_rate=annual_rate)
    return replace(
        snapshot,
        liabilities=tuple(
            replace(item, **changes) if item.id == liability_id else item
            for item in snapshot.liabilities
        ),
    )


def update_income_expense(
    snapshot: PortfolioSnapshot,
    **values,
) -> PortfolioSnapshot:
    """Edit income/expense figures.

    Raises:
        ValueError: If a keyword is not an income/expense field.
    """
    unknown = set(values) - _INCOME_EXPENSE_FIELDS
    if unknown:
        raise ValueError(
            f"Unknown income/expense fields: {', '.join(sorted(unknown))}"
        )
    return replace(
        snapshot,
        income_expense=replace(snapshot.income_expense, **_changes(**values)),
    )


def delete_asset(snapshot: PortfolioSnapshot, asset_id: str) -> PortfolioSnapshot:
    """Delete an asset and every liability it secures.

    Raises:
        EntityNotFoundError: If no asset has ``asset_id``.
    """
    if snapshot.find_asset(asset_id) is None:
        raise EntityNotFoundError("asset", asset_id)
    return replace(
        snapshot,
        assets=tuple(a for a in snapshot.assets if a.id != asset_id),
        liabilities=tuple(
            item
            for item in snapshot.liabilities
            if item.collateral_asset_id != asset_id
        ),
    )


def delete_liability(
    snapshot: PortfolioSnapshot,
    liability_id: str,
) -> PortfolioSnapshot:
    """Delete a single liability.

    Raises:
        EntityNotFoundError: If no liability has ``liability_id``.
    """
    if snapshot.find_liability(liability_id) is None:
        raise EntityNotFoundError("liability", liability_id)
    return replace(
        snapshot,
        liabilities=tuple(
            item for item in snapshot.liabilities if item.id != liability_id
        ),
    )


def _changes(**values) -> dict[str, Decimal]:
    return {
        name: coerce_decimal(value)
        for name, value in values.items()
        if value is not None
    }


__all__ = [
    "add_asset",
    "add_liability",
    "update_asset",
    "update_liability",
    "update_income_expense",
    "delete_asset",
    "delete_liability",
]
