"""Domain models for the household portfolio snapshot.

Entities are immutable. Numeric fields are coerced to ``Decimal`` on
construction so that values coming from sliders, forms or JSON documents
all compare exactly against the risk thresholds.
"""

from dataclasses import dataclass, field, fields
from decimal import Decimal
from typing import Literal

from src.domain.constants import (
    DEFAULT_FIRE_GOAL,
    MAX_INTEREST_HIKE_FRACTION,
    MAX_MARKET_CRASH_FRACTION,
)
from src.utils.decimal_utils import (
    ZERO,
    coerce_decimal,
    coerce_optional_decimal,
)

AssetKind = Literal["investment", "real_estate", "cash"]
LiabilityKind = Literal["mortgage", "credit_line", "share_pledge", "policy_loan"]


def _coerce_fields(instance, names: tuple[str, ...]) -> None:
    for name in names:
        value = getattr(instance, name)
        if not isinstance(value, Decimal):
            object.__setattr__(instance, name, coerce_decimal(value))


@dataclass(frozen=True)
class Asset:
    """A held asset.

    Attributes:
        id: Unique identifier within the asset collection.
        name: Display name.
        kind: investment, real_estate or cash.
        market_value: Current market value before any stress.
        cost_basis: Amount originally invested.
        realized_income: Dividends or payouts already received.
    """

    id: str
    name: str
    kind: AssetKind
    market_value: Decimal = ZERO
    cost_basis: Decimal = ZERO
    realized_income: Decimal = ZERO

    def __post_init__(self) -> None:
        _coerce_fields(self, ("market_value", "cost_basis", "realized_income"))


@dataclass(frozen=True)
class Liability:
    """An outstanding loan.

    Attributes:
        id: Unique identifier within the liability collection.
        name: Display name.
        kind: mortgage, credit_line, share_pledge or policy_loan.
        principal: Outstanding principal.
        annual_rate: Annual interest rate as a fraction (0.021 is 2.1%).
        collateral_asset_id: Id of the pledged asset, if any.
        maintenance_threshold: Lender threshold kept as data only.
    """

    id: str
    name: str
    kind: LiabilityKind
    principal: Decimal = ZERO
    annual_rate: Decimal = ZERO
    collateral_asset_id: str | None = None
    maintenance_threshold: Decimal | None = None

    def __post_init__(self) -> None:
        _coerce_fields(self, ("principal", "annual_rate"))
        object.__setattr__(
            self,
            "maintenance_threshold",
            coerce_optional_decimal(self.maintenance_threshold),
        )


@dataclass(frozen=True)
class IncomeExpense:
    """Monthly income and expense figures plus the FIRE goal."""

    active_income: Decimal = ZERO
    passive_income: Decimal = ZERO
    mortgage_payment: Decimal = ZERO
    credit_payment: Decimal = ZERO
    base_living_expense: Decimal = ZERO
    unused_credit_limit: Decimal = ZERO
    fire_goal: Decimal = DEFAULT_FIRE_GOAL

    def __post_init__(self) -> None:
        _coerce_fields(self, tuple(f.name for f in fields(self)))


@dataclass(frozen=True)
class StressParameters:
    """Hypothetical market crash and rate shock.

    Attributes:
        market_crash_fraction: Drop applied to investment assets (0 to 0.5).
        interest_hike_fraction: Added annual rate on margin-style loans
            (0 to 0.02).
    """

    market_crash_fraction: Decimal = ZERO
    interest_hike_fraction: Decimal = ZERO

    def __post_init__(self) -> None:
        _coerce_fields(
            self,
            ("market_crash_fraction", "interest_hike_fraction"),
        )

    def clamped(self) -> "StressParameters":
        """Return a copy with both fractions clamped to the slider range."""
        return StressParameters(
            market_crash_fraction=min(
                max(self.market_crash_fraction, ZERO),
                MAX_MARKET_CRASH_FRACTION,
            ),
            interest_hike_fraction=min(
                max(self.interest_hike_fraction, ZERO),
                MAX_INTEREST_HIKE_FRACTION,
            ),
        )


@dataclass(frozen=True)
class PortfolioSnapshot:
    """Immutable set of entities the engine computes over."""

    assets: tuple[Asset, ...] = ()
    liabilities: tuple[Liability, ...] = ()
    income_expense: IncomeExpense = field(default_factory=IncomeExpense)

    def __post_init__(self) -> None:
        object.__setattr__(self, "assets", tuple(self.assets))
        object.__setattr__(self, "liabilities", tuple(self.liabilities))

    def find_asset(self, asset_id: str | None) -> Asset | None:
        """Return the asset with ``asset_id`` or None."""
        if asset_id is None:
            return None
        return next((a for a in self.assets if a.id == asset_id), None)

    def find_liability(self, liability_id: str) -> Liability | None:
        """Return the liability with ``liability_id`` or None."""
        return next(
            (item for item in self.liabilities if item.id == liability_id),
            None,
        )


__all__ = [
    "AssetKind",
    "LiabilityKind",
    "Asset",
    "Liability",
    "IncomeExpense",
    "StressParameters",
    "PortfolioSnapshot",
]
