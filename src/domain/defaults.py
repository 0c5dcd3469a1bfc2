"""Demo household used on first launch and after a reset."""

from decimal import Decimal

from src.domain.models.portfolio import (
    Asset,
    IncomeExpense,
    Liability,
    PortfolioSnapshot,
)

DEFAULT_ASSETS = (
    Asset("p1", "Policy A (annuity)", "investment",
          Decimal("477000"), Decimal("500000"), Decimal("12000")),
    Asset("p2", "Policy B (life)", "investment",
          Decimal("1477000"), Decimal("1500000"), Decimal("35000")),
    Asset("p3", "Policy C (annuity)", "investment",
          Decimal("1800000"), Decimal("1729999"), Decimal("80000")),
    Asset("p4", "Policy D (core)", "investment",
          Decimal("3280000"), Decimal("3030000"), Decimal("150000")),
    Asset("s1", "Pledged stock portfolio", "investment",
          Decimal("2450000"), Decimal("1890000"), Decimal("660000")),
    Asset("r1", "Home (appraised)", "real_estate",
          Decimal("4700000"), Decimal("4700000"), Decimal("0")),
    Asset("c1", "Cash reserve", "cash",
          Decimal("420000"), Decimal("420000"), Decimal("0")),
)

DEFAULT_LIABILITIES = (
    Liability("l1", "Policy A loan", "policy_loan", Decimal("200000"),
              Decimal("0.0317"), "p1", Decimal("0.5")),
    Liability("l2", "Policy B loan", "policy_loan", Decimal("650000"),
              Decimal("0.0317"), "p2", Decimal("0.5")),
    Liability("l3", "Policy C loan", "policy_loan", Decimal("790000"),
              Decimal("0.04"), "p3", Decimal("0.5")),
    Liability("l4", "Policy D loan", "policy_loan", Decimal("880000"),
              Decimal("0.04"), "p4", Decimal("0.5")),
    Liability("l6", "Share pledge loan", "share_pledge", Decimal("500000"),
              Decimal("0.03"), "s1", Decimal("1.3")),
    Liability("l7", "Mortgage", "mortgage", Decimal("4604000"),
              Decimal("0.021")),
    Liability("l8", "Personal credit line", "credit_line", Decimal("956000"),
              Decimal("0.035")),
)

DEFAULT_INCOME_EXPENSE = IncomeExpense(
    active_income=Decimal("42000"),
    passive_income=Decimal("55000"),
    mortgage_payment=Decimal("31000"),
    credit_payment=Decimal("13000"),
    base_living_expense=Decimal("20000"),
    unused_credit_limit=Decimal("860000"),
    fire_goal=Decimal("20000000"),
)


def default_snapshot() -> PortfolioSnapshot:
    """Return the demo household snapshot."""
    return PortfolioSnapshot(
        assets=DEFAULT_ASSETS,
        liabilities=DEFAULT_LIABILITIES,
        income_expense=DEFAULT_INCOME_EXPENSE,
    )


__all__ = [
    "DEFAULT_ASSETS",
    "DEFAULT_LIABILITIES",
    "DEFAULT_INCOME_EXPENSE",
    "default_snapshot",
]
