"""Domain package for business rules and core models."""

from .defaults import default_snapshot
from .errors import (
    DuplicateEntityError,
    EntityNotFoundError,
    InterchangeFormatError,
    PortfolioError,
)
from .models import (
    Asset,
    FinancialSnapshot,
    IncomeExpense,
    Liability,
    PortfolioSnapshot,
    StressParameters,
)
from .services import compute_financial_snapshot, validate_portfolio

__all__ = [
    "Asset",
    "FinancialSnapshot",
    "IncomeExpense",
    "Liability",
    "PortfolioSnapshot",
    "StressParameters",
    "default_snapshot",
    "compute_financial_snapshot",
    "validate_portfolio",
    "PortfolioError",
    "EntityNotFoundError",
    "DuplicateEntityError",
    "InterchangeFormatError",
]
