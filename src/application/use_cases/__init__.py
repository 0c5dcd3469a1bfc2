"""Application use cases package."""

from .edit_portfolio import EditPortfolioUseCase
from .get_financial_snapshot import (
    FinancialSnapshot,
    GetFinancialSnapshotUseCase,
)
from .transfer_portfolio import ExportPortfolioUseCase, ImportPortfolioUseCase

__all__ = [
    "EditPortfolioUseCase",
    "ExportPortfolioUseCase",
    "FinancialSnapshot",
    "GetFinancialSnapshotUseCase",
    "ImportPortfolioUseCase",
]
