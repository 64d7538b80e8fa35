"""Concrete repository implementations using SQLModel."""

from .budget import SQLModelBudgetRepository
from .savings import SQLModelSavingsRepository
from .transaction import SQLModelTransactionRepository

__all__ = [
    "SQLModelBudgetRepository",
    "SQLModelSavingsRepository",
    "SQLModelTransactionRepository",
]
