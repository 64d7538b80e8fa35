"""Repository protocol definitions for domain layer."""

from .budget import BudgetRepository
from .savings import SavingsRepository
from .transaction import TransactionRepository

__all__ = [
    "BudgetRepository",
    "SavingsRepository",
    "TransactionRepository",
]
