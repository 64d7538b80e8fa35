"""SQLModel table exports."""

from .budget import Budget
from .savings import SavingsGoal
from .transaction import Transaction

__all__ = [
    "Budget",
    "SavingsGoal",
    "Transaction",
]
