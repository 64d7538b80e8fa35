"""Input forms validating user data before it reaches the store."""

from .budget import BudgetForm
from .savings import SavingsForm
from .transaction import TransactionForm

__all__ = ["BudgetForm", "SavingsForm", "TransactionForm"]
