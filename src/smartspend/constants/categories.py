"""
Centralized category definitions for transaction entry and reporting.
Each transaction kind has its own closed set of category labels.
"""

from __future__ import annotations

from enum import Enum


class TransactionKind(str, Enum):
    """Direction of money movement for a transaction."""

    INCOME = "income"
    EXPENSE = "expense"


class IncomeCategory(str, Enum):
    SALARY = "Salary"
    FREELANCE = "Freelance"
    INVESTMENTS = "Investments"
    GIFTS = "Gifts"
    OTHER_INCOME = "Other Income"


class ExpenseCategory(str, Enum):
    FOOD = "Food"
    HOUSING = "Housing"
    TRANSPORTATION = "Transportation"
    ENTERTAINMENT = "Entertainment"
    SHOPPING = "Shopping"
    UTILITIES = "Utilities"
    HEALTHCARE = "Healthcare"
    EDUCATION = "Education"
    PERSONAL_CARE = "Personal Care"
    TRAVEL = "Travel"
    OTHER_EXPENSES = "Other Expenses"


INCOME_CATEGORIES = [category.value for category in IncomeCategory]
EXPENSE_CATEGORIES = [category.value for category in ExpenseCategory]

_CATEGORIES_BY_KIND = {
    TransactionKind.INCOME: INCOME_CATEGORIES,
    TransactionKind.EXPENSE: EXPENSE_CATEGORIES,
}


def parse_kind(value: TransactionKind | str) -> TransactionKind:
    """Return the ``TransactionKind`` for ``value`` or raise ``ValueError``."""

    if isinstance(value, TransactionKind):
        return value
    try:
        return TransactionKind(str(value).strip().lower())
    except ValueError:
        raise ValueError(f"Unknown transaction type: {value!r}") from None


def categories_for(kind: TransactionKind | str) -> list[str]:
    """Return the category labels allowed for the given transaction kind."""

    return list(_CATEGORIES_BY_KIND[parse_kind(kind)])


def is_valid_category(kind: TransactionKind | str, category: str) -> bool:
    """True when ``category`` belongs to the category set of ``kind``."""

    try:
        allowed = _CATEGORIES_BY_KIND[parse_kind(kind)]
    except ValueError:
        return False
    return category in allowed
