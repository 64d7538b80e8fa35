"""Static lookup tables used across the application."""

from .categories import (
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    ExpenseCategory,
    IncomeCategory,
    TransactionKind,
    categories_for,
    is_valid_category,
    parse_kind,
)

__all__ = [
    "EXPENSE_CATEGORIES",
    "INCOME_CATEGORIES",
    "ExpenseCategory",
    "IncomeCategory",
    "TransactionKind",
    "categories_for",
    "is_valid_category",
    "parse_kind",
]
