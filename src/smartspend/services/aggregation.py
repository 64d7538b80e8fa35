"""Aggregation of transactions and goals into dashboard/analytics figures.

Every function here is pure: it reads the records it is given, never
touches the store, and returns fresh value objects. Inputs are expected to
have passed form validation already (non-negative amounts, known kinds).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Iterable, Optional, Protocol, Sequence


class TransactionLike(Protocol):
    amount: float
    type: str
    category: str
    date: date


class GoalLike(Protocol):
    amount: float
    target: float


@dataclass(frozen=True, slots=True)
class Totals:
    income: float = 0.0
    expense: float = 0.0
    balance: float = 0.0


@dataclass(frozen=True, slots=True)
class CategorySummary:
    """Income/expense rollup for one category.

    ``expense_share`` is the category's percentage of total expense, or
    ``None`` when the breakdown has no expense at all.
    """

    category: str
    income: float
    expense: float
    net: float
    expense_share: Optional[float] = None


@dataclass(frozen=True, slots=True)
class SeriesBucket:
    day: date
    label: str
    income: float
    expense: float


class BudgetHealth(str, Enum):
    GOOD = "good"
    WARNING = "warning"
    EXCEEDED = "exceeded"
    NO_BUDGET = "no_budget"


WARNING_THRESHOLD = 80.0
EXCEEDED_THRESHOLD = 100.0


@dataclass(frozen=True, slots=True)
class BudgetStatus:
    budget: float
    expense: float
    percent: float
    status: BudgetHealth

    @property
    def display_percent(self) -> float:
        return min(self.percent, 100.0)

    @property
    def remaining(self) -> float:
        return self.budget - self.expense


@dataclass(frozen=True, slots=True)
class SavingsProgress:
    amount: float
    target: float
    percent: float

    @property
    def display_percent(self) -> float:
        return min(self.percent, 100.0)

    @property
    def remaining(self) -> float:
        return max(self.target - self.amount, 0.0)

    @property
    def reached(self) -> bool:
        return self.target > 0 and self.amount >= self.target


@dataclass(frozen=True, slots=True)
class SavingsOverview:
    goal_count: int
    total_saved: float
    total_target: float
    progress: SavingsProgress


def _is_income(txn: TransactionLike) -> bool:
    return txn.type == "income"


def calculate_totals(transactions: Iterable[TransactionLike]) -> Totals:
    """Sum income and expense; balance is income minus expense."""

    income = 0.0
    expense = 0.0
    for txn in transactions:
        if _is_income(txn):
            income += txn.amount
        else:
            expense += txn.amount
    return Totals(income=income, expense=expense, balance=income - expense)


def category_breakdown(transactions: Iterable[TransactionLike]) -> list[CategorySummary]:
    """Group by category, ordered by expense (highest first).

    Equal expense totals are ordered by category name so repeated calls on
    the same data always agree.
    """

    sums: dict[str, list[float]] = {}
    for txn in transactions:
        bucket = sums.setdefault(txn.category, [0.0, 0.0])
        if _is_income(txn):
            bucket[0] += txn.amount
        else:
            bucket[1] += txn.amount

    total_expense = sum(expense for _, expense in sums.values())
    summaries = []
    for category, (income, expense) in sums.items():
        share = None
        if total_expense > 0:
            share = expense / total_expense * 100
        summaries.append(
            CategorySummary(
                category=category,
                income=income,
                expense=expense,
                net=income - expense,
                expense_share=share,
            )
        )
    summaries.sort(key=lambda item: (-item.expense, item.category))
    return summaries


def expense_by_category(transactions: Iterable[TransactionLike]) -> dict[str, float]:
    """Expense totals keyed by category in first-seen order (chart input)."""

    totals: dict[str, float] = {}
    for txn in transactions:
        if _is_income(txn):
            continue
        totals[txn.category] = totals.get(txn.category, 0.0) + txn.amount
    return totals


def _bucket_label(day: date) -> str:
    return f"{day:%b} {day.day}"


def time_series(
    transactions: Iterable[TransactionLike], *, days: int, today: date
) -> list[SeriesBucket]:
    """Return ``days`` daily buckets, oldest first, ending at ``today``.

    A transaction lands in the bucket for its day offset from ``today``.
    Offsets outside ``[0, days)`` are dropped, which includes future-dated
    transactions.
    """

    if days <= 0:
        raise ValueError("days must be a positive number of buckets")

    income = [0.0] * days
    expense = [0.0] * days
    for txn in transactions:
        offset = (today - txn.date).days
        if offset < 0 or offset >= days:
            continue
        index = days - offset - 1
        if _is_income(txn):
            income[index] += txn.amount
        else:
            expense[index] += txn.amount

    buckets = []
    for index in range(days):
        day = today - timedelta(days=days - index - 1)
        buckets.append(
            SeriesBucket(day=day, label=_bucket_label(day), income=income[index], expense=expense[index])
        )
    return buckets


def budget_status(budget: float, expense: float) -> BudgetStatus:
    """Classify spending against a budget.

    exceeded at 100% or more, warning from 80%, good below that. A budget of
    zero (or less) means no budget is set and reports 0%.
    """

    if budget <= 0:
        return BudgetStatus(budget=budget, expense=expense, percent=0.0, status=BudgetHealth.NO_BUDGET)

    percent = expense * 100 / budget
    if percent >= EXCEEDED_THRESHOLD:
        status = BudgetHealth.EXCEEDED
    elif percent >= WARNING_THRESHOLD:
        status = BudgetHealth.WARNING
    else:
        status = BudgetHealth.GOOD
    return BudgetStatus(budget=budget, expense=expense, percent=percent, status=status)


def savings_progress(amount: float, target: float) -> SavingsProgress:
    """Progress toward a goal; ``percent`` is unclamped, 0 when target is 0."""

    percent = amount * 100 / target if target > 0 else 0.0
    return SavingsProgress(amount=amount, target=target, percent=percent)


def savings_overview(goals: Sequence[GoalLike]) -> SavingsOverview:
    total_saved = sum(goal.amount for goal in goals)
    total_target = sum(goal.target for goal in goals)
    return SavingsOverview(
        goal_count=len(goals),
        total_saved=total_saved,
        total_target=total_target,
        progress=savings_progress(total_saved, total_target),
    )


def recent_transactions(transactions: Iterable[TransactionLike], limit: int = 5) -> list:
    """Newest-first slice; ties on date keep their incoming order."""

    ordered = sorted(transactions, key=lambda txn: txn.date, reverse=True)
    return ordered[: max(limit, 0)]
