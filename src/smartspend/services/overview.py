"""Data loaders for the dashboard, analytics, budget and savings pages.

Each loader fetches from the gateway, narrows to the relevant period and
reduces with the aggregation functions. A store failure is passed through
as-is so the caller can show it and keep whatever it displayed before.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..domain.periods import (
    Period,
    bucket_count,
    filter_by_period,
    parse_period,
    period_label,
)
from ..models import Budget, SavingsGoal, Transaction
from . import aggregation
from .aggregation import (
    BudgetStatus,
    CategorySummary,
    SavingsOverview,
    SavingsProgress,
    SeriesBucket,
    Totals,
)
from .store import StoreGateway, StoreResult


@dataclass(slots=True)
class GoalProgress:
    goal: SavingsGoal
    progress: SavingsProgress


@dataclass(slots=True)
class DashboardSummary:
    totals: Totals
    monthly_expense: float
    budget: Optional[Budget]
    budget_status: BudgetStatus
    goals: list[GoalProgress] = field(default_factory=list)
    recent: list[Transaction] = field(default_factory=list)


@dataclass(slots=True)
class AnalyticsSummary:
    period: Period
    label: str
    totals: Totals
    breakdown: list[CategorySummary]
    expense_by_category: dict[str, float]
    series: list[SeriesBucket]


@dataclass(slots=True)
class BudgetPageSummary:
    budget: Optional[Budget]
    monthly_expense: float
    status: BudgetStatus

    @property
    def remaining(self) -> float:
        return self.status.remaining


@dataclass(slots=True)
class SavingsPageSummary:
    goals: list[GoalProgress]
    overview: SavingsOverview


def _with_progress(goals: list[SavingsGoal]) -> list[GoalProgress]:
    return [
        GoalProgress(goal=goal, progress=aggregation.savings_progress(goal.amount, goal.target))
        for goal in goals
    ]


def _monthly_status(
    transactions: list[Transaction], budget: Optional[Budget], today: date
) -> tuple[float, BudgetStatus]:
    monthly = filter_by_period(transactions, Period.MONTHLY, today)
    monthly_expense = aggregation.calculate_totals(monthly).expense
    amount = budget.amount if budget is not None else 0.0
    return monthly_expense, aggregation.budget_status(amount, monthly_expense)


def load_dashboard(
    gateway: StoreGateway,
    owner_id: str,
    *,
    today: Optional[date] = None,
    recent_limit: int = 5,
) -> StoreResult[DashboardSummary]:
    today = today or date.today()

    txns = gateway.list_transactions(owner_id)
    if not txns.ok:
        return StoreResult(error=txns.error)
    budget = gateway.current_budget(owner_id, today)
    if not budget.ok:
        return StoreResult(error=budget.error)
    goals = gateway.list_savings(owner_id)
    if not goals.ok:
        return StoreResult(error=goals.error)

    transactions = txns.data or []
    monthly_expense, status = _monthly_status(transactions, budget.data, today)
    return StoreResult(
        data=DashboardSummary(
            totals=aggregation.calculate_totals(transactions),
            monthly_expense=monthly_expense,
            budget=budget.data,
            budget_status=status,
            goals=_with_progress(goals.data or []),
            recent=aggregation.recent_transactions(transactions, recent_limit),
        )
    )


def load_analytics(
    gateway: StoreGateway,
    owner_id: str,
    period: Period | str = Period.MONTHLY,
    *,
    today: Optional[date] = None,
) -> StoreResult[AnalyticsSummary]:
    """Totals, category breakdown and daily series for one period."""

    period = parse_period(period)
    today = today or date.today()

    txns = gateway.list_transactions(owner_id)
    if not txns.ok:
        return StoreResult(error=txns.error)

    selected = filter_by_period(txns.data or [], period, today)
    return StoreResult(
        data=AnalyticsSummary(
            period=period,
            label=period_label(period),
            totals=aggregation.calculate_totals(selected),
            breakdown=aggregation.category_breakdown(selected),
            expense_by_category=aggregation.expense_by_category(selected),
            series=aggregation.time_series(selected, days=bucket_count(period), today=today),
        )
    )


def load_budget_page(
    gateway: StoreGateway, owner_id: str, *, today: Optional[date] = None
) -> StoreResult[BudgetPageSummary]:
    today = today or date.today()

    budget = gateway.current_budget(owner_id, today)
    if not budget.ok:
        return StoreResult(error=budget.error)
    txns = gateway.list_transactions(owner_id)
    if not txns.ok:
        return StoreResult(error=txns.error)

    monthly_expense, status = _monthly_status(txns.data or [], budget.data, today)
    return StoreResult(
        data=BudgetPageSummary(budget=budget.data, monthly_expense=monthly_expense, status=status)
    )


def load_savings_page(gateway: StoreGateway, owner_id: str) -> StoreResult[SavingsPageSummary]:
    goals = gateway.list_savings(owner_id)
    if not goals.ok:
        return StoreResult(error=goals.error)
    rows = goals.data or []
    return StoreResult(
        data=SavingsPageSummary(goals=_with_progress(rows), overview=aggregation.savings_overview(rows))
    )
