"""Page loader tests: gateway -> period filter -> aggregation."""

from __future__ import annotations

from datetime import date, timedelta

from smartspend.domain.periods import Period
from smartspend.errors import StoreUnavailableError
from smartspend.services.aggregation import BudgetHealth
from smartspend.services.overview import (
    load_analytics,
    load_budget_page,
    load_dashboard,
    load_savings_page,
)
from smartspend.services.store import StoreGateway
from tests.conftest import OWNER, TODAY


def _seed(gateway):
    rows = [
        {"amount": "1000", "type": "income", "category": "Salary", "date": "2024-01-05"},
        {"amount": "300", "type": "expense", "category": "Food", "date": "2024-01-10"},
        {"amount": "500", "type": "expense", "category": "Housing", "date": "2024-01-16"},
        {"amount": "200", "type": "expense", "category": "Travel", "date": "2023-12-20"},
    ]
    for row in rows:
        assert gateway.add_transaction(OWNER, row).ok


def test_dashboard_combines_totals_budget_and_goals(gateway):
    _seed(gateway)
    gateway.set_budget(OWNER, "1000", today=TODAY)
    gateway.add_saving(OWNER, {"title": "Car", "amount": "150", "target": "100"})

    result = load_dashboard(gateway, OWNER, today=TODAY, recent_limit=2)

    assert result.ok
    summary = result.data
    assert (summary.totals.income, summary.totals.expense, summary.totals.balance) == (1000, 1000, 0)
    assert summary.monthly_expense == 800
    assert summary.budget_status.status is BudgetHealth.WARNING
    assert summary.budget_status.percent == 80.0
    assert [item.progress.display_percent for item in summary.goals] == [100.0]
    assert [t.date for t in summary.recent] == [date(2024, 1, 16), date(2024, 1, 10)]


def test_dashboard_without_budget(gateway):
    _seed(gateway)

    summary = load_dashboard(gateway, OWNER, today=TODAY).data

    assert summary.budget is None
    assert summary.budget_status.status is BudgetHealth.NO_BUDGET


def test_analytics_weekly(gateway):
    _seed(gateway)

    report = load_analytics(gateway, OWNER, "weekly", today=TODAY).data

    assert report.period is Period.WEEKLY
    assert report.label == "This Week"
    assert (report.totals.income, report.totals.expense) == (0, 500)
    assert [item.category for item in report.breakdown] == ["Housing"]
    assert report.breakdown[0].expense_share == 100.0
    assert len(report.series) == 7
    assert report.series[5].day == date(2024, 1, 16)
    assert report.series[5].expense == 500


def test_analytics_monthly_series_has_thirty_buckets(gateway):
    _seed(gateway)

    report = load_analytics(gateway, OWNER, Period.MONTHLY, today=TODAY).data

    assert len(report.series) == 30
    assert report.series[-1].day == TODAY
    assert report.series[0].day == TODAY - timedelta(days=29)
    assert report.expense_by_category == {"Housing": 500, "Food": 300}
    assert sum(b.expense for b in report.series) == 800


def test_analytics_empty(gateway):
    report = load_analytics(gateway, OWNER, Period.DAILY, today=TODAY).data

    assert report.breakdown == []
    assert len(report.series) == 7
    assert report.totals.balance == 0


def test_budget_page_remaining(gateway):
    _seed(gateway)
    gateway.set_budget(OWNER, "5000", today=TODAY)

    page = load_budget_page(gateway, OWNER, today=TODAY).data

    assert page.monthly_expense == 800
    assert page.remaining == 4200
    assert page.status.status is BudgetHealth.GOOD


def test_savings_page(gateway):
    gateway.add_saving(OWNER, {"title": "A", "amount": "50", "target": "100"})
    gateway.add_saving(OWNER, {"title": "B", "amount": "0", "target": "300"})

    page = load_savings_page(gateway, OWNER).data

    assert sorted(item.progress.percent for item in page.goals) == [0.0, 50.0]
    assert page.overview.total_saved == 50
    assert page.overview.total_target == 400


class _DownRepo:
    def list_all(self, *, user_id):
        raise StoreUnavailableError("offline")

    def get_for_period(self, month, year, *, user_id):
        raise StoreUnavailableError("offline")


def test_loaders_pass_store_errors_through():
    down = StoreGateway(transactions=_DownRepo(), budgets=_DownRepo(), savings=_DownRepo(), timeout=1.0)

    for result in (
        load_dashboard(down, OWNER, today=TODAY),
        load_analytics(down, OWNER, today=TODAY),
        load_budget_page(down, OWNER, today=TODAY),
        load_savings_page(down, OWNER),
    ):
        assert result.data is None
        assert isinstance(result.error, StoreUnavailableError)
