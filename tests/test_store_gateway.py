"""Store gateway tests: results instead of exceptions, upsert, in-flight reads."""

from __future__ import annotations

import logging
import threading
import time
from datetime import date

import pytest

from smartspend.errors import (
    ConstraintViolationError,
    NotFoundError,
    StoreTimeoutError,
    StoreUnavailableError,
    ValidationError,
)
from smartspend.services.aggregation import savings_progress
from smartspend.services.store import InFlightCalls, StoreGateway, StoreResult
from tests.conftest import OTHER_OWNER, OWNER, TODAY


def _income(**overrides):
    data = {"amount": "1000", "type": "income", "category": "Salary", "date": "2024-01-05"}
    data.update(overrides)
    return data


def _expense(**overrides):
    data = {"amount": "300", "type": "expense", "category": "Food", "date": "2024-01-10"}
    data.update(overrides)
    return data


def test_insert_and_list_newest_first(gateway):
    salary = gateway.add_transaction(OWNER, _income())
    food = gateway.add_transaction(OWNER, _expense())

    assert salary.ok and food.ok
    listed = gateway.list_transactions(OWNER)
    assert listed.ok
    assert [t.id for t in listed.data] == [food.data.id, salary.data.id]


def test_invalid_insert_returns_validation_error_and_stores_nothing(gateway):
    result = gateway.add_transaction(OWNER, _expense(category="Salary"))

    assert result.data is None
    assert isinstance(result.error, ValidationError)
    assert "category" in result.error.errors
    assert gateway.list_transactions(OWNER).data == []


def test_update_revalidates_merged_record(gateway):
    created = gateway.add_transaction(OWNER, _expense()).data

    switched = gateway.update_transaction(OWNER, created.id, {"type": "income"})

    assert isinstance(switched.error, ValidationError)
    unchanged = gateway.list_transactions(OWNER).data[0]
    assert unchanged.type == "expense"

    fixed = gateway.update_transaction(OWNER, created.id, {"type": "income", "category": "Gifts"})
    assert fixed.ok
    assert (fixed.data.type, fixed.data.category, fixed.data.amount) == ("income", "Gifts", 300.0)


def test_update_unknown_field_rejected(gateway):
    created = gateway.add_transaction(OWNER, _expense()).data

    result = gateway.update_transaction(OWNER, created.id, {"created_at": "now"})

    assert isinstance(result.error, ValidationError)


def test_missing_records_reported_not_found(gateway):
    assert isinstance(gateway.update_transaction(OWNER, "missing", {"amount": "1"}).error, NotFoundError)
    assert isinstance(gateway.delete_transaction(OWNER, "missing").error, NotFoundError)
    assert isinstance(gateway.update_saving(OWNER, "missing", {"amount": "1"}).error, NotFoundError)
    assert isinstance(gateway.delete_budget(OWNER, "missing").error, NotFoundError)


def test_owner_cannot_touch_other_owners_records(gateway):
    created = gateway.add_transaction(OWNER, _expense()).data

    result = gateway.delete_transaction(OTHER_OWNER, created.id)

    assert isinstance(result.error, NotFoundError)
    assert len(gateway.list_transactions(OWNER).data) == 1


def test_delete_success_has_no_error(gateway):
    created = gateway.add_transaction(OWNER, _expense()).data

    result = gateway.delete_transaction(OWNER, created.id)

    assert result.ok
    assert gateway.list_transactions(OWNER).data == []


def test_transactions_in_range(gateway):
    gateway.add_transaction(OWNER, _income(date="2023-12-31"))
    gateway.add_transaction(OWNER, _expense(date="2024-01-10"))

    result = gateway.transactions_in_range(OWNER, date(2024, 1, 1), date(2024, 1, 31))

    assert [t.date for t in result.data] == [date(2024, 1, 10)]


def test_set_budget_twice_keeps_one_row_with_second_amount(gateway):
    first = gateway.set_budget(OWNER, "5000", today=TODAY)
    second = gateway.set_budget(OWNER, "6500", today=TODAY)

    assert first.ok and second.ok
    budgets = gateway.list_budgets(OWNER).data
    assert len(budgets) == 1
    assert budgets[0].amount == 6500.0
    assert (budgets[0].month, budgets[0].year) == ("january", 2024)


def test_current_budget_absent_is_not_an_error(gateway):
    result = gateway.current_budget(OWNER, TODAY)

    assert result.ok
    assert result.data is None


def test_current_budget_matches_today_period(gateway):
    gateway.set_budget(OWNER, "100", month="december", year=2023)
    gateway.set_budget(OWNER, "200", today=TODAY)

    assert gateway.current_budget(OWNER, TODAY).data.amount == 200.0


def test_add_budget_for_taken_period_is_constraint_violation(gateway):
    gateway.set_budget(OWNER, "100", today=TODAY)

    result = gateway.add_budget(OWNER, {"amount": "300"}, today=TODAY)

    assert isinstance(result.error, ConstraintViolationError)
    assert gateway.current_budget(OWNER, TODAY).data.amount == 100.0


def test_update_budget_amount(gateway):
    budget = gateway.set_budget(OWNER, "100", today=TODAY).data

    result = gateway.update_budget(OWNER, budget.id, {"amount": "250"})

    assert result.ok
    assert result.data.amount == 250.0


def test_invalid_budget_amount(gateway):
    result = gateway.set_budget(OWNER, "-10", today=TODAY)

    assert isinstance(result.error, ValidationError)
    assert gateway.list_budgets(OWNER).data == []


def test_savings_lifecycle(gateway):
    created = gateway.add_saving(OWNER, {"title": "Holiday", "amount": "100", "target": "2000"})
    assert created.ok

    updated = gateway.update_saving(OWNER, created.data.id, {"amount": "400"})
    assert updated.data.amount == 400.0
    assert updated.data.target == 2000.0

    bad = gateway.update_saving(OWNER, created.data.id, {"target": "-5"})
    assert isinstance(bad.error, ValidationError)

    assert gateway.delete_saving(OWNER, created.data.id).ok
    assert gateway.list_savings(OWNER).data == []


def test_zero_amounts_are_stored(gateway):
    goal = gateway.add_saving(OWNER, {"title": "Someday", "amount": "0", "target": "0"})
    txn = gateway.add_transaction(OWNER, _expense(amount="0"))

    assert goal.ok, goal.error
    assert txn.ok, txn.error
    assert txn.data.amount == 0.0

    stored = gateway.list_savings(OWNER).data[0]
    progress = savings_progress(stored.amount, stored.target)
    assert progress.percent == 0.0
    assert progress.display_percent == 0.0
    assert not progress.reached


def test_malformed_date_is_rejected(gateway):
    result = gateway.add_transaction(OWNER, _expense(date="2024-01-10garbage"))

    assert isinstance(result.error, ValidationError)
    assert "date" in result.error.errors
    assert gateway.list_transactions(OWNER).data == []


class _FailingRepo:
    def list_all(self, *, user_id):
        raise StoreUnavailableError("connection refused")


def test_store_failure_returned_and_logged(caplog):
    gateway = StoreGateway(transactions=_FailingRepo(), budgets=None, savings=None, timeout=1.0)

    with caplog.at_level(logging.WARNING, logger="smartspend"):
        result = gateway.list_transactions(OWNER)

    assert result == StoreResult(error=result.error)
    assert isinstance(result.error, StoreUnavailableError)
    record = next(r for r in caplog.records if r.getMessage().startswith("Store call failed"))
    assert record.owner_id == OWNER
    assert record.operation == "transactions.list"


class _SlowRepo:
    def __init__(self):
        self.calls = 0
        self.started = threading.Event()
        self.release = threading.Event()

    def list_all(self, *, user_id):
        self.calls += 1
        self.started.set()
        self.release.wait(timeout=5)
        return [f"row-for-{user_id}"]


def test_concurrent_identical_reads_share_one_call():
    repo = _SlowRepo()
    gateway = StoreGateway(transactions=repo, budgets=None, savings=None, timeout=5.0)
    results: list[StoreResult] = []

    def read():
        results.append(gateway.list_transactions(OWNER))

    leader = threading.Thread(target=read)
    leader.start()
    assert repo.started.wait(timeout=5)
    follower = threading.Thread(target=read)
    follower.start()
    time.sleep(0.2)
    repo.release.set()
    leader.join()
    follower.join()

    assert repo.calls == 1
    assert [r.data for r in results] == [["row-for-owner-1"], ["row-for-owner-1"]]
    assert gateway.in_flight.pending() == 0


def test_waiting_reader_times_out():
    repo = _SlowRepo()
    gateway = StoreGateway(transactions=repo, budgets=None, savings=None, timeout=0.05)
    leader = threading.Thread(target=gateway.list_transactions, args=(OWNER,))
    leader.start()
    assert repo.started.wait(timeout=5)

    result = gateway.list_transactions(OWNER)

    repo.release.set()
    leader.join()
    assert isinstance(result.error, StoreTimeoutError)


def test_in_flight_reruns_after_completion():
    calls = []
    in_flight = InFlightCalls(timeout=1.0)

    in_flight.run("key", lambda: calls.append(1))
    in_flight.run("key", lambda: calls.append(2))

    assert calls == [1, 2]
    assert in_flight.pending() == 0


def test_in_flight_propagates_leader_error():
    in_flight = InFlightCalls(timeout=1.0)

    def boom():
        raise NotFoundError("gone")

    with pytest.raises(NotFoundError):
        in_flight.run("key", boom)
    assert in_flight.pending() == 0
