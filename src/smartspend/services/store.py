"""Store gateway: CRUD calls that report failures as values instead of raising.

Every public method returns a :class:`StoreResult`. Expected failures
(validation, not-found, constraint violations, an unreachable or slow store)
come back in ``error`` with ``data`` set to ``None``; nothing is mutated when
a call fails. Unexpected programming errors still propagate.
"""

from __future__ import annotations

import threading
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Generic, Hashable, Mapping, Optional, TypeVar

from ..domain.periods import month_name
from ..domain.repositories import BudgetRepository, SavingsRepository, TransactionRepository
from ..errors import NotFoundError, SmartSpendError, StoreTimeoutError, ValidationError
from ..forms import BudgetForm, SavingsForm, TransactionForm
from ..infra.repositories.budget import UPDATABLE_FIELDS as BUDGET_FIELDS
from ..infra.repositories.savings import UPDATABLE_FIELDS as SAVINGS_FIELDS
from ..infra.repositories.transaction import UPDATABLE_FIELDS as TRANSACTION_FIELDS
from ..logging_config import get_logger
from ..models import Budget, SavingsGoal, Transaction

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class StoreResult(Generic[T]):
    """Outcome of a gateway call: ``data`` on success, ``error`` otherwise."""

    data: Optional[T] = None
    error: Optional[SmartSpendError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class InFlightCalls:
    """Collapse identical concurrent reads into a single store round trip.

    The first caller for a key runs the call; callers arriving while it is
    running wait for its outcome, for at most ``timeout`` seconds.

    The leading call itself is not interrupted here. Its deadline is the
    store's own: ``BaseConfig.sqlalchemy_engine_options`` hands the same
    timeout to the SQLite busy timeout or the connection pool, which raise
    and surface as ``StoreTimeoutError`` through ``translate_store_errors``.
    A leader stuck past that (for example in a hung network read) keeps
    its followers waiting only until their own timeout.
    """

    def __init__(self, timeout: float):
        self.timeout = timeout
        self._lock = threading.Lock()
        self._calls: dict[Hashable, Future] = {}

    def run(self, key: Hashable, call: Callable[[], T]) -> T:
        with self._lock:
            future = self._calls.get(key)
            leader = future is None
            if leader:
                future = Future()
                self._calls[key] = future

        if not leader:
            try:
                result = future.result(timeout=self.timeout)
            except FutureTimeoutError:
                raise StoreTimeoutError(
                    f"Timed out after {self.timeout:g}s waiting for {key!r}"
                ) from None
            return list(result) if isinstance(result, list) else result

        try:
            result = call()
        except BaseException as exc:
            future.set_exception(exc)
            raise
        else:
            future.set_result(result)
            return result
        finally:
            with self._lock:
                self._calls.pop(key, None)

    def pending(self) -> int:
        with self._lock:
            return len(self._calls)


def _check_fields(fields: Mapping[str, Any], allowed: frozenset[str]) -> None:
    unknown = sorted(set(fields) - allowed)
    if unknown:
        raise ValidationError({name: ["Field cannot be updated."] for name in unknown})


class StoreGateway:
    """Owner-scoped access to transactions, budgets and savings goals."""

    def __init__(
        self,
        *,
        transactions: TransactionRepository,
        budgets: BudgetRepository,
        savings: SavingsRepository,
        timeout: float = 10.0,
    ):
        self.transactions = transactions
        self.budgets = budgets
        self.savings = savings
        self.in_flight = InFlightCalls(timeout)

    # -- plumbing ---------------------------------------------------------

    def _call(self, owner_id: str, operation: str, call: Callable[[], T]) -> StoreResult[T]:
        try:
            return StoreResult(data=call())
        except SmartSpendError as exc:
            logger.warning(
                "Store call failed: %s",
                exc,
                extra={"owner_id": owner_id, "operation": operation, "error_type": type(exc).__name__},
            )
            return StoreResult(error=exc)

    def _read(self, owner_id: str, operation: str, call: Callable[[], T], *key: Hashable) -> StoreResult[T]:
        return self._call(
            owner_id, operation, lambda: self.in_flight.run((owner_id, operation, *key), call)
        )

    @staticmethod
    def _log_mutation(message: str, owner_id: str, operation: str, record_id: Optional[str]) -> None:
        logger.info(message, extra={"owner_id": owner_id, "operation": operation, "record_id": record_id})

    # -- transactions -----------------------------------------------------

    def list_transactions(self, owner_id: str) -> StoreResult[list[Transaction]]:
        """All of the owner's transactions, newest first."""

        return self._read(
            owner_id, "transactions.list", lambda: self.transactions.list_all(user_id=owner_id)
        )

    def transactions_in_range(
        self, owner_id: str, start: date, end: date
    ) -> StoreResult[list[Transaction]]:
        return self._read(
            owner_id,
            "transactions.range",
            lambda: self.transactions.filter_by_date_range(start, end, user_id=owner_id),
            start,
            end,
        )

    def add_transaction(self, owner_id: str, fields: Mapping[str, Any]) -> StoreResult[Transaction]:
        def call() -> Transaction:
            record = TransactionForm.from_mapping(fields).to_record(owner_id)
            created = self.transactions.create(record, user_id=owner_id)
            self._log_mutation("Transaction created", owner_id, "transactions.insert", created.id)
            return created

        return self._call(owner_id, "transactions.insert", call)

    def update_transaction(
        self, owner_id: str, transaction_id: str, fields: Mapping[str, Any]
    ) -> StoreResult[Transaction]:
        """Partial update; the merged record must still pass validation."""

        def call() -> Transaction:
            _check_fields(fields, TRANSACTION_FIELDS)
            existing = self.transactions.get_by_id(transaction_id, user_id=owner_id)
            if existing is None:
                raise NotFoundError(f"Transaction {transaction_id} not found")
            merged = {name: getattr(existing, name) for name in TRANSACTION_FIELDS}
            merged.update(fields)
            cleaned = TransactionForm.from_mapping(merged).cleaned_fields()
            changes = {name: cleaned[name] for name in fields}
            updated = self.transactions.update(transaction_id, changes, user_id=owner_id)
            self._log_mutation("Transaction updated", owner_id, "transactions.update", transaction_id)
            return updated

        return self._call(owner_id, "transactions.update", call)

    def delete_transaction(self, owner_id: str, transaction_id: str) -> StoreResult[None]:
        def call() -> None:
            self.transactions.delete(transaction_id, user_id=owner_id)
            self._log_mutation("Transaction deleted", owner_id, "transactions.delete", transaction_id)

        return self._call(owner_id, "transactions.delete", call)

    # -- budgets ----------------------------------------------------------

    def list_budgets(self, owner_id: str) -> StoreResult[list[Budget]]:
        return self._read(owner_id, "budgets.list", lambda: self.budgets.list_all(user_id=owner_id))

    def current_budget(self, owner_id: str, today: Optional[date] = None) -> StoreResult[Optional[Budget]]:
        """The budget for the month containing ``today``; ``data`` is None when unset."""

        today = today or date.today()
        month, year = month_name(today), today.year
        return self._read(
            owner_id,
            "budgets.current",
            lambda: self.budgets.get_for_period(month, year, user_id=owner_id),
            month,
            year,
        )

    def add_budget(
        self, owner_id: str, fields: Mapping[str, Any], today: Optional[date] = None
    ) -> StoreResult[Budget]:
        """Plain insert; fails with a constraint violation if the period already has one."""

        def call() -> Budget:
            record = BudgetForm.from_mapping(fields, today=today).to_record(owner_id)
            created = self.budgets.create(record, user_id=owner_id)
            self._log_mutation("Budget created", owner_id, "budgets.insert", created.id)
            return created

        return self._call(owner_id, "budgets.insert", call)

    def set_budget(
        self,
        owner_id: str,
        amount: Any,
        *,
        month: Optional[str] = None,
        year: Optional[int] = None,
        today: Optional[date] = None,
    ) -> StoreResult[Budget]:
        """Insert-or-update the budget for a period (defaults to the current month)."""

        def call() -> Budget:
            form = BudgetForm.from_mapping({"amount": amount, "month": month, "year": year}, today=today)
            form.ensure_valid()
            budget = self.budgets.upsert_for_period(
                form.month, form.year, form.amount, user_id=owner_id
            )
            self._log_mutation("Budget set", owner_id, "budgets.upsert", budget.id)
            return budget

        return self._call(owner_id, "budgets.upsert", call)

    def update_budget(
        self, owner_id: str, budget_id: str, fields: Mapping[str, Any]
    ) -> StoreResult[Budget]:
        def call() -> Budget:
            _check_fields(fields, BUDGET_FIELDS)
            existing = self.budgets.get_by_id(budget_id, user_id=owner_id)
            if existing is None:
                raise NotFoundError(f"Budget {budget_id} not found")
            merged = {name: getattr(existing, name) for name in BUDGET_FIELDS}
            merged.update(fields)
            form = BudgetForm.from_mapping(merged)
            form.ensure_valid()
            changes = {name: getattr(form, name) for name in fields}
            updated = self.budgets.update(budget_id, changes, user_id=owner_id)
            self._log_mutation("Budget updated", owner_id, "budgets.update", budget_id)
            return updated

        return self._call(owner_id, "budgets.update", call)

    def delete_budget(self, owner_id: str, budget_id: str) -> StoreResult[None]:
        def call() -> None:
            self.budgets.delete(budget_id, user_id=owner_id)
            self._log_mutation("Budget deleted", owner_id, "budgets.delete", budget_id)

        return self._call(owner_id, "budgets.delete", call)

    # -- savings ----------------------------------------------------------

    def list_savings(self, owner_id: str) -> StoreResult[list[SavingsGoal]]:
        return self._read(owner_id, "savings.list", lambda: self.savings.list_all(user_id=owner_id))

    def add_saving(self, owner_id: str, fields: Mapping[str, Any]) -> StoreResult[SavingsGoal]:
        def call() -> SavingsGoal:
            record = SavingsForm.from_mapping(fields).to_record(owner_id)
            created = self.savings.create(record, user_id=owner_id)
            self._log_mutation("Savings goal created", owner_id, "savings.insert", created.id)
            return created

        return self._call(owner_id, "savings.insert", call)

    def update_saving(
        self, owner_id: str, goal_id: str, fields: Mapping[str, Any]
    ) -> StoreResult[SavingsGoal]:
        def call() -> SavingsGoal:
            _check_fields(fields, SAVINGS_FIELDS)
            existing = self.savings.get_by_id(goal_id, user_id=owner_id)
            if existing is None:
                raise NotFoundError(f"Savings goal {goal_id} not found")
            merged = {name: getattr(existing, name) for name in SAVINGS_FIELDS}
            merged.update(fields)
            cleaned = SavingsForm.from_mapping(merged).cleaned_fields()
            changes = {name: cleaned[name] for name in fields}
            updated = self.savings.update(goal_id, changes, user_id=owner_id)
            self._log_mutation("Savings goal updated", owner_id, "savings.update", goal_id)
            return updated

        return self._call(owner_id, "savings.update", call)

    def delete_saving(self, owner_id: str, goal_id: str) -> StoreResult[None]:
        def call() -> None:
            self.savings.delete(goal_id, user_id=owner_id)
            self._log_mutation("Savings goal deleted", owner_id, "savings.delete", goal_id)

        return self._call(owner_id, "savings.delete", call)
