"""SQLModel implementation of Budget repository."""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

from sqlalchemy.dialects import postgresql, sqlite
from sqlmodel import Session, select

from ...errors import NotFoundError, StoreUnavailableError
from ...models._ids import new_id, utcnow
from ...models.budget import Budget
from ..database import translate_store_errors
from ._fields import apply_fields

UPDATABLE_FIELDS = frozenset({"amount", "month", "year"})
PERIOD_COLUMNS = ("user_id", "month", "year")

# Dialects with INSERT ... ON CONFLICT DO UPDATE
_UPSERT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


class SQLModelBudgetRepository:
    """SQLModel-based budget repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def _owned(self, session: Session, budget_id: str, user_id: str) -> Optional[Budget]:
        return session.exec(
            select(Budget).where(Budget.id == budget_id, Budget.user_id == user_id)
        ).first()

    def _period(self, session: Session, month: str, year: int, user_id: str) -> Optional[Budget]:
        return session.exec(
            select(Budget)
            .where(Budget.user_id == user_id)
            .where(Budget.month == month)
            .where(Budget.year == year)
        ).first()

    def get_by_id(self, budget_id: str, *, user_id: str) -> Optional[Budget]:
        """Retrieve a budget by ID."""
        with translate_store_errors(), self.session_factory() as session:
            budget = self._owned(session, budget_id, user_id)
            if budget:
                session.expunge(budget)
            return budget

    def get_for_period(self, month: str, year: int, *, user_id: str) -> Optional[Budget]:
        """Get the budget for a (month, year) period."""
        with translate_store_errors(), self.session_factory() as session:
            budget = self._period(session, month, year, user_id)
            if budget:
                session.expunge(budget)
            return budget

    def list_all(self, *, user_id: str) -> list[Budget]:
        """List budgets, newest first."""
        with translate_store_errors(), self.session_factory() as session:
            statement = (
                select(Budget)
                .where(Budget.user_id == user_id)
                .order_by(Budget.created_at.desc())  # type: ignore[attr-defined]
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, budget: Budget, *, user_id: str) -> Budget:
        """Insert a new budget; a second row for the same period violates the constraint."""
        with translate_store_errors(), self.session_factory() as session:
            budget.user_id = user_id
            session.add(budget)
            session.commit()
            session.refresh(budget)
            session.expunge(budget)
            return budget

    def update(self, budget_id: str, fields: Mapping[str, Any], *, user_id: str) -> Budget:
        """Apply a partial update to an owned budget."""
        with translate_store_errors(), self.session_factory() as session:
            budget = self._owned(session, budget_id, user_id)
            if budget is None:
                raise NotFoundError(f"Budget {budget_id} not found")
            apply_fields(budget, fields, UPDATABLE_FIELDS)
            session.add(budget)
            session.commit()
            session.refresh(budget)
            session.expunge(budget)
            return budget

    def delete(self, budget_id: str, *, user_id: str) -> None:
        """Delete a budget by ID."""
        with translate_store_errors(), self.session_factory() as session:
            budget = self._owned(session, budget_id, user_id)
            if budget is None:
                raise NotFoundError(f"Budget {budget_id} not found")
            session.delete(budget)
            session.commit()

    def upsert_for_period(self, month: str, year: int, amount: float, *, user_id: str) -> Budget:
        """Insert the period's budget or overwrite its amount, in one statement.

        Relies on the (user_id, month, year) unique constraint, so two
        concurrent calls for the same period can never produce two rows.
        """
        with translate_store_errors(), self.session_factory() as session:
            dialect = session.get_bind().dialect.name
            insert = _UPSERT_INSERTS.get(dialect)
            if insert is None:
                raise StoreUnavailableError(f"Atomic budget upsert is not supported on {dialect}")

            statement = insert(Budget.__table__).values(
                id=new_id(),
                user_id=user_id,
                amount=amount,
                month=month,
                year=year,
                created_at=utcnow(),
            )
            statement = statement.on_conflict_do_update(
                index_elements=list(PERIOD_COLUMNS),
                set_={"amount": statement.excluded.amount},
            )
            session.connection().execute(statement)
            session.commit()

            budget = self._period(session, month, year, user_id)
            if budget is None:  # pragma: no cover - row was just written
                raise NotFoundError(f"Budget for {month} {year} not found after upsert")
            session.refresh(budget)
            session.expunge(budget)
            return budget
