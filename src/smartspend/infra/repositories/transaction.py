"""SQLModel implementation of Transaction repository."""

from __future__ import annotations

from datetime import date
from typing import Any, Callable, Mapping, Optional

from sqlmodel import Session, select

from ...errors import NotFoundError
from ...models.transaction import Transaction
from ..database import translate_store_errors
from ._fields import apply_fields

UPDATABLE_FIELDS = frozenset({"amount", "type", "category", "description", "date"})


class SQLModelTransactionRepository:
    """SQLModel-based transaction repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    @staticmethod
    def _newest_first(statement):
        return statement.order_by(
            Transaction.date.desc(), Transaction.created_at.desc()  # type: ignore[attr-defined]
        )

    def _owned(self, session: Session, transaction_id: str, user_id: str) -> Optional[Transaction]:
        return session.exec(
            select(Transaction)
            .where(Transaction.id == transaction_id)
            .where(Transaction.user_id == user_id)
        ).first()

    def get_by_id(self, transaction_id: str, *, user_id: str) -> Optional[Transaction]:
        """Retrieve a transaction by ID."""
        with translate_store_errors(), self.session_factory() as session:
            obj = self._owned(session, transaction_id, user_id)
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self, *, user_id: str) -> list[Transaction]:
        """List the owner's transactions, newest first."""
        with translate_store_errors(), self.session_factory() as session:
            statement = self._newest_first(
                select(Transaction).where(Transaction.user_id == user_id)
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def filter_by_date_range(
        self, start_date: date, end_date: date, *, user_id: str
    ) -> list[Transaction]:
        """Get transactions dated within ``[start_date, end_date]``."""
        with translate_store_errors(), self.session_factory() as session:
            statement = self._newest_first(
                select(Transaction)
                .where(Transaction.user_id == user_id)
                .where(Transaction.date >= start_date)
                .where(Transaction.date <= end_date)
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, transaction: Transaction, *, user_id: str) -> Transaction:
        """Insert a new transaction."""
        with translate_store_errors(), self.session_factory() as session:
            transaction.user_id = user_id
            session.add(transaction)
            session.commit()
            session.refresh(transaction)
            session.expunge(transaction)
            return transaction

    def update(
        self, transaction_id: str, fields: Mapping[str, Any], *, user_id: str
    ) -> Transaction:
        """Apply a partial update to an owned transaction."""
        with translate_store_errors(), self.session_factory() as session:
            transaction = self._owned(session, transaction_id, user_id)
            if transaction is None:
                raise NotFoundError(f"Transaction {transaction_id} not found")
            apply_fields(transaction, fields, UPDATABLE_FIELDS)
            session.add(transaction)
            session.commit()
            session.refresh(transaction)
            session.expunge(transaction)
            return transaction

    def delete(self, transaction_id: str, *, user_id: str) -> None:
        """Delete a transaction by ID."""
        with translate_store_errors(), self.session_factory() as session:
            transaction = self._owned(session, transaction_id, user_id)
            if transaction is None:
                raise NotFoundError(f"Transaction {transaction_id} not found")
            session.delete(transaction)
            session.commit()
