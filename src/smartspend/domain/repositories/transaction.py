"""Transaction repository protocol."""

from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Protocol

from ...models.transaction import Transaction


class TransactionRepository(Protocol):
    """Repository for managing transaction entities of one owner at a time."""

    def get_by_id(self, transaction_id: str, *, user_id: str) -> Optional[Transaction]:
        """Retrieve a transaction by ID."""
        ...

    def list_all(self, *, user_id: str) -> list[Transaction]:
        """List the owner's transactions, newest first."""
        ...

    def filter_by_date_range(
        self, start_date: date, end_date: date, *, user_id: str
    ) -> list[Transaction]:
        """Get transactions dated within an inclusive range, newest first."""
        ...

    def create(self, transaction: Transaction, *, user_id: str) -> Transaction:
        """Insert a new transaction."""
        ...

    def update(
        self, transaction_id: str, fields: Mapping[str, Any], *, user_id: str
    ) -> Transaction:
        """Apply a partial update and return the stored row."""
        ...

    def delete(self, transaction_id: str, *, user_id: str) -> None:
        """Delete a transaction by ID."""
        ...
