"""Budget repository protocol."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from ...models.budget import Budget


class BudgetRepository(Protocol):
    """Repository for managing monthly budgets."""

    def get_by_id(self, budget_id: str, *, user_id: str) -> Optional[Budget]:
        """Retrieve a budget by ID."""
        ...

    def get_for_period(self, month: str, year: int, *, user_id: str) -> Optional[Budget]:
        """Get the budget for a (month, year) period."""
        ...

    def list_all(self, *, user_id: str) -> list[Budget]:
        """List budgets, newest first."""
        ...

    def create(self, budget: Budget, *, user_id: str) -> Budget:
        """Insert a new budget."""
        ...

    def update(self, budget_id: str, fields: Mapping[str, Any], *, user_id: str) -> Budget:
        """Apply a partial update and return the stored row."""
        ...

    def delete(self, budget_id: str, *, user_id: str) -> None:
        """Delete a budget by ID."""
        ...

    def upsert_for_period(self, month: str, year: int, amount: float, *, user_id: str) -> Budget:
        """Insert or overwrite the amount of the budget for a period in one statement."""
        ...
