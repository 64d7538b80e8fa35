"""Savings goal repository protocol."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from ...models.savings import SavingsGoal


class SavingsRepository(Protocol):
    """Repository for managing savings goals."""

    def get_by_id(self, goal_id: str, *, user_id: str) -> Optional[SavingsGoal]:
        """Retrieve a goal by ID."""
        ...

    def list_all(self, *, user_id: str) -> list[SavingsGoal]:
        """List goals, newest first."""
        ...

    def create(self, goal: SavingsGoal, *, user_id: str) -> SavingsGoal:
        """Insert a new goal."""
        ...

    def update(self, goal_id: str, fields: Mapping[str, Any], *, user_id: str) -> SavingsGoal:
        """Apply a partial update and return the stored row."""
        ...

    def delete(self, goal_id: str, *, user_id: str) -> None:
        """Delete a goal by ID."""
        ...
