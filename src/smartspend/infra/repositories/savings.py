"""SQLModel implementation of SavingsGoal repository."""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

from sqlmodel import Session, select

from ...errors import NotFoundError
from ...models.savings import SavingsGoal
from ..database import translate_store_errors
from ._fields import apply_fields

UPDATABLE_FIELDS = frozenset({"title", "amount", "target"})


class SQLModelSavingsRepository:
    """SQLModel-based savings goal repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def _owned(self, session: Session, goal_id: str, user_id: str) -> Optional[SavingsGoal]:
        return session.exec(
            select(SavingsGoal).where(SavingsGoal.id == goal_id, SavingsGoal.user_id == user_id)
        ).first()

    def get_by_id(self, goal_id: str, *, user_id: str) -> Optional[SavingsGoal]:
        with translate_store_errors(), self.session_factory() as session:
            goal = self._owned(session, goal_id, user_id)
            if goal:
                session.expunge(goal)
            return goal

    def list_all(self, *, user_id: str) -> list[SavingsGoal]:
        with translate_store_errors(), self.session_factory() as session:
            statement = (
                select(SavingsGoal)
                .where(SavingsGoal.user_id == user_id)
                .order_by(SavingsGoal.created_at.desc())  # type: ignore[attr-defined]
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, goal: SavingsGoal, *, user_id: str) -> SavingsGoal:
        with translate_store_errors(), self.session_factory() as session:
            goal.user_id = user_id
            session.add(goal)
            session.commit()
            session.refresh(goal)
            session.expunge(goal)
            return goal

    def update(self, goal_id: str, fields: Mapping[str, Any], *, user_id: str) -> SavingsGoal:
        with translate_store_errors(), self.session_factory() as session:
            goal = self._owned(session, goal_id, user_id)
            if goal is None:
                raise NotFoundError(f"Savings goal {goal_id} not found")
            apply_fields(goal, fields, UPDATABLE_FIELDS)
            session.add(goal)
            session.commit()
            session.refresh(goal)
            session.expunge(goal)
            return goal

    def delete(self, goal_id: str, *, user_id: str) -> None:
        with translate_store_errors(), self.session_factory() as session:
            goal = self._owned(session, goal_id, user_id)
            if goal is None:
                raise NotFoundError(f"Savings goal {goal_id} not found")
            session.delete(goal)
            session.commit()
