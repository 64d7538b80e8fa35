"""Savings goal table."""

from __future__ import annotations

import datetime as dt
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel

from ._ids import new_id, utcnow


class SavingsGoal(SQLModel, table=True):
    """A named savings target and the amount put aside so far."""

    __tablename__: ClassVar[str] = "savings"

    id: Optional[str] = Field(default_factory=new_id, primary_key=True, max_length=32)
    user_id: str = Field(nullable=False, index=True, max_length=64)
    title: str = Field(nullable=False, max_length=128)
    amount: float = Field(default=0.0, nullable=False, ge=0, description="Saved so far")
    target: float = Field(nullable=False, ge=0)
    created_at: dt.datetime = Field(default_factory=utcnow, nullable=False)
