"""Monthly budget table."""

from __future__ import annotations

import datetime as dt
from typing import ClassVar, Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from ._ids import new_id, utcnow


class Budget(SQLModel, table=True):
    """Spending limit for one calendar month; unique per (owner, month, year)."""

    __tablename__: ClassVar[str] = "budgets"
    __table_args__ = (
        UniqueConstraint("user_id", "month", "year", name="uq_budgets_user_period"),
    )

    id: Optional[str] = Field(default_factory=new_id, primary_key=True, max_length=32)
    user_id: str = Field(nullable=False, index=True, max_length=64)
    amount: float = Field(nullable=False, ge=0)
    month: str = Field(nullable=False, max_length=16, description="Lowercase month name")
    year: int = Field(nullable=False)
    created_at: dt.datetime = Field(default_factory=utcnow, nullable=False)
