"""SQLModel definition for income and expense transactions."""

from __future__ import annotations

import datetime as dt
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel

from ._ids import new_id, utcnow


class Transaction(SQLModel, table=True):
    """A single income or expense entry owned by one user."""

    __tablename__: ClassVar[str] = "transactions"

    id: Optional[str] = Field(default_factory=new_id, primary_key=True, max_length=32)
    user_id: str = Field(nullable=False, index=True, max_length=64)
    amount: float = Field(nullable=False, ge=0, description="Always non-negative; direction is in type")
    type: str = Field(nullable=False, max_length=16, description="income | expense")
    category: str = Field(nullable=False, max_length=64)
    description: str = Field(default="", max_length=255)
    date: dt.date = Field(nullable=False, index=True)
    created_at: dt.datetime = Field(default_factory=utcnow, nullable=False)

    @property
    def is_income(self) -> bool:
        return self.type == "income"

    @property
    def is_expense(self) -> bool:
        return self.type == "expense"
