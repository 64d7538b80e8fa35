"""Savings goal validation."""

from __future__ import annotations

from typing import Optional

from ..models.savings import SavingsGoal
from ._base import BaseForm

MAX_TITLE_LENGTH = 128


class SavingsForm(BaseForm):
    FIELDS = ("title", "amount", "target")

    def __init__(self) -> None:
        super().__init__()
        self.title: str = ""
        self.amount: Optional[float] = None
        self.target: Optional[float] = None

    def validate(self) -> bool:
        self.errors.clear()

        self.title = self._raw("title")
        if not self.title:
            self._add_error("title", "Title is required.")
        elif len(self.title) > MAX_TITLE_LENGTH:
            self._add_error("title", f"Title must be {MAX_TITLE_LENGTH} characters or fewer.")

        self.amount = self._parse_amount("amount", label="Saved amount")
        self.target = self._parse_amount("target", label="Target")

        return not self.errors

    def cleaned_fields(self) -> dict:
        self.ensure_valid()
        return {"title": self.title, "amount": self.amount, "target": self.target}

    def to_record(self, owner_id: str) -> SavingsGoal:
        return SavingsGoal(user_id=owner_id, **self.cleaned_fields())
