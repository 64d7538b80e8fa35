"""Monthly budget validation."""

from __future__ import annotations

from datetime import date
from typing import Optional

from ..domain.periods import MONTH_NAMES, month_name
from ..models.budget import Budget
from ._base import BaseForm


class BudgetForm(BaseForm):
    """Budget input; month and year default to the period containing ``today``."""

    FIELDS = ("amount", "month", "year")

    def __init__(self, today: Optional[date] = None) -> None:
        super().__init__()
        self.today = today or date.today()
        self.amount: Optional[float] = None
        self.month: Optional[str] = None
        self.year: Optional[int] = None

    @classmethod
    def from_mapping(cls, data, today: Optional[date] = None):
        form = cls(today=today)
        form.load(data)
        return form

    def validate(self) -> bool:
        self.errors.clear()

        self.amount = self._parse_amount("amount", label="Budget amount")

        month_raw = self._raw("month").lower()
        self.month = None
        if not month_raw:
            self.month = month_name(self.today)
        elif month_raw in MONTH_NAMES:
            self.month = month_raw
        else:
            self._add_error("month", "Month must be a month name such as 'january'.")

        year_raw = self._raw("year")
        self.year = None
        if not year_raw:
            self.year = self.today.year
        else:
            try:
                parsed_year = int(year_raw)
            except ValueError:
                self._add_error("year", "Year must be a whole number.")
            else:
                if 1900 <= parsed_year <= 9999:
                    self.year = parsed_year
                else:
                    self._add_error("year", "Year must be between 1900 and 9999.")

        return not self.errors

    def to_record(self, owner_id: str) -> Budget:
        self.ensure_valid()
        return Budget(user_id=owner_id, amount=self.amount, month=self.month, year=self.year)
