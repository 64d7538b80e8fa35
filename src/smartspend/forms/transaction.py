"""Transaction entry validation."""

from __future__ import annotations

from datetime import date
from typing import Optional

from ..constants.categories import TransactionKind, categories_for, is_valid_category
from ..models.transaction import Transaction
from ._base import BaseForm

MAX_DESCRIPTION_LENGTH = 255


class TransactionForm(BaseForm):
    """Represents transaction input prior to validation."""

    FIELDS = ("amount", "type", "category", "description", "date")

    def __init__(self) -> None:
        super().__init__()
        self.amount: Optional[float] = None
        self.kind: Optional[TransactionKind] = None
        self.category: Optional[str] = None
        self.description: str = ""
        self.date: Optional[date] = None

    def validate(self) -> bool:
        """Validate the bound data and populate typed attributes."""

        self.errors.clear()

        self.amount = self._parse_amount("amount", label="Amount")

        kind_raw = self._raw("type").lower()
        self.kind = None
        if not kind_raw:
            self._add_error("type", "Type is required.")
        else:
            try:
                self.kind = TransactionKind(kind_raw)
            except ValueError:
                self._add_error("type", "Type must be income or expense.")

        category_raw = self._raw("category")
        self.category = None
        if not category_raw:
            self._add_error("category", "Please select a category.")
        elif self.kind is not None:
            if is_valid_category(self.kind, category_raw):
                self.category = category_raw
            else:
                allowed = ", ".join(categories_for(self.kind))
                self._add_error(
                    "category", f"Category must be one of: {allowed}."
                )

        date_raw = self._raw("date")
        self.date = None
        if not date_raw:
            self._add_error("date", "Date is required.")
        else:
            try:
                parsed_date = date.fromisoformat(date_raw)
            except ValueError:
                parsed_date = None
            # only the canonical YYYY-MM-DD spelling
            if parsed_date is None or parsed_date.isoformat() != date_raw:
                self._add_error("date", "Enter a valid date (YYYY-MM-DD).")
            else:
                self.date = parsed_date

        self.description = self._raw("description")
        if len(self.description) > MAX_DESCRIPTION_LENGTH:
            self._add_error(
                "description", f"Description must be {MAX_DESCRIPTION_LENGTH} characters or fewer."
            )

        return not self.errors

    def cleaned_fields(self) -> dict:
        """Validated values keyed by column name."""

        self.ensure_valid()
        return {
            "amount": self.amount,
            "type": self.kind.value,
            "category": self.category,
            "description": self.description,
            "date": self.date,
        }

    def to_record(self, owner_id: str) -> Transaction:
        return Transaction(user_id=owner_id, **self.cleaned_fields())
