"""Shared binding/validation plumbing for input forms."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime
from typing import Any, ClassVar, Optional

from ..errors import ValidationError


class BaseForm:
    """Binds raw mapping data as strings, then validates into typed attributes."""

    FIELDS: ClassVar[tuple[str, ...]] = ()

    def __init__(self) -> None:
        self.errors: dict[str, list[str]] = {}
        self.raw_data: dict[str, str] = {}

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]):
        """Create a form populated from request-style data."""

        form = cls()
        form.load(data)
        return form

    def load(self, data: Mapping[str, Any]) -> None:
        self.raw_data = {}
        for key in self.FIELDS:
            value = data.get(key)
            if value is None:
                value_str = ""
            elif isinstance(value, str):
                value_str = value
            elif isinstance(value, datetime):
                value_str = value.date().isoformat()
            elif isinstance(value, date):
                value_str = value.isoformat()
            elif hasattr(value, "value") and isinstance(value.value, str):
                value_str = value.value  # enum members
            else:
                value_str = str(value)
            self.raw_data[key] = value_str

    def validate(self) -> bool:  # pragma: no cover - interface
        raise NotImplementedError

    def ensure_valid(self) -> None:
        """Validate and raise ``ValidationError`` when anything is wrong."""

        if not self.validate():
            raise ValidationError(self.errors)

    def _add_error(self, field: str, message: str) -> None:
        self.errors.setdefault(field, []).append(message)

    def _raw(self, field: str) -> str:
        return self.raw_data.get(field, "").strip()

    def _parse_amount(
        self, field: str, *, label: str, required: bool = True
    ) -> Optional[float]:
        """Parse a money value. Zero is accepted; negative or non-finite input is not."""

        raw = self._raw(field)
        if not raw:
            if required:
                self._add_error(field, f"{label} is required.")
            return None
        try:
            parsed = float(raw)
        except (TypeError, ValueError):
            self._add_error(field, f"Enter a valid number for the {label.lower()}.")
            return None
        if parsed != parsed or parsed in (float("inf"), float("-inf")):
            self._add_error(field, f"Enter a valid number for the {label.lower()}.")
            return None
        if parsed < 0:
            self._add_error(field, f"{label} cannot be negative.")
            return None
        return parsed
