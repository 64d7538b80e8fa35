"""Partial-update helper shared by the SQLModel repositories."""

from __future__ import annotations

from typing import Any, Mapping

from ...errors import ValidationError


def apply_fields(record: Any, fields: Mapping[str, Any], allowed: frozenset[str]) -> None:
    """Copy ``fields`` onto ``record``; unknown or protected names are rejected."""

    unknown = sorted(set(fields) - allowed)
    if unknown:
        raise ValidationError({name: ["Field cannot be updated."] for name in unknown})
    for name, value in fields.items():
        setattr(record, name, value)
