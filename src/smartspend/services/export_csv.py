"""CSV export helpers for SmartSpend."""

from __future__ import annotations

import csv
from datetime import date, datetime
from pathlib import Path
from typing import Iterable

from ..models.transaction import Transaction

HEADERS = ["id", "date", "type", "category", "amount", "description", "created_at"]


def _serialize_value(value):
    if value is None:
        return ""
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def export_transactions_csv(*, transactions: Iterable[Transaction], output_path: Path) -> Path:
    """Write transactions to CSV at ``output_path`` and return the path.

    Columns are fixed: id, date, type, category, amount, description, created_at.
    """

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=HEADERS, quoting=csv.QUOTE_MINIMAL)
        writer.writeheader()
        for tx in transactions:
            writer.writerow({name: _serialize_value(getattr(tx, name, None)) for name in HEADERS})

    return output_path
