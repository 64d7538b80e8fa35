"""Calendar windows used to select transactions for aggregation."""

from __future__ import annotations

from calendar import monthrange
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Iterable, Protocol, TypeVar

MONTH_NAMES = (
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
)


class Period(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


_PERIOD_LABELS = {
    Period.DAILY: "Last 7 Days",
    Period.WEEKLY: "This Week",
    Period.MONTHLY: "This Month",
}

_BUCKET_COUNTS = {
    Period.DAILY: 7,
    Period.WEEKLY: 7,
    Period.MONTHLY: 30,
}


class Dated(Protocol):
    date: date


T = TypeVar("T", bound=Dated)


@dataclass(frozen=True, slots=True)
class DateWindow:
    """Inclusive calendar range ``[start, end]``."""

    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


def parse_period(value: Period | str) -> Period:
    if isinstance(value, Period):
        return value
    try:
        return Period(str(value).strip().lower())
    except ValueError:
        raise ValueError(f"Unknown period: {value!r}") from None


def month_name(day: date) -> str:
    """Lowercase English month name for ``day`` (``"january"`` ...)."""

    return MONTH_NAMES[day.month - 1]


def month_number(name: str) -> int:
    """Inverse of :func:`month_name`; raises ``ValueError`` for unknown names."""

    try:
        return MONTH_NAMES.index(name.strip().lower()) + 1
    except ValueError:
        raise ValueError(f"Unknown month: {name!r}") from None


def period_window(period: Period | str, today: date) -> DateWindow:
    """Return the inclusive window for ``period`` anchored at ``today``.

    daily: the trailing seven days ending today.
    weekly: Monday through Sunday of the current week.
    monthly: first through last day of the current month.
    """

    period = parse_period(period)
    if period is Period.DAILY:
        return DateWindow(today - timedelta(days=6), today)
    if period is Period.WEEKLY:
        monday = today - timedelta(days=today.weekday())
        return DateWindow(monday, monday + timedelta(days=6))
    last_day = monthrange(today.year, today.month)[1]
    return DateWindow(today.replace(day=1), today.replace(day=last_day))


def filter_by_window(transactions: Iterable[T], window: DateWindow) -> list[T]:
    """Keep transactions dated inside ``window``; input order is preserved."""

    return [txn for txn in transactions if window.contains(txn.date)]


def filter_by_period(transactions: Iterable[T], period: Period | str, today: date) -> list[T]:
    return filter_by_window(transactions, period_window(period, today))


def period_label(period: Period | str) -> str:
    return _PERIOD_LABELS[parse_period(period)]


def bucket_count(period: Period | str) -> int:
    """Number of daily buckets charted for ``period``."""

    return _BUCKET_COUNTS[parse_period(period)]
