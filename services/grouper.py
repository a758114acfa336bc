"""
services/grouper.py
-------------------
Splits lists of expenses into display buckets: relative-date labels
("Today", "Last Week", ...) or per-unit keys used for averaging.
"""

from datetime import date, datetime
from typing import Callable, Hashable, Iterable, TypeVar

from models.expense import Expense
from utils.periods import BUCKET_FORMATS, to_unit

K = TypeVar("K", bound=Hashable)

# Display order, newest first. Each entry is (last day-difference, label).
_RELATIVE_DATE_RANGES: list[tuple[int, str]] = [
    (0, "Today"),
    (1, "Yesterday"),
    (6, "Last Week"),
    (13, "Two Weeks Ago"),
    (20, "Three Weeks Ago"),
    (29, "Four Weeks Ago"),
    (59, "Last Month"),
    (89, "Two Months Ago"),
    (119, "Three Months Ago"),
    (139, "Four Months Ago"),
    (364, "This Year"),
    (729, "Last Year"),
    (1094, "Two Years Ago"),
]
SEVERAL_YEARS_AGO = "Several Years Ago"

RELATIVE_DATE_LABELS: tuple[str, ...] = tuple(
    label for _, label in _RELATIVE_DATE_RANGES
) + (SEVERAL_YEARS_AGO,)


def group_by(items: Iterable, key: Callable[..., K]) -> dict[K, list]:
    """
    Group items by a derived key.

    Keys keep the order they are first seen in and items keep their input
    order inside each group.
    """
    groups: dict[K, list] = {}
    for item in items:
        groups.setdefault(key(item), []).append(item)
    return groups


def to_local(moment: datetime, reference) -> datetime:
    """
    Convert ``moment`` to the timezone of ``reference`` when both are aware.

    Mixing a naive ``reference`` with aware timestamps is not supported:
    the period comparisons in the aggregator raise TypeError.
    """
    ref_tz = getattr(reference, "tzinfo", None)
    if ref_tz is not None and moment.tzinfo is not None:
        return moment.astimezone(ref_tz)
    return moment


def bucket_key(created_at: datetime, unit) -> str:
    """Key shared by all timestamps in the same day, week or month of a year."""
    return created_at.strftime(BUCKET_FORMATS[to_unit(unit)])


def relative_date(created_at: datetime, today) -> str:
    """
    Human-relative label for the calendar day of ``created_at``.

    Args:
        created_at: When the expense was recorded.
        today: Evaluation date, or a datetime whose date is used.
    """
    if isinstance(today, datetime):
        created_at = to_local(created_at, today)
        today = today.date()
    days = (today - created_at.date()).days

    if days < 0:
        return SEVERAL_YEARS_AGO
    for last_day, label in _RELATIVE_DATE_RANGES:
        if days <= last_day:
            return label
    return SEVERAL_YEARS_AGO


def group_by_relative_date(expenses: Iterable[Expense], today: date | datetime) -> dict[str, list[Expense]]:
    """Group expenses under their relative-date label."""
    return group_by(expenses, lambda e: relative_date(e.created_at, today))


def search_grouped_by_relative_date(
    query: str, expenses: Iterable[Expense], today: date | datetime
) -> dict[str, list[Expense]]:
    """Keep expenses whose item contains ``query`` (case-sensitive), then group them."""
    matches = [e for e in expenses if query in (e.item or "")]
    return group_by_relative_date(matches, today)
