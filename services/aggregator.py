"""
services/aggregator.py
----------------------
Totals and averages over an owner's expense history.

Every function works on a list of expenses ordered newest first, as the
repository returns them. Money math is done with Decimal throughout.
Timestamps and ``now`` must all be timezone-aware.
"""

from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Sequence

from models.expense import Expense
from services.grouper import to_local, bucket_key, group_by
from utils.periods import UNIT_LENGTHS, period_bounds, to_unit

_CENTS = Decimal("0.01")
_ONE = Decimal(1)


def total_for(expenses: Sequence[Expense], unit, now: datetime) -> Decimal:
    """Sum of costs recorded in the current day, week or month."""
    start, end = period_bounds(unit, now)
    return sum(
        (e.cost for e in expenses if start <= to_local(e.created_at, now) < end),
        Decimal(0),
    )


def averages_for(expenses: Sequence[Expense], unit, now: Optional[datetime] = None) -> list[Decimal]:
    """
    Mean cost of each day/week/month bucket, rounded to cents.

    Buckets are returned in the order of the input, so the first element is
    the most recent period. When ``now`` is given, timestamps are bucketed
    in its timezone, as totals and relative dates are.
    """
    unit = to_unit(unit)
    groups = group_by(expenses, lambda e: bucket_key(to_local(e.created_at, now), unit))
    return [
        (sum((e.cost for e in group), Decimal(0)) / len(group)).quantize(_CENTS, rounding=ROUND_HALF_UP)
        for group in groups.values()
    ]


def duration_since(earliest: Optional[Expense], unit, now: datetime) -> Decimal:
    """
    Time since the first expense, in units. Never less than 1.
    """
    if earliest is None:
        return _ONE

    elapsed = Decimal(str((now - earliest.created_at).total_seconds()))
    length = Decimal(str(UNIT_LENGTHS[to_unit(unit)].total_seconds()))
    return max(_ONE, elapsed / length)


def average_for(
    expenses: Sequence[Expense], earliest: Optional[Expense], unit, now: datetime
) -> Decimal:
    """Sum of the bucket averages spread over the whole history."""
    return sum(averages_for(expenses, unit, now), Decimal(0)) / duration_since(earliest, unit, now)


def is_above_average(
    expenses: Sequence[Expense], earliest: Optional[Expense], unit, now: datetime
) -> bool:
    """True when the latest bucket's average beats the overall average."""
    if earliest is None or not expenses:
        return False

    return averages_for(expenses, unit, now)[0] > average_for(expenses, earliest, unit, now)
