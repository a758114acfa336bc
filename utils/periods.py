"""
utils/periods.py
----------------
Time units used for totals and averages, and the calendar periods they map to.
"""

from datetime import datetime, timedelta
from enum import Enum

from dateutil.relativedelta import relativedelta

from config import WEEK_START_DAY


class Unit(str, Enum):
    """Aggregation granularity."""
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


# Lengths used when converting elapsed time into units.
# A month is a flat 30 days here, unlike the calendar months used for totals.
UNIT_LENGTHS: dict[Unit, timedelta] = {
    Unit.DAY: timedelta(days=1),
    Unit.WEEK: timedelta(days=7),
    Unit.MONTH: timedelta(days=30),
}

# strftime formats for bucket keys (day/week/month of year + year)
BUCKET_FORMATS: dict[Unit, str] = {
    Unit.DAY: "%j%Y",
    Unit.WEEK: "%W%Y",
    Unit.MONTH: "%m%Y",
}


def to_unit(unit) -> Unit:
    """
    Normalise a unit given as a Unit or a plain string.

    Raises:
        ValueError: If the unit is not day, week or month.
    """
    if isinstance(unit, Unit):
        return unit
    try:
        return Unit(str(unit).lower())
    except ValueError:
        raise ValueError(f"Unknown unit: {unit!r} (expected day, week or month)") from None


def period_bounds(unit, moment: datetime, week_start: int = WEEK_START_DAY) -> tuple[datetime, datetime]:
    """
    Calendar period of ``unit`` containing ``moment``.

    Returns:
        ``(start, end)`` where start is inclusive and end is exclusive.
    """
    unit = to_unit(unit)
    midnight = moment.replace(hour=0, minute=0, second=0, microsecond=0)

    if unit is Unit.DAY:
        start = midnight
        return start, start + relativedelta(days=1)
    if unit is Unit.WEEK:
        start = midnight - relativedelta(days=(moment.weekday() - week_start) % 7)
        return start, start + relativedelta(weeks=1)

    start = midnight + relativedelta(day=1)
    return start, start + relativedelta(months=1)
