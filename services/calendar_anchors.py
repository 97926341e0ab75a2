"""
Calendar anchors: month boundaries, month distance and nth day-of-week.
"""

from __future__ import annotations

import calendar
from datetime import date, timedelta

from models.domain import DayOfWeek, InvalidArgument
from services.weekdays import as_date


def nth_day_of_week(value: date, n: int, day_of_week: DayOfWeek | int) -> date:
    """
    Find the n-th `day_of_week` on or after `value`.

    n=1 is the same day (if it already matches) or the next occurrence;
    each further n adds one week. Pass the first of a month to get e.g. the
    4th Thursday of November.
    """
    if n < 1:
        raise InvalidArgument(f"n is 1-based, got {n}")
    d = as_date(value)
    diff = (int(day_of_week) - d.weekday()) % 7
    return d + timedelta(days=diff + (n - 1) * 7)


def start_of_month(value: date) -> date:
    return date(value.year, value.month, 1)


def end_of_month(value: date) -> date:
    _, days_in_month = calendar.monthrange(value.year, value.month)
    return date(value.year, value.month, days_in_month)


def month_diff(d1: date, d2: date) -> int:
    """Whole calendar months from d1 to d2, ignoring the day of month. Negative if d2 < d1."""
    return (d2.year - d1.year) * 12 + (d2.month - d1.month)
