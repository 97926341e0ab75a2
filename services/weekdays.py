"""
Weekday arithmetic: closed-form Monday..Friday offsets and span counts.

No holiday calendar is applied here: Saturday and Sunday are the only
non-weekdays. Use services.business_days when holidays matter.

All arithmetic is O(1): whole weeks are jumped in one step (5 weekdays per
7 calendar days) and only the 0-4 day remainder needs weekend handling.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta

from models.domain import InvalidArgument


def as_date(value: date) -> date:
    """Drop any time-of-day component (datetime is a subclass of date)."""
    if isinstance(value, datetime):
        return value.date()
    return value


def _check_count(n: int) -> None:
    if n < 0:
        raise InvalidArgument(f"count must be non-negative, got {n}")


def is_weekday(value: date) -> bool:
    return value.weekday() < 5


def next_weekday(value: date, n: int = 1) -> date:
    """
    Return the n-th weekday after `value`.

    n=0 normalises: a weekday is returned unchanged, Saturday and Sunday
    both resolve to the following Monday. For n>0 a weekend start counts
    from the preceding Friday, so Saturday+1 and Sunday+1 are also Monday.
    """
    _check_count(n)
    d = as_date(value)
    dow = d.isoweekday()  # Mon=1 … Sun=7

    if n == 0:
        if dow == 6:
            return d + timedelta(days=2)
        if dow == 7:
            return d + timedelta(days=1)
        return d

    if dow == 6:
        d -= timedelta(days=1)
    elif dow == 7:
        d -= timedelta(days=2)

    weeks, remaining = divmod(n, 5)
    d += timedelta(days=7 * weeks)
    if d.isoweekday() + remaining > 5:
        remaining += 2
    return d + timedelta(days=remaining)


def previous_weekday(value: date, n: int = 1) -> date:
    """
    Return the n-th weekday before `value`.

    Mirror of next_weekday: n=0 moves Saturday and Sunday back to Friday;
    for n>0 a weekend start counts from the following Monday.
    """
    _check_count(n)
    d = as_date(value)
    dow = d.isoweekday()

    if n == 0:
        if dow == 6:
            return d - timedelta(days=1)
        if dow == 7:
            return d - timedelta(days=2)
        return d

    if dow == 6:
        d += timedelta(days=2)
    elif dow == 7:
        d += timedelta(days=1)

    weeks, remaining = divmod(n, 5)
    d -= timedelta(days=7 * weeks)
    if d.isoweekday() - remaining < 1:
        remaining += 2
    return d - timedelta(days=remaining)


def count_weekdays(d1: date, d2: date) -> int:
    """
    Count weekdays in the inclusive range between d1 and d2 (either order).

    Examples:
    - Thu 2023-06-01 .. Thu 2023-06-01 -> 1
    - Sat 2023-06-03 .. Sun 2023-06-04 -> 0
    - Mon 2023-06-05 .. Mon 2023-06-12 -> 6
    """
    start, end = sorted((as_date(d1), as_date(d2)))
    total_days = (end - start).days + 1
    complete_weeks, remaining_days = divmod(total_days, 7)

    weekdays = complete_weeks * 5
    for i in range(remaining_days):
        if is_weekday(start + timedelta(days=i)):
            weekdays += 1
    return weekdays
