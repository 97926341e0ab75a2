"""
Business-day walker: predicate-driven next/previous business day.

Unlike services.weekdays this walks one calendar day at a time and asks a
caller-supplied predicate about every candidate, so holidays (or any other
closure rule) can be honoured. The predicate may be a plain function or a
coroutine function; awaitable results are awaited before the next candidate
is tried. Candidates are always checked strictly in order.

Termination: if the predicate never answers True the walk never ends.
Bound it from outside, e.g. `await asyncio.wait_for(next_business_day(...), 5)`,
with a predicate that actually suspends (a purely synchronous predicate
gives the event loop no chance to cancel).
"""

from __future__ import annotations

import inspect
import logging
from datetime import date, timedelta

from models.domain import BusinessDayPredicate, InvalidArgument
from services.weekdays import as_date, is_weekday

logger = logging.getLogger("dates.services.business_days")


async def _satisfies(predicate: BusinessDayPredicate, candidate: date) -> bool:
    result = predicate(candidate)
    if inspect.isawaitable(result):
        result = await result
    return bool(result)


async def _walk(
    start: date,
    n: int,
    step: timedelta,
    predicate: BusinessDayPredicate,
) -> date:
    if n < 0:
        raise InvalidArgument(f"count must be non-negative, got {n}")

    current = as_date(start)
    skipped = 0
    for _ in range(n):
        current += step
        while not await _satisfies(predicate, current):
            current += step
            skipped += 1

    # Runs even when n == 0 so the result always satisfies the predicate.
    while not await _satisfies(predicate, current):
        current += step
        skipped += 1

    logger.debug(
        "business day walk: start=%s n=%d step=%d result=%s skipped=%d",
        start, n, step.days, current, skipped,
    )
    return current


async def next_business_day(
    value: date,
    n: int = 1,
    is_business_day: BusinessDayPredicate = is_weekday,
) -> date:
    """
    Return the n-th business day after `value`.

    n=0 is not the identity: `value` is returned only if it is itself a
    business day, otherwise the first business day after it.
    """
    return await _walk(value, n, timedelta(days=1), is_business_day)


async def previous_business_day(
    value: date,
    n: int = 1,
    is_business_day: BusinessDayPredicate = is_weekday,
) -> date:
    """
    Return the n-th business day before `value`.

    n=0 returns `value` if it is a business day, otherwise the closest
    business day before it.
    """
    return await _walk(value, n, timedelta(days=-1), is_business_day)
