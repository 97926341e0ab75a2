"""
Core domain types for the business-day calendar library.

Plain value types shared by the arithmetic services. Every value is
transient and constructed per call; nothing here holds state.
"""

from __future__ import annotations

from datetime import date
from enum import IntEnum
from typing import Awaitable, Callable, Union


# ── Errors ────────────────────────────────────────────────────────────────────

class InvalidArgument(ValueError):
    """A caller broke an argument contract (e.g. a negative day count)."""


# ── Enums ─────────────────────────────────────────────────────────────────────

class DayOfWeek(IntEnum):
    """Day of week numbered like date.weekday(): Monday=0 … Sunday=6."""
    MONDAY    = 0
    TUESDAY   = 1
    WEDNESDAY = 2
    THURSDAY  = 3
    FRIDAY    = 4
    SATURDAY  = 5
    SUNDAY    = 6

    @classmethod
    def parse(cls, value: str | int) -> "DayOfWeek":
        """Accept an enum value, an int 0-6 (or its digit string), or a (case-insensitive) name / 3-letter prefix."""
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError as exc:
                raise InvalidArgument(f"Unknown day of week: {value!r}") from exc
        text = value.strip().upper()
        if text.isdigit():
            return cls.parse(int(text))
        for member in cls:
            if member.name == text or member.name[:3] == text:
                return member
        raise InvalidArgument(f"Unknown day of week: {value!r}")


WEEKEND: frozenset[int] = frozenset({DayOfWeek.SATURDAY, DayOfWeek.SUNDAY})


# ── Capabilities ──────────────────────────────────────────────────────────────

# "Is this date a business day?"  May answer directly or return an awaitable
# (e.g. when the answer comes from a remote holiday service).
BusinessDayPredicate = Callable[[date], Union[bool, Awaitable[bool]]]
