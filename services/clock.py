"""
Clock and date-provider capabilities.

Code that needs "now" or "today" takes one of these instead of calling
datetime.now() directly, so callers (and tests) can substitute their own.
"""

from __future__ import annotations

from datetime import date, datetime, timezone, tzinfo
from typing import Protocol

from services.tz_convert import resolve_zone


class Clock(Protocol):
    def utc_now(self) -> datetime: ...


class DateProvider(Protocol):
    def today(self) -> date: ...


class SystemClock:
    """Wall clock; always returns an aware UTC datetime."""

    def utc_now(self) -> datetime:
        return datetime.now(timezone.utc)


class SystemDate:
    """Today's date in `zone` (default: settings.default_timezone)."""

    def __init__(self, zone: tzinfo | str | None = None) -> None:
        self.zone = resolve_zone(zone)

    def today(self) -> date:
        return datetime.now(self.zone).date()
