"""
HolidayCalendar: two-layer, in-memory holiday source for the business-day walker.

Layer architecture:
    Layer 2 (Runtime) : add_holiday() / remove_holiday() with audit trail
    Layer 1 (Library) : `holidays` Python library, cached per year

Layer 2 wins over Layer 1 for date collisions.

This is a caller-side convenience: the walker only ever sees the predicate,
e.g.

    cal = HolidayCalendar("GB", subdiv="ENG")
    await next_business_day(d, 2, cal.is_business_day)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Iterable

import holidays as hlib

from config.settings import settings
from models.domain import WEEKEND

logger = logging.getLogger("dates.services.holiday_calendar")


# ── Dataclasses ────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class HolidayInfo:
    date: date
    name: str
    calendar: str       # "US", "GB-ENG", ...
    kind: str           # "public" (library) or caller-chosen for runtime entries
    source_layer: int   # 1 or 2


@dataclass(frozen=True)
class HolidayDecision:
    is_holiday: bool
    info: HolidayInfo | None
    reason: str


# ── Audit entry (mutable, not frozen) ─────────────────────────────────────────

@dataclass
class _AuditEntry:
    action: str          # "add" or "remove"
    d: date
    calendar: str
    name: str | None
    user: str
    timestamp: datetime


# ── HolidayCalendar ────────────────────────────────────────────────────────────

class HolidayCalendar:
    """
    Synchronous holiday lookup for one country (optionally one subdivision).

    Thread-safety: not guaranteed for concurrent add_holiday/remove_holiday.
    """

    def __init__(
        self,
        country: str,
        subdiv: str | None = None,
        *,
        observed: bool = True,
        weekend: Iterable[int] = WEEKEND,
    ) -> None:
        supported = hlib.list_supported_countries()
        if country.upper() not in supported:
            raise ValueError(f"Unknown country: {country!r}")
        if subdiv and subdiv not in supported[country.upper()]:
            raise ValueError(f"Unknown subdivision: {subdiv!r} for {country.upper()}")
        self.country = country.upper()
        self.subdiv = subdiv or None
        self.observed = observed
        self.weekend = frozenset(int(d) for d in weekend)
        self.code = self.country if self.subdiv is None else f"{self.country}-{self.subdiv}"

        # Layer 1 cache: year -> {date: name}
        self._l1_cache: dict[int, dict[date, str]] = {}

        # Layer 2: runtime overrides
        self._l2_add: dict[date, HolidayInfo] = {}
        self._l2_remove: set[date] = set()

        self._audit: list[_AuditEntry] = []

    @classmethod
    def from_settings(cls) -> "HolidayCalendar":
        return cls(
            settings.holiday_country,
            settings.holiday_subdiv,
            observed=settings.holiday_observed,
        )

    # ── Layer 1 ───────────────────────────────────────────────────────────────

    def _layer1(self, d: date) -> HolidayInfo | None:
        if d.year not in self._l1_cache:
            self._l1_cache[d.year] = dict(hlib.country_holidays(
                self.country,
                subdiv=self.subdiv,
                years=d.year,
                observed=self.observed,
            ))
            logger.debug("loaded %d library holidays for %s %d",
                         len(self._l1_cache[d.year]), self.code, d.year)
        name = self._l1_cache[d.year].get(d)
        if name is None:
            return None
        return HolidayInfo(date=d, name=name, calendar=self.code, kind="public", source_layer=1)

    # ── Core lookup ───────────────────────────────────────────────────────────

    def explain_holiday(self, d: date) -> HolidayDecision:
        if d in self._l2_remove:
            return HolidayDecision(is_holiday=False, info=None, reason="Layer 2 runtime removal")
        if d in self._l2_add:
            return HolidayDecision(is_holiday=True, info=self._l2_add[d], reason="Layer 2 runtime addition")

        l1 = self._layer1(d)
        if l1 is not None:
            return HolidayDecision(is_holiday=True, info=l1, reason="Layer 1 library holiday")

        return HolidayDecision(is_holiday=False, info=None, reason="No holiday found in any layer")

    # ── Public API ────────────────────────────────────────────────────────────

    def is_holiday(self, d: date) -> bool:
        return self.explain_holiday(d).is_holiday

    def is_weekend(self, d: date) -> bool:
        return d.weekday() in self.weekend

    def is_business_day(self, d: date) -> bool:
        """Business-day predicate: not a weekend day and not a holiday."""
        if self.is_weekend(d):
            return False
        return not self.is_holiday(d)

    def upcoming_holidays(self, from_date: date, days: int = 30) -> list[HolidayInfo]:
        """Holidays in [from_date, from_date + days), sorted by date."""
        result: list[HolidayInfo] = []
        current = from_date
        end = from_date + timedelta(days=days)
        while current < end:
            decision = self.explain_holiday(current)
            if decision.is_holiday and decision.info is not None:
                result.append(decision.info)
            current += timedelta(days=1)
        return result

    # ── Layer 2 management ────────────────────────────────────────────────────

    def add_holiday(self, d: date, name: str, kind: str = "special", *, user: str = "system") -> None:
        """Force `d` to be a holiday. Clears any runtime removal for the same date."""
        self._l2_add[d] = HolidayInfo(date=d, name=name, calendar=self.code, kind=kind, source_layer=2)
        self._l2_remove.discard(d)
        self._audit.append(_AuditEntry(
            action="add", d=d, calendar=self.code, name=name,
            user=user, timestamp=datetime.now(timezone.utc),
        ))
        logger.info("Layer 2 add_holiday: %s %s %r (user=%s)", d, self.code, name, user)

    def remove_holiday(self, d: date, *, user: str = "system") -> None:
        """Force `d` to not be a holiday, overriding the library."""
        self._l2_remove.add(d)
        self._l2_add.pop(d, None)
        self._audit.append(_AuditEntry(
            action="remove", d=d, calendar=self.code, name=None,
            user=user, timestamp=datetime.now(timezone.utc),
        ))
        logger.info("Layer 2 remove_holiday: %s %s (user=%s)", d, self.code, user)

    def list_overrides(self) -> list[HolidayInfo]:
        """Runtime additions currently in effect (removals carry no metadata)."""
        return sorted(self._l2_add.values(), key=lambda h: h.date)

    def audit_log(self) -> list[_AuditEntry]:
        return list(self._audit)
