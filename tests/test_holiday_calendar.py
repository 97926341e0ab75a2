"""
Tests for HolidayCalendar: two-layer holiday lookup.

Categories:
    A  Construction
    B  Layer 1: holidays library
    C  Layer 2: runtime overrides
    D  Business day logic
    E  upcoming_holidays
"""

from __future__ import annotations

from datetime import date

import pytest

from models.domain import DayOfWeek
from services.holiday_calendar import HolidayCalendar, HolidayDecision


# ── Fixtures ───────────────────────────────────────────────────────────────────


@pytest.fixture()
def us() -> HolidayCalendar:
    """Fresh US calendar for each test."""
    return HolidayCalendar("US")


# ═══════════════════════════════════════════════════════════════════════════════
# A. Construction
# ═══════════════════════════════════════════════════════════════════════════════


class TestConstruction:
    def test_unknown_country_raises_valueerror(self) -> None:
        with pytest.raises(ValueError, match="Unknown country"):
            HolidayCalendar("XX")

    def test_country_code_is_normalised(self) -> None:
        assert HolidayCalendar("us").code == "US"

    def test_code_includes_subdivision(self) -> None:
        assert HolidayCalendar("GB", subdiv="ENG").code == "GB-ENG"

    def test_unknown_subdivision_raises_valueerror(self) -> None:
        with pytest.raises(ValueError, match="Unknown subdivision"):
            HolidayCalendar("US", subdiv="ZZ")

    def test_known_subdivision_is_accepted(self) -> None:
        assert HolidayCalendar("US", subdiv="CA").code == "US-CA"

    def test_from_settings_defaults_to_us(self) -> None:
        cal = HolidayCalendar.from_settings()
        assert cal.code == "US"
        assert cal.observed is True


# ═══════════════════════════════════════════════════════════════════════════════
# B. Layer 1: holidays library
# ═══════════════════════════════════════════════════════════════════════════════


class TestLayer1Library:
    def test_us_independence_day(self, us: HolidayCalendar) -> None:
        assert us.is_holiday(date(2023, 7, 4)) is True

    def test_us_thanksgiving(self, us: HolidayCalendar) -> None:
        # 4th Thursday of November 2023 = Nov 23
        assert us.is_holiday(date(2023, 11, 23)) is True

    def test_us_normal_weekday_is_not_holiday(self, us: HolidayCalendar) -> None:
        assert us.is_holiday(date(2023, 7, 5)) is False

    def test_observed_new_year(self, us: HolidayCalendar) -> None:
        # 2023-01-01 is a Sunday, observed Monday 2023-01-02
        assert us.is_holiday(date(2023, 1, 2)) is True

    def test_observed_disabled(self) -> None:
        assert HolidayCalendar("US", observed=False).is_holiday(date(2023, 1, 2)) is False

    def test_uk_england_easter_monday(self) -> None:
        assert HolidayCalendar("GB", subdiv="ENG").is_holiday(date(2023, 4, 10)) is True

    def test_explain_layer1(self, us: HolidayCalendar) -> None:
        decision = us.explain_holiday(date(2023, 7, 4))
        assert isinstance(decision, HolidayDecision)
        assert decision.is_holiday is True
        assert decision.info is not None
        assert decision.info.source_layer == 1
        assert decision.info.name == "Independence Day"
        assert decision.info.calendar == "US"
        assert decision.reason == "Layer 1 library holiday"

    def test_explain_no_holiday(self, us: HolidayCalendar) -> None:
        decision = us.explain_holiday(date(2023, 7, 5))
        assert decision.is_holiday is False
        assert decision.info is None


# ═══════════════════════════════════════════════════════════════════════════════
# C. Layer 2: runtime overrides
# ═══════════════════════════════════════════════════════════════════════════════


class TestLayer2Overrides:
    def test_add_holiday(self, us: HolidayCalendar) -> None:
        us.add_holiday(date(2023, 7, 5), "Office closure", user="ops")
        decision = us.explain_holiday(date(2023, 7, 5))
        assert decision.is_holiday is True
        assert decision.info is not None
        assert decision.info.source_layer == 2
        assert decision.info.kind == "special"

    def test_remove_library_holiday(self, us: HolidayCalendar) -> None:
        us.remove_holiday(date(2023, 7, 4), user="ops")
        decision = us.explain_holiday(date(2023, 7, 4))
        assert decision.is_holiday is False
        assert decision.reason == "Layer 2 runtime removal"

    def test_add_after_remove_wins(self, us: HolidayCalendar) -> None:
        us.remove_holiday(date(2023, 7, 4))
        us.add_holiday(date(2023, 7, 4), "Reinstated")
        assert us.is_holiday(date(2023, 7, 4)) is True

    def test_remove_after_add_wins(self, us: HolidayCalendar) -> None:
        us.add_holiday(date(2023, 7, 5), "Office closure")
        us.remove_holiday(date(2023, 7, 5))
        assert us.is_holiday(date(2023, 7, 5)) is False
        assert us.list_overrides() == []

    def test_list_overrides_sorted(self, us: HolidayCalendar) -> None:
        us.add_holiday(date(2023, 8, 1), "B")
        us.add_holiday(date(2023, 7, 1), "A")
        assert [h.name for h in us.list_overrides()] == ["A", "B"]

    def test_audit_log_records_actions(self, us: HolidayCalendar) -> None:
        us.add_holiday(date(2023, 7, 5), "Office closure", user="alice")
        us.remove_holiday(date(2023, 7, 4), user="bob")
        entries = us.audit_log()
        assert [(e.action, e.user) for e in entries] == [("add", "alice"), ("remove", "bob")]
        assert entries[1].name is None

    def test_audit_log_is_a_copy(self, us: HolidayCalendar) -> None:
        us.add_holiday(date(2023, 7, 5), "Office closure")
        us.audit_log().clear()
        assert len(us.audit_log()) == 1


# ═══════════════════════════════════════════════════════════════════════════════
# D. Business day logic
# ═══════════════════════════════════════════════════════════════════════════════


class TestBusinessDay:
    def test_weekend_is_not_business_day(self, us: HolidayCalendar) -> None:
        assert us.is_business_day(date(2023, 6, 3)) is False
        assert us.is_business_day(date(2023, 6, 4)) is False

    def test_holiday_is_not_business_day(self, us: HolidayCalendar) -> None:
        assert us.is_business_day(date(2023, 7, 4)) is False

    def test_plain_weekday_is_business_day(self, us: HolidayCalendar) -> None:
        assert us.is_business_day(date(2023, 7, 5)) is True

    def test_custom_weekend(self) -> None:
        cal = HolidayCalendar("US", weekend=(DayOfWeek.FRIDAY, DayOfWeek.SATURDAY))
        assert cal.is_business_day(date(2023, 6, 4)) is True   # Sunday
        assert cal.is_business_day(date(2023, 6, 2)) is False  # Friday


# ═══════════════════════════════════════════════════════════════════════════════
# E. upcoming_holidays
# ═══════════════════════════════════════════════════════════════════════════════


class TestUpcomingHolidays:
    def test_window_is_half_open(self, us: HolidayCalendar) -> None:
        assert us.upcoming_holidays(date(2023, 7, 1), 3) == []
        result = us.upcoming_holidays(date(2023, 7, 1), 4)
        assert [h.date for h in result] == [date(2023, 7, 4)]

    def test_includes_runtime_additions(self, us: HolidayCalendar) -> None:
        us.add_holiday(date(2023, 7, 6), "Office closure")
        result = us.upcoming_holidays(date(2023, 7, 1), 7)
        assert [h.date for h in result] == [date(2023, 7, 4), date(2023, 7, 6)]
