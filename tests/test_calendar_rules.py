"""Tests for calendar rules (holidays, business hours, rush hours, venue classes)."""

import pytest
from datetime import date, time

from taskfit.engine.calendar_rules import CalendarRules, CalendarConfig, VenueClass
from taskfit.models.task import Task, TaskCategory


MONDAY = date(2026, 10, 19)
SATURDAY = date(2026, 10, 24)
SUNDAY = date(2026, 10, 25)


class TestHolidaysAndWeekends:
    """Test is_public_holiday() and is_weekend()."""

    def test_listed_holiday(self, calendar):
        assert calendar.is_public_holiday(date(2026, 12, 25))
        assert calendar.holiday_name(date(2026, 12, 25)) == "Christmas Day"

    def test_ordinary_day_is_not_holiday(self, calendar):
        assert not calendar.is_public_holiday(date(2026, 12, 26))
        assert calendar.holiday_name(date(2026, 12, 26)) is None

    def test_original_2025_holidays_present(self, calendar):
        assert calendar.is_public_holiday(date(2025, 6, 12))
        assert calendar.is_public_holiday(date(2025, 12, 30))

    def test_injected_holiday_table(self):
        """A different year or region is just a different config."""
        rules = CalendarRules(CalendarConfig(holidays={date(2030, 3, 4): "Test Day"}))
        assert rules.is_public_holiday(date(2030, 3, 4))
        assert not rules.is_public_holiday(date(2026, 12, 25))

    def test_weekend(self, calendar):
        assert calendar.is_weekend(SATURDAY)
        assert calendar.is_weekend(SUNDAY)
        assert not calendar.is_weekend(MONDAY)


class TestVenueOpen:
    """Test venue_open() and closing_time() against the business-hours table."""

    @pytest.mark.parametrize("at,expected", [
        (time(7, 59), False),
        (time(8, 0), True),
        (time(16, 59), True),
        (time(17, 0), False),
    ])
    def test_government_weekday_window(self, calendar, at, expected):
        assert calendar.venue_open(VenueClass.GOVERNMENT, MONDAY, at) is expected

    def test_government_closed_on_saturday(self, calendar):
        assert not calendar.venue_open(VenueClass.GOVERNMENT, SATURDAY, time(10, 0))

    def test_bank_window(self, calendar):
        assert calendar.venue_open(VenueClass.BANK, MONDAY, time(9, 0))
        assert not calendar.venue_open(VenueClass.BANK, MONDAY, time(15, 0))
        assert not calendar.venue_open(VenueClass.BANK, SATURDAY, time(10, 0))

    def test_general_business_open_saturday_closed_sunday(self, calendar):
        assert calendar.venue_open(VenueClass.GENERAL, SATURDAY, time(10, 0))
        assert not calendar.venue_open(VenueClass.GENERAL, SUNDAY, time(10, 0))
        assert not calendar.venue_open(VenueClass.GENERAL, MONDAY, time(18, 0))

    def test_closing_time(self, calendar):
        assert calendar.closing_time(VenueClass.GOVERNMENT, MONDAY) == time(17, 0)
        assert calendar.closing_time(VenueClass.BANK, MONDAY) == time(15, 0)
        assert calendar.closing_time(VenueClass.GOVERNMENT, SATURDAY) is None

    def test_accepts_string_venue_class(self, calendar):
        assert calendar.venue_open("bank", MONDAY, time(10, 0))


class TestRushHour:
    """Test is_rush_hour() (inclusive windows 07:00-10:00 and 17:00-20:00)."""

    @pytest.mark.parametrize("at,expected", [
        (time(6, 59), False),
        (time(7, 0), True),
        (time(10, 0), True),
        (time(10, 1), False),
        (time(13, 0), False),
        (time(17, 0), True),
        (time(20, 0), True),
        (time(20, 30), False),
    ])
    def test_rush_hour_windows(self, calendar, at, expected):
        assert calendar.is_rush_hour(at) is expected


class TestVenueClassOf:
    """Test venue_class_of() keyword and category inference."""

    def _task(self, sample_task_base, **overrides):
        return Task(**{**sample_task_base, **overrides})

    def test_government_keyword_in_location(self, calendar, sample_task_base):
        task = self._task(sample_task_base, title="Renew passport", location="DFA Aseana")
        assert calendar.venue_class_of(task) == VenueClass.GOVERNMENT

    def test_keyword_match_is_case_insensitive(self, calendar, sample_task_base):
        task = self._task(sample_task_base, title="update records", location="sss branch, cubao")
        assert calendar.venue_class_of(task) == VenueClass.GOVERNMENT

    def test_government_keyword_in_title(self, calendar, sample_task_base):
        task = self._task(sample_task_base, title="Pay PhilHealth contribution", category=TaskCategory.BILL)
        assert calendar.venue_class_of(task) == VenueClass.GOVERNMENT

    def test_benefit_category_implies_government(self, calendar, sample_task_base):
        task = self._task(sample_task_base, title="Claim senior allowance", category=TaskCategory.BENEFIT)
        assert calendar.venue_class_of(task) == VenueClass.GOVERNMENT

    def test_bank_keyword(self, calendar, sample_task_base):
        task = self._task(sample_task_base, title="Deposit check", location="BDO Cubao", category=TaskCategory.BILL)
        assert calendar.venue_class_of(task) == VenueClass.BANK

    def test_defaults_to_general(self, calendar, sample_task_base):
        task = self._task(sample_task_base, title="Pay Meralco bill", category=TaskCategory.BILL, location="SM North EDSA")
        assert calendar.venue_class_of(task) == VenueClass.GENERAL

    def test_acronym_inside_word_does_not_match(self, calendar, sample_task_base):
        """'BIR' must not fire inside 'birthday'."""
        task = self._task(sample_task_base, title="Buy birthday cake", category=TaskCategory.REMINDER)
        assert calendar.venue_class_of(task) == VenueClass.GENERAL
