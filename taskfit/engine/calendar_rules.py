"""Calendar rules for taskFit.

Holidays, business hours and rush hours are plain lookup tables held in a
``CalendarConfig``. The predicates on ``CalendarRules`` only read those tables,
so a different year or region is a different config, not different code.
"""

import re
from dataclasses import dataclass, field
from datetime import date, time
from enum import Enum
from typing import Dict, FrozenSet, Mapping, Optional, Tuple

from taskfit.models.task import Task, TaskCategory


class VenueClass(str, Enum):
    """Which business-hours table applies to a task's venue."""
    GOVERNMENT = "government"
    BANK = "bank"
    GENERAL = "general"


@dataclass(frozen=True)
class VenueHours:
    """Opening window for a venue class: open on ``weekdays`` from ``opens`` until ``closes``."""
    weekdays: FrozenSet[int]  # date.weekday(): Monday=0 .. Sunday=6
    opens: time
    closes: time


WEEKDAYS = frozenset({0, 1, 2, 3, 4})
WEEKDAYS_AND_SATURDAY = frozenset({0, 1, 2, 3, 4, 5})

DEFAULT_BUSINESS_HOURS: Dict[VenueClass, VenueHours] = {
    VenueClass.GOVERNMENT: VenueHours(WEEKDAYS, time(8, 0), time(17, 0)),
    VenueClass.BANK: VenueHours(WEEKDAYS, time(9, 0), time(15, 0)),
    VenueClass.GENERAL: VenueHours(WEEKDAYS_AND_SATURDAY, time(8, 0), time(18, 0)),
}

# Manila rush hours, inclusive on both ends
DEFAULT_RUSH_HOURS: Tuple[Tuple[time, time], ...] = (
    (time(7, 0), time(10, 0)),
    (time(17, 0), time(20, 0)),
)

PHILIPPINE_HOLIDAYS: Dict[date, str] = {
    # 2025
    date(2025, 1, 1): "New Year's Day",
    date(2025, 4, 9): "Araw ng Kagitingan",
    date(2025, 4, 17): "Maundy Thursday",
    date(2025, 4, 18): "Good Friday",
    date(2025, 4, 19): "Black Saturday",
    date(2025, 5, 1): "Labor Day",
    date(2025, 6, 12): "Independence Day",
    date(2025, 8, 21): "Ninoy Aquino Day",
    date(2025, 8, 25): "National Heroes Day",
    date(2025, 11, 30): "Bonifacio Day",
    date(2025, 12, 25): "Christmas Day",
    date(2025, 12, 30): "Rizal Day",
    date(2025, 12, 31): "Last Day of the Year",
    # 2026
    date(2026, 1, 1): "New Year's Day",
    date(2026, 2, 17): "Chinese New Year",
    date(2026, 4, 2): "Maundy Thursday",
    date(2026, 4, 3): "Good Friday",
    date(2026, 4, 4): "Black Saturday",
    date(2026, 4, 9): "Araw ng Kagitingan",
    date(2026, 5, 1): "Labor Day",
    date(2026, 6, 12): "Independence Day",
    date(2026, 8, 21): "Ninoy Aquino Day",
    date(2026, 8, 31): "National Heroes Day",
    date(2026, 11, 1): "All Saints' Day",
    date(2026, 11, 30): "Bonifacio Day",
    date(2026, 12, 8): "Feast of the Immaculate Conception",
    date(2026, 12, 24): "Christmas Eve",
    date(2026, 12, 25): "Christmas Day",
    date(2026, 12, 30): "Rizal Day",
    date(2026, 12, 31): "Last Day of the Year",
}

GOVERNMENT_KEYWORDS: Tuple[str, ...] = (
    "SSS", "PhilHealth", "GSIS", "City Hall", "Municipal", "Barangay Hall",
    "LTO", "DFA", "NBI", "Pag-IBIG", "BIR", "PSA",
)

BANK_KEYWORDS: Tuple[str, ...] = (
    "bank", "BDO", "BPI", "Metrobank", "Landbank", "PNB", "RCBC", "UnionBank",
)


def _keyword_pattern(keywords: Tuple[str, ...]) -> "re.Pattern[str]":
    # Word-bounded so short acronyms like BIR do not fire inside "birthday"
    alternatives = "|".join(re.escape(k.lower()) for k in keywords)
    return re.compile(rf"(?<![a-z0-9])(?:{alternatives})(?![a-z0-9])")


@dataclass(frozen=True)
class CalendarConfig:
    """Lookup tables the calendar predicates read from."""
    holidays: Mapping[date, str] = field(default_factory=lambda: dict(PHILIPPINE_HOLIDAYS))
    business_hours: Mapping[VenueClass, VenueHours] = field(default_factory=lambda: dict(DEFAULT_BUSINESS_HOURS))
    rush_hours: Tuple[Tuple[time, time], ...] = DEFAULT_RUSH_HOURS
    government_keywords: Tuple[str, ...] = GOVERNMENT_KEYWORDS
    bank_keywords: Tuple[str, ...] = BANK_KEYWORDS


class CalendarRules:
    """Pure predicates over a ``CalendarConfig``."""

    def __init__(self, config: Optional[CalendarConfig] = None):
        self.config = config or CalendarConfig()
        self._government_re = _keyword_pattern(self.config.government_keywords)
        self._bank_re = _keyword_pattern(self.config.bank_keywords)

    def is_public_holiday(self, day: date) -> bool:
        return day in self.config.holidays

    def holiday_name(self, day: date) -> Optional[str]:
        return self.config.holidays.get(day)

    def is_weekend(self, day: date) -> bool:
        return day.weekday() >= 5

    def venue_hours(self, venue_class: VenueClass, day: date) -> Optional[VenueHours]:
        """Opening window for the venue class on that day, or None if it is closed all day."""
        hours = self.config.business_hours.get(VenueClass(venue_class))
        if hours is None or day.weekday() not in hours.weekdays:
            return None
        return hours

    def venue_open(self, venue_class: VenueClass, day: date, at: time) -> bool:
        """Check whether a venue class is open at a given date and time.

        Windows are half-open: a government office closing at 17:00 is closed at 17:00.
        """
        hours = self.venue_hours(venue_class, day)
        if hours is None:
            return False
        return hours.opens <= at < hours.closes

    def closing_time(self, venue_class: VenueClass, day: date) -> Optional[time]:
        hours = self.venue_hours(venue_class, day)
        return hours.closes if hours else None

    def is_rush_hour(self, at: time) -> bool:
        return any(start <= at <= end for start, end in self.config.rush_hours)

    def mentions_government_office(self, text: str) -> bool:
        return bool(self._government_re.search((text or "").lower()))

    def mentions_bank(self, text: str) -> bool:
        return bool(self._bank_re.search((text or "").lower()))

    def venue_class_of(self, task: Task) -> VenueClass:
        """Infer the venue class from the task's title, location and category.

        Government keywords win, then the benefit category (benefit visits happen
        at government offices), then bank keywords. Everything else is general
        business.
        """
        text = f"{task.title} {task.location or ''}"
        if self.mentions_government_office(text):
            return VenueClass.GOVERNMENT
        if task.category == TaskCategory.BENEFIT:
            return VenueClass.GOVERNMENT
        if self.mentions_bank(text):
            return VenueClass.BANK
        return VenueClass.GENERAL
