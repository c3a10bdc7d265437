"""Feasibility validation for taskFit.

Checks whether a task's date, time and place actually work: government
offices on weekends and holidays, business hours, travel time adjusted for
the user's mobility, rush hour, and rain safety for vulnerable users.

Every check runs on every pass so the user sees all problems at once.
Results accumulate in a ``VerdictBuilder``, which only ever revokes
feasibility: once a blocking issue is recorded the verdict stays infeasible.
"""

import logging
import math
from datetime import date, datetime, time, timedelta
from typing import List, Optional

from taskfit.engine.calendar_rules import CalendarRules, VenueClass, VenueHours
from taskfit.models.task import Task, WeatherSnapshot, TrafficSnapshot, FeasibilityVerdict
from taskfit.models.user import UserProfile, MobilityLevel
from taskfit.models.constants import (
    BASELINE_TRAVEL_MINUTES,
    SENIOR_AGE,
    SENIOR_TRAVEL_FACTOR,
    MOBILITY_TRAVEL_FACTORS,
    HEAVY_RAIN_CHANCE,
    WEATHER_SAFETY_AGE,
)

logger = logging.getLogger(__name__)

WEEKEND_CLOSED = "Government offices are CLOSED on weekends"
RESCHEDULE_WEEKDAY = "Reschedule to a weekday."
HOLIDAY_CLOSED = "Government offices CLOSED for public holiday."

VENUE_LABELS = {
    VenueClass.GOVERNMENT: "government office",
    VenueClass.BANK: "bank",
    VenueClass.GENERAL: "business",
}

DAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


class VerdictBuilder:
    """Append-only accumulator for one validation pass.

    ``is_feasible`` starts true and flips to false the moment a blocking issue
    is added. Nothing can set it back.
    """

    def __init__(self, hint: Optional[FeasibilityVerdict] = None):
        self._is_feasible = True
        self._blocking: List[str] = []
        self._warnings: List[str] = []
        self._recommendations: List[str] = []
        if hint is not None:
            # Hints are unioned; their is_feasible flag is not trusted on its own
            for issue in hint.blocking_issues:
                self.add_blocking(issue)
            for warning in hint.warnings:
                self.add_warning(warning)
            for recommendation in hint.recommendations:
                self.add_recommendation(recommendation)

    @property
    def is_feasible(self) -> bool:
        return self._is_feasible

    def has_blocking(self, key: str) -> bool:
        """Check for a blocking issue containing ``key`` (case-insensitive)."""
        key = key.lower()
        return any(key in issue.lower() for issue in self._blocking)

    def add_blocking(self, message: str, dedup_key: Optional[str] = None) -> bool:
        """Record a blocking issue unless an equivalent one is already present.

        Returns:
            True if the issue was appended
        """
        if message in self._blocking or (dedup_key and self.has_blocking(dedup_key)):
            self._is_feasible = False
            return False
        self._blocking.append(message)
        self._is_feasible = False
        return True

    def add_warning(self, message: str) -> None:
        if message not in self._warnings:
            self._warnings.append(message)

    def add_recommendation(self, message: str) -> None:
        if message not in self._recommendations:
            self._recommendations.append(message)

    def build(self) -> FeasibilityVerdict:
        return FeasibilityVerdict(
            is_feasible=self._is_feasible and not self._blocking,
            blocking_issues=list(self._blocking),
            warnings=list(self._warnings),
            recommendations=list(self._recommendations),
        )


def mobility_factor(profile: Optional[UserProfile]) -> float:
    """Travel-time multiplier for a user; the largest applicable factor wins.

    Args:
        profile: User profile, or None for an unknown user

    Returns:
        1.0 for independent users under 60, 1.3 for seniors, 1.5 for users
        needing assistance, 1.8 for wheelchair users or limited mobility
    """
    if profile is None:
        return 1.0
    factor = MOBILITY_TRAVEL_FACTORS.get(profile.mobility_level, 1.0)
    if profile.age is not None and profile.age >= SENIOR_AGE:
        factor = max(factor, SENIOR_TRAVEL_FACTOR)
    return factor


def adjusted_travel_minutes(
    profile: Optional[UserProfile],
    base_minutes: Optional[int] = None,
    traffic: Optional[TrafficSnapshot] = None,
) -> int:
    """Door-to-door travel estimate: base time scaled by mobility, plus traffic delay."""
    base = base_minutes if base_minutes is not None else BASELINE_TRAVEL_MINUTES
    delay = traffic.delay_minutes if traffic is not None else 0
    return int(math.ceil(base * mobility_factor(profile))) + delay


def _is_vulnerable(profile: Optional[UserProfile]) -> bool:
    if profile is None:
        return False
    if profile.age is not None and profile.age > WEATHER_SAFETY_AGE:
        return True
    return profile.mobility_level != MobilityLevel.INDEPENDENT


def _format_window(hours: VenueHours) -> str:
    days = sorted(hours.weekdays)
    if days == list(range(days[0], days[-1] + 1)) and len(days) > 1:
        day_text = f"{DAY_NAMES[days[0]]}-{DAY_NAMES[days[-1]]}"
    else:
        day_text = ", ".join(DAY_NAMES[d] for d in days)
    return f"{day_text} {hours.opens:%H:%M}-{hours.closes:%H:%M}"


class FeasibilityValidator:
    """Rule engine that turns a task plus context into a ``FeasibilityVerdict``."""

    def __init__(self, calendar: Optional[CalendarRules] = None):
        self.calendar = calendar or CalendarRules()

    def validate(
        self,
        task: Task,
        profile: Optional[UserProfile] = None,
        weather: Optional[WeatherSnapshot] = None,
        traffic: Optional[TrafficSnapshot] = None,
        hint: Optional[FeasibilityVerdict] = None,
    ) -> FeasibilityVerdict:
        """Validate a task's schedule.

        Args:
            task: Task to validate
            profile: Owner's profile (None is treated as an independent adult)
            weather: Weather at the task's place and date, if known
            traffic: Traffic around the task's location, if known
            hint: Verdict from another source; its issues are merged in but
                the checks here always run and decide the outcome

        Returns:
            FeasibilityVerdict with blocking issues, warnings and recommendations
        """
        builder = VerdictBuilder(hint)
        venue_class = self.calendar.venue_class_of(task)

        self._check_weekend(builder, task, venue_class)
        self._check_holiday(builder, task, venue_class)
        self._check_business_hours(builder, task, venue_class)
        self._check_travel_time(builder, task, venue_class, profile, traffic)
        self._check_rush_hour(builder, task, traffic)
        self._check_weather_safety(builder, weather, profile)

        verdict = builder.build()
        logger.debug(
            f"Validated task {task.id}: feasible={verdict.is_feasible} "
            f"blocking={len(verdict.blocking_issues)} warnings={len(verdict.warnings)}"
        )
        return verdict

    def _check_weekend(self, builder: VerdictBuilder, task: Task, venue_class: VenueClass) -> None:
        if venue_class != VenueClass.GOVERNMENT or not self.calendar.is_weekend(task.due_date):
            return
        builder.add_blocking(WEEKEND_CLOSED, dedup_key="weekend")
        builder.add_recommendation(RESCHEDULE_WEEKDAY)

    def _check_holiday(self, builder: VerdictBuilder, task: Task, venue_class: VenueClass) -> None:
        if venue_class != VenueClass.GOVERNMENT or not self.calendar.is_public_holiday(task.due_date):
            return
        builder.add_blocking(HOLIDAY_CLOSED, dedup_key="holiday")
        name = self.calendar.holiday_name(task.due_date)
        next_day = self.next_working_day(task.due_date)
        builder.add_recommendation(
            f"{task.due_date:%B} {task.due_date.day} is {name}. "
            f"Reschedule to the next working day ({next_day.isoformat()})."
        )

    def _check_business_hours(self, builder: VerdictBuilder, task: Task, venue_class: VenueClass) -> None:
        if task.due_time is None:
            return
        if self.calendar.venue_open(venue_class, task.due_date, task.due_time):
            return
        label = VENUE_LABELS[VenueClass(venue_class)]
        hours = self.calendar.config.business_hours.get(VenueClass(venue_class))
        window = f" ({_format_window(hours)})" if hours else ""
        builder.add_warning(
            f"{task.due_time:%H:%M} on {task.due_date:%A} is outside typical {label} hours{window}."
        )

    def _check_travel_time(
        self,
        builder: VerdictBuilder,
        task: Task,
        venue_class: VenueClass,
        profile: Optional[UserProfile],
        traffic: Optional[TrafficSnapshot],
    ) -> None:
        if task.due_time is None:
            return
        # Outside opening hours is already reported by the business-hours check
        if not self.calendar.venue_open(venue_class, task.due_date, task.due_time):
            return
        closes = self.calendar.closing_time(venue_class, task.due_date)
        if closes is None:
            return

        travel = adjusted_travel_minutes(profile, task.estimated_travel_min, traffic)
        departure = datetime.combine(task.due_date, task.due_time)
        closing = datetime.combine(task.due_date, closes)
        if departure + timedelta(minutes=travel) < closing:
            return

        latest = closing - timedelta(minutes=travel)
        builder.add_warning(
            f"Estimated travel time of {travel} minutes may not get you there "
            f"before closing at {closes:%H:%M}."
        )
        if latest.date() == task.due_date:
            builder.add_recommendation(f"Leave by {latest:%H:%M} at the latest, or reschedule to an earlier time.")
        else:
            builder.add_recommendation("Start earlier in the day or reschedule to another day.")

    def _check_rush_hour(self, builder: VerdictBuilder, task: Task, traffic: Optional[TrafficSnapshot]) -> None:
        if task.due_time is None or not self.calendar.is_rush_hour(task.due_time):
            return
        message = f"{task.due_time:%H:%M} is during rush hour; expect heavy traffic"
        if traffic is not None and traffic.delay_minutes:
            message += f" (about {traffic.delay_minutes} minutes of delay)"
        message += "."
        if traffic is not None and traffic.alternative_routes:
            message += f" Alternative routes: {', '.join(traffic.alternative_routes)}."
        builder.add_warning(message)

    def _check_weather_safety(
        self,
        builder: VerdictBuilder,
        weather: Optional[WeatherSnapshot],
        profile: Optional[UserProfile],
    ) -> None:
        if weather is None or weather.rain_chance <= HEAVY_RAIN_CHANCE:
            return
        if not _is_vulnerable(profile):
            return
        builder.add_warning(
            f"Heavy rain expected ({weather.rain_chance:.0f}% chance); travel may be unsafe."
        )
        builder.add_recommendation("Consider postponing, or bring a companion for assistance.")

    def next_working_day(self, day: date) -> date:
        """First day after ``day`` that is neither a weekend nor a public holiday."""
        candidate = day + timedelta(days=1)
        while self.calendar.is_weekend(candidate) or self.calendar.is_public_holiday(candidate):
            candidate += timedelta(days=1)
        return candidate
