"""Priority scoring for taskFit.

Additive score, capped at 100:

- Time urgency (10-50): due today or overdue = 50, within 3 days = 35,
  within 7 days = 20, later = 10
- Category weight (5-30): bill 30, benefit 25, appointment 20, reminder 10, other 5
- Weather risk (0-10): rain chance > 70% = 10, > 40% = 5
- Traffic risk (0-10): delay > 30 min = 10, > 15 min = 5

Overdue tasks score the full urgency points so they rank highest. Missing
weather or traffic context contributes nothing.
"""

from datetime import date
from typing import Optional
from pydantic import BaseModel, Field

from taskfit.config import local_today
from taskfit.models.task import Task, WeatherSnapshot, TrafficSnapshot
from taskfit.models.constants import (
    MAX_PRIORITY_SCORE,
    URGENCY_OVERDUE_POINTS,
    URGENCY_BANDS,
    URGENCY_DISTANT_POINTS,
    CATEGORY_POINTS,
    DEFAULT_CATEGORY_POINTS,
    RAIN_RISK_BANDS,
    DELAY_RISK_BANDS,
)


class ScoreBreakdown(BaseModel):
    """Per-component contributions to a priority score."""

    days_until_due: int = Field(..., description="Whole days from today to the due date (negative if overdue)")
    urgency: int = Field(..., description="Time urgency points")
    category: int = Field(..., description="Category weight points")
    weather: int = Field(0, description="Weather risk points")
    traffic: int = Field(0, description="Traffic risk points")
    total: int = Field(..., ge=0, le=MAX_PRIORITY_SCORE, description="Capped sum of all components")


def days_until(due_date: date, today: Optional[date] = None) -> int:
    """Whole calendar days from today to the due date."""
    if today is None:
        today = local_today()
    return (due_date - today).days


def urgency_points(days: int) -> int:
    if days < 1:
        return URGENCY_OVERDUE_POINTS
    for max_days, points in URGENCY_BANDS:
        if days <= max_days:
            return points
    return URGENCY_DISTANT_POINTS


def category_points(category) -> int:
    key = getattr(category, "value", category)
    return CATEGORY_POINTS.get(key, DEFAULT_CATEGORY_POINTS)


def weather_points(weather: Optional[WeatherSnapshot]) -> int:
    if weather is None:
        return 0
    return _banded(weather.rain_chance or 0, RAIN_RISK_BANDS)


def traffic_points(traffic: Optional[TrafficSnapshot]) -> int:
    if traffic is None:
        return 0
    return _banded(traffic.delay_minutes or 0, DELAY_RISK_BANDS)


def _banded(value: float, bands) -> int:
    for threshold, points in bands:
        if value > threshold:
            return points
    return 0


def score_breakdown(
    task: Task,
    weather: Optional[WeatherSnapshot] = None,
    traffic: Optional[TrafficSnapshot] = None,
    today: Optional[date] = None,
) -> ScoreBreakdown:
    """Compute each component of the priority score for a task.

    Args:
        task: Task to score
        weather: Weather at the task's place and date, if known
        traffic: Traffic around the task's location, if known
        today: Reference date (defaults to today in the configured timezone)

    Returns:
        ScoreBreakdown whose ``total`` is the priority score
    """
    days = days_until(task.due_date, today)
    urgency = urgency_points(days)
    category = category_points(task.category)
    weather_risk = weather_points(weather)
    traffic_risk = traffic_points(traffic)
    total = min(urgency + category + weather_risk + traffic_risk, MAX_PRIORITY_SCORE)
    return ScoreBreakdown(
        days_until_due=days,
        urgency=urgency,
        category=category,
        weather=weather_risk,
        traffic=traffic_risk,
        total=total,
    )


def score_task(
    task: Task,
    weather: Optional[WeatherSnapshot] = None,
    traffic: Optional[TrafficSnapshot] = None,
    today: Optional[date] = None,
) -> int:
    """Compute the 0-100 priority score for a task.

    This function is deterministic - same inputs always produce same outputs.
    """
    return score_breakdown(task, weather, traffic, today).total
