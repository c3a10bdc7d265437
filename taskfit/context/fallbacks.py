"""Fallback snapshots used when weather or traffic providers are unavailable."""

from datetime import date, datetime
from typing import Optional

from taskfit.integrations.tomtom import estimate_traffic_by_hour
from taskfit.models.task import WeatherSnapshot, TrafficSnapshot


def fallback_weather(location: Optional[str] = None, forecast_date: Optional[date] = None) -> WeatherSnapshot:
    """Climatological default for Metro Manila: warm, humid, moderate rain chance."""
    return WeatherSnapshot(
        condition="unknown",
        description="Weather data unavailable",
        rain_chance=30,
        temperature=28,
        wind_speed=5,
        humidity=70,
        location=location or "Quezon City",
        forecast_date=forecast_date,
    )


def fallback_traffic(now: datetime, location: Optional[str] = None) -> TrafficSnapshot:
    """Time-of-day traffic estimate for Metro Manila."""
    return estimate_traffic_by_hour(now.hour, location or "Metro Manila")
