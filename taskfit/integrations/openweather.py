"""OpenWeatherMap integration for taskFit.

Fetches current conditions and forecasts and normalizes them into
``WeatherSnapshot``. Failures raise ``ProviderError``; the context service
decides what to do about them.
"""

import logging
from datetime import date, datetime, time, timezone
from typing import Optional
from zoneinfo import ZoneInfo
import requests

from taskfit import config
from taskfit.integrations.errors import ProviderError, ProviderNotConfiguredError
from taskfit.models.task import WeatherSnapshot

logger = logging.getLogger(__name__)

OPENWEATHER_API_BASE = "https://api.openweathermap.org/data/2.5"


def rain_chance_from_current(data: dict) -> float:
    """Estimate rain chance from a current-conditions payload (no probability is given)."""
    condition = data["weather"][0]["main"].lower()
    if "rain" in condition or "drizzle" in condition:
        rain_1h = (data.get("rain") or {}).get("1h")
        return min(rain_1h * 10, 100) if rain_1h else 70
    if "thunderstorm" in condition:
        return 90
    if "cloud" in condition:
        return 30
    return 10


def rain_chance_from_forecast(entry: dict) -> float:
    """Rain chance from a forecast entry's probability of precipitation, floored by condition."""
    condition = entry["weather"][0]["main"].lower()
    pop = (entry.get("pop") or 0) * 100
    if "rain" in condition or "drizzle" in condition:
        return max(pop, 70)
    if "thunderstorm" in condition:
        return max(pop, 90)
    return pop


class OpenWeatherClient:
    """Client for the OpenWeatherMap REST API."""

    def __init__(self, api_key: Optional[str] = None, timeout: Optional[float] = None):
        """Initialize OpenWeatherMap client.

        Args:
            api_key: OpenWeatherMap API key. If None, reads OPENWEATHER_API_KEY.
            timeout: Request timeout in seconds. If None, uses PROVIDER_TIMEOUT_SEC.

        Note:
            A missing key does not fail here; every fetch raises
            ProviderNotConfiguredError instead so callers fall back gracefully.
        """
        self.api_key = api_key or config.OPENWEATHER_API_KEY
        self.timeout = timeout or config.PROVIDER_TIMEOUT_SEC
        if not self.api_key:
            logger.warning("OPENWEATHER_API_KEY not found in environment. Weather lookups will use fallbacks.")

    def _get(self, path: str, location: str) -> dict:
        if not self.api_key:
            raise ProviderNotConfiguredError("OpenWeatherMap API key is not configured")
        url = f"{OPENWEATHER_API_BASE}/{path}"
        params = {"q": location, "appid": self.api_key, "units": "metric"}
        try:
            response = requests.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.RequestException as e:
            raise ProviderError(f"OpenWeatherMap {path} request failed: {type(e).__name__}") from e

    def fetch_current(self, location: str) -> WeatherSnapshot:
        """Fetch current weather for a location (city name, e.g. 'Quezon City,PH')."""
        data = self._get("weather", location)
        try:
            return WeatherSnapshot(
                condition=data["weather"][0]["main"].lower(),
                description=data["weather"][0].get("description"),
                rain_chance=rain_chance_from_current(data),
                temperature=data["main"]["temp"],
                wind_speed=data["wind"]["speed"],
                humidity=data["main"]["humidity"],
                location=data.get("name") or location,
            )
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise ProviderError(f"Unexpected OpenWeatherMap weather payload: {type(e).__name__}") from e

    def fetch_forecast(self, location: str, target_date: date) -> WeatherSnapshot:
        """Fetch the forecast entry closest to midday on ``target_date``."""
        data = self._get("forecast", location)
        try:
            entries = data["list"]
            if not entries:
                raise ProviderError("OpenWeatherMap forecast contained no entries")
            target = datetime.combine(target_date, time(12, 0), tzinfo=ZoneInfo(config.DEFAULT_TIMEZONE))
            closest = min(
                entries,
                key=lambda e: abs(datetime.fromtimestamp(e["dt"], tz=timezone.utc) - target),
            )
            return WeatherSnapshot(
                condition=closest["weather"][0]["main"].lower(),
                description=closest["weather"][0].get("description"),
                rain_chance=rain_chance_from_forecast(closest),
                temperature=closest["main"]["temp"],
                wind_speed=closest["wind"]["speed"],
                humidity=closest["main"]["humidity"],
                location=location,
                forecast_date=target_date,
            )
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise ProviderError(f"Unexpected OpenWeatherMap forecast payload: {type(e).__name__}") from e
