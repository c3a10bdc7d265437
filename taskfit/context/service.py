"""Weather and traffic context for taskFit.

Wraps the provider clients with two caches (weather for 30 minutes, traffic
for 15) and the fallback generators. Every lookup returns a
``ContextResult``; provider failures never escape this module.
"""

from datetime import date, datetime
from typing import Callable, Optional

from taskfit import config
from taskfit.context.cache import ContextCache, ContextResult
from taskfit.context.fallbacks import fallback_weather, fallback_traffic
from taskfit.integrations.openweather import OpenWeatherClient
from taskfit.integrations.tomtom import TomTomTrafficClient, Coordinates
from taskfit.models.task import WeatherSnapshot, TrafficSnapshot
from taskfit.models.constants import DEFAULT_WEATHER_LOCATION, DEFAULT_TRAFFIC_LOCATION


class ContextService:
    """Cache-backed weather and traffic lookups with graceful degradation."""

    def __init__(
        self,
        weather_client: Optional[OpenWeatherClient] = None,
        traffic_client: Optional[TomTomTrafficClient] = None,
        weather_cache: Optional[ContextCache] = None,
        traffic_cache: Optional[ContextCache] = None,
        now: Callable[[], datetime] = config.local_now,
    ):
        self.weather_client = weather_client if weather_client is not None else OpenWeatherClient()
        self.traffic_client = traffic_client if traffic_client is not None else TomTomTrafficClient()
        self.weather_cache = weather_cache if weather_cache is not None else ContextCache("weather", config.WEATHER_TTL_SEC)
        self.traffic_cache = traffic_cache if traffic_cache is not None else ContextCache("traffic", config.TRAFFIC_TTL_SEC)
        self._now = now

    def get_weather(self, location: Optional[str], due_date: date) -> ContextResult[WeatherSnapshot]:
        """Forecast for a location on a date."""
        location = location or DEFAULT_WEATHER_LOCATION
        return self.weather_cache.get_or_compute(
            f"forecast:{location}:{due_date.isoformat()}",
            self.weather_cache.default_ttl,
            lambda: self.weather_client.fetch_forecast(location, due_date),
            lambda: fallback_weather(location, due_date),
        )

    def get_current_weather(self, location: Optional[str] = None) -> ContextResult[WeatherSnapshot]:
        """Current conditions at a location."""
        location = location or DEFAULT_WEATHER_LOCATION
        return self.weather_cache.get_or_compute(
            f"weather:{location}",
            self.weather_cache.default_ttl,
            lambda: self.weather_client.fetch_current(location),
            lambda: fallback_weather(location),
        )

    def get_traffic(self, location: Optional[str]) -> ContextResult[TrafficSnapshot]:
        """Traffic around a named location right now."""
        location = location or DEFAULT_TRAFFIC_LOCATION
        return self.traffic_cache.get_or_compute(
            f"traffic:location:{location}",
            self.traffic_cache.default_ttl,
            lambda: self.traffic_client.fetch_by_location(location, self._now().hour),
            lambda: fallback_traffic(self._now(), location),
        )

    def get_route_traffic(self, origin: Coordinates, destination: Coordinates) -> ContextResult[TrafficSnapshot]:
        """Traffic along a route between two (lat, lon) points."""
        key = f"traffic:{origin[0]}:{origin[1]}:{destination[0]}:{destination[1]}"
        return self.traffic_cache.get_or_compute(
            key,
            self.traffic_cache.default_ttl,
            lambda: self.traffic_client.fetch_route(origin, destination),
            lambda: fallback_traffic(self._now()),
        )
