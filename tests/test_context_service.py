"""Tests for the cache-backed context service and fallbacks."""

from datetime import date, datetime

from taskfit.context.cache import ContextCache, ContextSource
from taskfit.context.fallbacks import fallback_weather, fallback_traffic
from taskfit.context.service import ContextService
from taskfit.integrations.errors import ProviderError, ProviderNotConfiguredError
from taskfit.models.task import CongestionLevel


DUE = date(2026, 10, 20)


class TestFallbacks:
    """Test fallback_weather() and fallback_traffic()."""

    def test_fallback_weather_defaults(self):
        weather = fallback_weather("Makati", DUE)
        assert weather.condition == "unknown"
        assert weather.rain_chance == 30
        assert weather.temperature == 28
        assert weather.humidity == 70
        assert weather.location == "Makati"
        assert weather.forecast_date == DUE

    def test_fallback_weather_default_location(self):
        assert fallback_weather().location == "Quezon City"

    def test_fallback_traffic_rush_hour(self):
        traffic = fallback_traffic(datetime(2026, 10, 19, 8, 0))
        assert traffic.delay_minutes == 45
        assert traffic.congestion_level == CongestionLevel.SEVERE
        assert traffic.alternative_routes == ["C5", "Ortigas Avenue", "SLEX"]

    def test_fallback_traffic_midday_and_night(self):
        assert fallback_traffic(datetime(2026, 10, 19, 13, 0)).delay_minutes == 20
        assert fallback_traffic(datetime(2026, 10, 19, 23, 0)).delay_minutes == 5


class TestWeatherLookups:
    """Test get_weather() and get_current_weather()."""

    def test_forecast_is_cached_per_location_and_date(self, context_service, weather_client, live_weather):
        first = context_service.get_weather("Makati", DUE)
        second = context_service.get_weather("Makati", DUE)

        assert first.value == live_weather
        assert first.source == ContextSource.LIVE
        assert second.source == ContextSource.CACHED
        weather_client.fetch_forecast.assert_called_once_with("Makati", DUE)

    def test_different_date_is_a_different_key(self, context_service, weather_client):
        context_service.get_weather("Makati", DUE)
        context_service.get_weather("Makati", date(2026, 10, 21))
        assert weather_client.fetch_forecast.call_count == 2

    def test_missing_location_uses_default(self, context_service, weather_client):
        context_service.get_weather(None, DUE)
        weather_client.fetch_forecast.assert_called_once_with("Quezon City,PH", DUE)

    def test_provider_failure_returns_flagged_fallback(self, context_service, weather_client):
        weather_client.fetch_forecast.side_effect = ProviderNotConfiguredError("no key")
        result = context_service.get_weather("Makati", DUE)
        assert result.is_fallback
        assert result.value.rain_chance == 30
        assert result.value.forecast_date == DUE

    def test_current_weather_uses_its_own_key(self, context_service, weather_client):
        context_service.get_weather("Makati", DUE)
        result = context_service.get_current_weather("Makati")
        assert result.source == ContextSource.LIVE
        weather_client.fetch_current.assert_called_once_with("Makati")


class TestTrafficLookups:
    """Test get_traffic() and get_route_traffic()."""

    def test_location_traffic_uses_current_hour(self, context_service, traffic_client, live_traffic):
        result = context_service.get_traffic("Cubao")
        assert result.value == live_traffic
        traffic_client.fetch_by_location.assert_called_once_with("Cubao", 13)

    def test_location_traffic_cached_until_ttl(self, context_service, traffic_client, clock):
        context_service.get_traffic("Cubao")
        clock.advance(900)
        assert context_service.get_traffic("Cubao").source == ContextSource.CACHED
        clock.advance(1)
        assert context_service.get_traffic("Cubao").source == ContextSource.LIVE
        assert traffic_client.fetch_by_location.call_count == 2

    def test_route_traffic(self, context_service, traffic_client):
        origin, destination = (14.62, 121.05), (14.55, 121.02)
        context_service.get_route_traffic(origin, destination)
        context_service.get_route_traffic(origin, destination)
        traffic_client.fetch_route.assert_called_once_with(origin, destination)

    def test_route_failure_falls_back_to_hourly_estimate(self, context_service, traffic_client):
        traffic_client.fetch_route.side_effect = ProviderError("timeout")
        result = context_service.get_route_traffic((14.62, 121.05), (14.55, 121.02))
        assert result.is_fallback
        # 1 PM falls in the midday band
        assert result.value.delay_minutes == 20
        assert result.value.congestion_level == CongestionLevel.MEDIUM

    def test_weather_and_traffic_caches_are_separate(self, context_service):
        context_service.get_weather("Cubao", DUE)
        context_service.get_traffic("Cubao")
        assert len(context_service.weather_cache) == 1
        assert len(context_service.traffic_cache) == 1


class TestConstruction:
    """Collaborators passed in are used as given."""

    def test_empty_injected_caches_are_kept(self, weather_client, traffic_client, clock):
        weather_cache = ContextCache("weather", 1800, clock=clock)
        traffic_cache = ContextCache("traffic", 900, clock=clock)
        service = ContextService(weather_client, traffic_client, weather_cache, traffic_cache)
        assert service.weather_cache is weather_cache
        assert service.traffic_cache is traffic_cache

    def test_services_can_share_a_cache(self, weather_client, traffic_client, clock):
        shared = ContextCache("weather", 1800, clock=clock)
        first = ContextService(weather_client, traffic_client, weather_cache=shared)
        second = ContextService(weather_client, traffic_client, weather_cache=shared)

        first.get_weather("Makati", DUE)
        assert second.get_weather("Makati", DUE).source == ContextSource.CACHED
        weather_client.fetch_forecast.assert_called_once()
