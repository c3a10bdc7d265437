"""TomTom traffic integration for taskFit.

Route lookups use TomTom's flow-segment data. Location-name lookups have no
provider endpoint and use typical Metro Manila traffic patterns by hour,
which is also the fallback when TomTom is unavailable.
"""

import logging
from typing import Optional, Tuple
import requests

from taskfit import config
from taskfit.integrations.errors import ProviderError, ProviderNotConfiguredError
from taskfit.models.task import TrafficSnapshot, CongestionLevel

logger = logging.getLogger(__name__)

TOMTOM_API_BASE = "https://api.tomtom.com/traffic/services/4"

Coordinates = Tuple[float, float]

# Common Metro Manila alternates suggested for any route
MANILA_ALTERNATIVE_ROUTES = ["C5", "Ortigas Avenue", "EDSA", "Commonwealth Avenue"]

# (speed ratio strictly above, delay minutes, congestion), best first
SPEED_RATIO_BANDS = (
    (0.8, 5, CongestionLevel.LOW),
    (0.6, 15, CongestionLevel.MEDIUM),
    (0.4, 30, CongestionLevel.HIGH),
)
WORST_BAND = (45, CongestionLevel.SEVERE)


def classify_speed(current_speed: Optional[float], free_flow_speed: Optional[float]) -> Tuple[int, CongestionLevel]:
    """Map current vs free-flow speed to (delay minutes, congestion level)."""
    if not current_speed or not free_flow_speed:
        return 0, CongestionLevel.LOW
    ratio = current_speed / free_flow_speed
    for threshold, delay, level in SPEED_RATIO_BANDS:
        if ratio > threshold:
            return delay, level
    return WORST_BAND


def estimate_traffic_by_hour(hour: int, location: Optional[str] = None) -> TrafficSnapshot:
    """Estimate Metro Manila traffic from the hour of day (0-23).

    Rush hours (7-10, 17-20) are severe, midday (11-16) is moderate, and
    everything else is light.
    """
    if 7 <= hour <= 10 or 17 <= hour <= 20:
        return TrafficSnapshot(
            delay_minutes=45,
            congestion_level=CongestionLevel.SEVERE,
            current_speed=15,
            free_flow_speed=60,
            confidence=0.85,
            alternative_routes=["C5", "Ortigas Avenue", "SLEX"],
            location=location,
        )
    if 11 <= hour <= 16:
        return TrafficSnapshot(
            delay_minutes=20,
            congestion_level=CongestionLevel.MEDIUM,
            current_speed=35,
            free_flow_speed=60,
            confidence=0.80,
            alternative_routes=["C5", "Ortigas Avenue"],
            location=location,
        )
    return TrafficSnapshot(
        delay_minutes=5,
        congestion_level=CongestionLevel.LOW,
        current_speed=50,
        free_flow_speed=60,
        confidence=0.90,
        alternative_routes=[],
        location=location,
    )


class TomTomTrafficClient:
    """Client for the TomTom Traffic Flow API."""

    def __init__(self, api_key: Optional[str] = None, timeout: Optional[float] = None):
        """Initialize TomTom client.

        Args:
            api_key: TomTom API key. If None, reads TOMTOM_API_KEY.
            timeout: Request timeout in seconds. If None, uses PROVIDER_TIMEOUT_SEC.
        """
        self.api_key = api_key or config.TOMTOM_API_KEY
        self.timeout = timeout or config.PROVIDER_TIMEOUT_SEC
        if not self.api_key:
            logger.warning("TOMTOM_API_KEY not found in environment. Route traffic will use fallbacks.")

    def fetch_route(self, origin: Coordinates, destination: Coordinates) -> TrafficSnapshot:
        """Fetch traffic flow near the destination of a route.

        Args:
            origin: (lat, lon) of the start
            destination: (lat, lon) of the venue

        Returns:
            Normalized TrafficSnapshot

        Raises:
            ProviderError: If the API is not configured, unreachable or returns junk
        """
        if not self.api_key:
            raise ProviderNotConfiguredError("TomTom API key is not configured")
        url = f"{TOMTOM_API_BASE}/flowSegmentData/absolute/10/json"
        params = {"key": self.api_key, "point": f"{destination[0]},{destination[1]}"}
        try:
            response = requests.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()["flowSegmentData"]
        except requests.RequestException as e:
            raise ProviderError(f"TomTom flow request failed: {type(e).__name__}") from e
        except (KeyError, TypeError, ValueError) as e:
            raise ProviderError(f"Unexpected TomTom flow payload: {type(e).__name__}") from e

        current_speed = data.get("currentSpeed")
        free_flow_speed = data.get("freeFlowSpeed")
        delay, level = classify_speed(current_speed, free_flow_speed)
        return TrafficSnapshot(
            delay_minutes=delay,
            congestion_level=level,
            current_speed=current_speed,
            free_flow_speed=free_flow_speed,
            confidence=data.get("confidence"),
            alternative_routes=list(MANILA_ALTERNATIVE_ROUTES),
        )

    def fetch_by_location(self, location: str, hour: int) -> TrafficSnapshot:
        """Estimate traffic around a named location at the given hour."""
        return estimate_traffic_by_hour(hour, location)
