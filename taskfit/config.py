"""Environment configuration for taskFit.

Values are read from the process environment (and a local ``.env`` file when
present). Defaults suit local development in Metro Manila.
"""

import os
from datetime import datetime, date
from zoneinfo import ZoneInfo
from dotenv import load_dotenv

from taskfit.models.constants import WEATHER_CACHE_TTL_SEC, TRAFFIC_CACHE_TTL_SEC

load_dotenv()

DEFAULT_TIMEZONE = os.getenv("DEFAULT_TIMEZONE", "Asia/Manila")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

OPENWEATHER_API_KEY = os.getenv("OPENWEATHER_API_KEY")
TOMTOM_API_KEY = os.getenv("TOMTOM_API_KEY")
PROVIDER_TIMEOUT_SEC = float(os.getenv("PROVIDER_TIMEOUT_SEC", "10"))

WEATHER_TTL_SEC = int(os.getenv("WEATHER_CACHE_TTL_SEC", str(WEATHER_CACHE_TTL_SEC)))
TRAFFIC_TTL_SEC = int(os.getenv("TRAFFIC_CACHE_TTL_SEC", str(TRAFFIC_CACHE_TTL_SEC)))


def local_now() -> datetime:
    """Current wall-clock time in the configured timezone."""
    return datetime.now(ZoneInfo(DEFAULT_TIMEZONE))


def local_today() -> date:
    """Current calendar date in the configured timezone."""
    return local_now().date()
