"""Pytest fixtures and configuration for taskFit tests."""

import pytest
import uuid
from datetime import date, datetime
from unittest.mock import MagicMock
from fastapi.testclient import TestClient

from taskfit.context.cache import ContextCache
from taskfit.context.service import ContextService
from taskfit.engine.calendar_rules import CalendarRules
from taskfit.engine.evaluator import TaskEvaluator
from taskfit.engine.feasibility import FeasibilityValidator
from taskfit.integrations.openweather import OpenWeatherClient
from taskfit.integrations.tomtom import TomTomTrafficClient
from taskfit.models.task import Task, TaskCategory, WeatherSnapshot, TrafficSnapshot, CongestionLevel
from taskfit.models.user import UserProfile, MobilityLevel


# Fixed reference date (a Monday)
MONDAY = date(2026, 10, 19)


class FakeClock:
    """Monotonic clock the tests can move forward by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def test_user_id():
    """Test user ID for multi-user testing."""
    return "test-user-123"


@pytest.fixture
def today():
    """Reference 'today' for scoring (a Monday)."""
    return MONDAY


@pytest.fixture
def sample_task_base(test_user_id, today):
    """Base task data for creating test tasks.

    Returns a dict with default task attributes that can be overridden.
    """
    now = datetime.utcnow()
    return {
        "id": str(uuid.uuid4()),
        "user_id": test_user_id,
        "title": "Test Task",
        "notes": None,
        "category": TaskCategory.OTHER,
        "due_date": today,
        "due_time": None,
        "location": None,
        "estimated_travel_min": None,
        "is_completed": False,
        "created_at": now,
        "updated_at": now,
    }


@pytest.fixture
def sample_task(sample_task_base):
    """Create a sample Task object for testing."""
    return Task(**sample_task_base)


@pytest.fixture
def benefit_task_base(sample_task_base):
    """Benefit visit at a government office."""
    return {
        **sample_task_base,
        "title": "Claim pension",
        "category": TaskCategory.BENEFIT,
        "location": "SSS Quezon City Branch",
    }


@pytest.fixture
def independent_profile(test_user_id):
    return UserProfile(user_id=test_user_id, age=30)


@pytest.fixture
def wheelchair_profile(test_user_id):
    return UserProfile(user_id=test_user_id, age=30, mobility_level=MobilityLevel.WHEELCHAIR)


@pytest.fixture
def senior_profile(test_user_id):
    return UserProfile(user_id=test_user_id, age=70, has_senior_id=True)


@pytest.fixture
def calendar():
    return CalendarRules()


@pytest.fixture
def validator(calendar):
    return FeasibilityValidator(calendar)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def live_weather():
    return WeatherSnapshot(condition="clouds", rain_chance=20, temperature=31, wind_speed=3, humidity=65)


@pytest.fixture
def live_traffic():
    return TrafficSnapshot(
        delay_minutes=10,
        congestion_level=CongestionLevel.LOW,
        alternative_routes=["C5"],
    )


@pytest.fixture
def weather_client(live_weather):
    """OpenWeatherMap client double returning a fixed reading."""
    client = MagicMock(spec=OpenWeatherClient)
    client.fetch_forecast.return_value = live_weather
    client.fetch_current.return_value = live_weather
    return client


@pytest.fixture
def traffic_client(live_traffic):
    """TomTom client double returning a fixed reading."""
    client = MagicMock(spec=TomTomTrafficClient)
    client.fetch_by_location.return_value = live_traffic
    client.fetch_route.return_value = live_traffic
    return client


@pytest.fixture
def context_service(weather_client, traffic_client, clock):
    """Context service with fake providers, fake clock and 1 PM local time."""
    return ContextService(
        weather_client=weather_client,
        traffic_client=traffic_client,
        weather_cache=ContextCache("weather", 1800, clock=clock),
        traffic_cache=ContextCache("traffic", 900, clock=clock),
        now=lambda: datetime(2026, 10, 19, 13, 0),
    )


@pytest.fixture
def evaluator(context_service, validator, today):
    return TaskEvaluator(context_service, validator, today=lambda: today)


@pytest.fixture
def test_client(evaluator):
    """Create a FastAPI test client with the evaluator overridden and empty stores."""
    from taskfit.api.app import app, get_evaluator, tasks_store, profiles_store

    tasks_store.clear()
    profiles_store.clear()
    app.dependency_overrides[get_evaluator] = lambda: evaluator

    with TestClient(app) as client:
        yield client

    # Clean up dependency overrides
    app.dependency_overrides.clear()
    tasks_store.clear()
    profiles_store.clear()
