"""Data models for taskFit."""

from taskfit.models.task import (
    Task,
    TaskCategory,
    CongestionLevel,
    WeatherSnapshot,
    TrafficSnapshot,
    FeasibilityVerdict,
)
from taskfit.models.user import UserProfile, MobilityLevel

__all__ = [
    "Task",
    "TaskCategory",
    "CongestionLevel",
    "WeatherSnapshot",
    "TrafficSnapshot",
    "FeasibilityVerdict",
    "UserProfile",
    "MobilityLevel",
]
