"""Task data model for taskFit."""

from datetime import date, datetime, time
from typing import List, Optional
from enum import Enum
from pydantic import BaseModel, Field


class TaskCategory(str, Enum):
    """Task category enumeration."""
    BILL = "bill"
    BENEFIT = "benefit"
    APPOINTMENT = "appointment"
    REMINDER = "reminder"
    OTHER = "other"


class CongestionLevel(str, Enum):
    """Road congestion enumeration."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    SEVERE = "severe"


class WeatherSnapshot(BaseModel):
    """Normalized weather reading for a location (and optionally a date)."""

    condition: str = Field("unknown", description="Lower-cased condition, e.g. 'rain', 'clouds'")
    description: Optional[str] = Field(None, description="Provider description of the condition")
    rain_chance: float = Field(0, ge=0, le=100, description="Chance of rain in percent")
    temperature: float = Field(28.0, description="Temperature in degrees Celsius")
    wind_speed: float = Field(0.0, ge=0, description="Wind speed in m/s")
    humidity: float = Field(0.0, ge=0, le=100, description="Relative humidity in percent")
    location: Optional[str] = Field(None, description="Location the reading applies to")
    forecast_date: Optional[date] = Field(None, description="Forecast date, if this is a forecast")


class TrafficSnapshot(BaseModel):
    """Normalized traffic reading for a location or route."""

    delay_minutes: int = Field(0, ge=0, description="Expected delay over free-flow travel")
    congestion_level: CongestionLevel = Field(CongestionLevel.LOW, description="Congestion level")
    alternative_routes: List[str] = Field(default_factory=list, description="Suggested alternative roads, in order")
    current_speed: Optional[float] = Field(None, description="Current speed in km/h")
    free_flow_speed: Optional[float] = Field(None, description="Free-flow speed in km/h")
    confidence: Optional[float] = Field(None, ge=0.0, le=1.0, description="Provider confidence")
    location: Optional[str] = Field(None, description="Location the reading applies to")

    class Config:
        """Pydantic configuration."""
        use_enum_values = True


class FeasibilityVerdict(BaseModel):
    """Outcome of validating a task's schedule."""

    is_feasible: bool = Field(True, description="False once any blocking issue is recorded")
    blocking_issues: List[str] = Field(default_factory=list, description="Problems that make the task impossible as scheduled")
    warnings: List[str] = Field(default_factory=list, description="Advisory problems")
    recommendations: List[str] = Field(default_factory=list, description="Suggested adjustments")


class Task(BaseModel):
    """Canonical Task model."""

    id: str = Field(..., description="Unique task identifier (UUID v4)")
    user_id: str = Field(..., description="User ID who owns this task")
    title: str = Field(..., min_length=1, description="Task title")
    notes: Optional[str] = Field(None, description="Task notes or description")
    category: TaskCategory = Field(TaskCategory.OTHER, description="Task category")
    due_date: date = Field(..., description="Due date (Asia/Manila calendar date)")
    due_time: Optional[time] = Field(None, description="Time of day the user sets out for the task")
    location: Optional[str] = Field(None, description="Free-text location; may name a government office")
    estimated_travel_min: Optional[int] = Field(
        None,
        ge=0,
        description="Base travel time in minutes (baseline applies when unknown)",
    )
    priority_score: int = Field(0, ge=0, le=100, description="Derived priority score")
    weather_context: Optional[WeatherSnapshot] = Field(None, description="Weather at the task's place and date")
    traffic_context: Optional[TrafficSnapshot] = Field(None, description="Traffic around the task's location")
    feasibility: FeasibilityVerdict = Field(default_factory=FeasibilityVerdict, description="Derived feasibility verdict")
    is_completed: bool = Field(False, description="Whether the task is done")
    created_at: datetime = Field(..., description="Task creation timestamp")
    updated_at: datetime = Field(..., description="Task last update timestamp")

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
