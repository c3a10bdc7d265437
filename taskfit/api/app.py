"""FastAPI web application for taskFit."""

import logging
from datetime import date, datetime, time
from typing import List, Optional, Dict
from fastapi import FastAPI, HTTPException, Depends, Query
from pydantic import BaseModel, Field, field_validator

from taskfit.config import local_today
from taskfit.context.cache import ContextResult
from taskfit.engine.evaluator import TaskEvaluator, needs_reevaluation
from taskfit.engine.ranking import by_due_date, high_priority_tasks
from taskfit.engine.scoring import ScoreBreakdown, score_breakdown
from taskfit.models.task import Task, TaskCategory, FeasibilityVerdict, WeatherSnapshot, TrafficSnapshot
from taskfit.models.task_factory import create_task_base
from taskfit.models.user import UserProfile, MobilityLevel

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="taskFit API",
    description="Tells you whether your errands can actually be done, and which to do first",
    version="0.1.0"
)

# In-memory storage for MVP
tasks_store: Dict[str, Task] = {}
profiles_store: Dict[str, UserProfile] = {}

_evaluator: Optional[TaskEvaluator] = None


def get_evaluator() -> TaskEvaluator:
    """Shared evaluator (and therefore shared context caches) for all requests."""
    global _evaluator
    if _evaluator is None:
        _evaluator = TaskEvaluator()
    return _evaluator


# Request models
class TaskCreateRequest(BaseModel):
    """Request model for creating a task."""
    user_id: str = Field(..., description="User ID who owns this task")
    title: str = Field(..., min_length=1, description="Task title")
    category: TaskCategory = Field(TaskCategory.OTHER, description="Task category")
    due_date: date = Field(..., description="Due date (YYYY-MM-DD)")
    due_time: Optional[time] = Field(None, description="Time the user sets out (HH:MM)")
    location: Optional[str] = Field(None, description="Free-text location")
    notes: Optional[str] = Field(None, description="Task notes")
    estimated_travel_min: Optional[int] = Field(None, ge=0, description="Known base travel time in minutes")
    feasibility_hint: Optional[FeasibilityVerdict] = Field(
        None, description="Verdict from another source; merged but not trusted on its own"
    )

    @field_validator("title", mode="before")
    @classmethod
    def _strip_title(cls, v):
        # Strip before the length check so whitespace-only titles are rejected
        return v.strip() if isinstance(v, str) else v

    class Config:
        """Pydantic configuration."""
        extra = "forbid"


class TaskUpdateRequest(BaseModel):
    """Request model for updating a task. Only provided fields change."""
    title: Optional[str] = Field(None, min_length=1, description="Task title")
    category: Optional[TaskCategory] = Field(None, description="Task category")
    due_date: Optional[date] = Field(None, description="Due date (YYYY-MM-DD)")
    due_time: Optional[time] = Field(None, description="Time the user sets out (HH:MM)")
    location: Optional[str] = Field(None, description="Free-text location")
    notes: Optional[str] = Field(None, description="Task notes")
    estimated_travel_min: Optional[int] = Field(None, ge=0, description="Known base travel time in minutes")
    is_completed: Optional[bool] = Field(None, description="Completion flag")

    @field_validator("title", mode="before")
    @classmethod
    def _strip_title(cls, v):
        # Strip before the length check so whitespace-only titles are rejected
        return v.strip() if isinstance(v, str) else v

    class Config:
        """Pydantic configuration."""
        extra = "forbid"


class ProfileRequest(BaseModel):
    """Request model for creating or replacing a user profile."""
    age: Optional[int] = Field(None, ge=13, le=120, description="Age in years")
    mobility_level: MobilityLevel = Field(MobilityLevel.INDEPENDENT, description="Mobility level")
    health_conditions: List[str] = Field(default_factory=list, description="Health conditions")
    has_senior_id: bool = Field(False, description="Holds a senior citizen ID")
    has_pwd_id: bool = Field(False, description="Holds a PWD ID")
    preferred_transport: Optional[str] = Field(None, description="Preferred mode of transport")


# Response models
class ProfileResponse(BaseModel):
    """Response for profile lookups."""
    exists: bool
    user_id: str
    profile: Optional[UserProfile] = None


class WeatherResponse(BaseModel):
    """Response for weather lookups."""
    weather: WeatherSnapshot
    source: str
    is_fallback: bool


class TrafficResponse(BaseModel):
    """Response for traffic lookups."""
    traffic: TrafficSnapshot
    source: str
    is_fallback: bool


class MessageResponse(BaseModel):
    """Plain confirmation message."""
    message: str


def _context_fields(result: ContextResult) -> dict:
    return {"source": result.source.value, "is_fallback": result.is_fallback}


def _get_task_or_404(task_id: str) -> Task:
    task = tasks_store.get(task_id)
    if task is None:
        raise HTTPException(status_code=404, detail=f"Task {task_id} not found")
    return task


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "version": "0.1.0", "timestamp": datetime.utcnow().isoformat()}


@app.post("/tasks", response_model=Task, status_code=201)
def create_task(request: TaskCreateRequest, evaluator: TaskEvaluator = Depends(get_evaluator)):
    """Create a task, enrich it with context, and score and validate it."""
    task = create_task_base(
        user_id=request.user_id,
        title=request.title,
        due_date=request.due_date,
        category=request.category,
        due_time=request.due_time,
        location=request.location,
        notes=request.notes,
        estimated_travel_min=request.estimated_travel_min,
    )
    profile = profiles_store.get(request.user_id)
    task = evaluator.enrich_and_evaluate(task, profile, hint=request.feasibility_hint)
    tasks_store[task.id] = task
    logger.info(f"Created task {task.id} (score {task.priority_score}, feasible={task.feasibility.is_feasible})")
    return task


@app.get("/tasks", response_model=List[Task])
def list_tasks(user_id: Optional[str] = None):
    """List a user's tasks ordered by due date."""
    if not user_id:
        raise HTTPException(status_code=400, detail="user_id is required")
    return by_due_date([t for t in tasks_store.values() if t.user_id == user_id])


@app.get("/tasks/priority/high", response_model=List[Task])
def list_high_priority_tasks(user_id: Optional[str] = None):
    """List a user's open tasks scoring above 70, highest first."""
    if not user_id:
        raise HTTPException(status_code=400, detail="user_id is required")
    return high_priority_tasks([t for t in tasks_store.values() if t.user_id == user_id])


@app.get("/tasks/{task_id}", response_model=Task)
def get_task(task_id: str):
    """Get a task by ID."""
    return _get_task_or_404(task_id)


@app.get("/tasks/{task_id}/priority", response_model=ScoreBreakdown)
def explain_priority(task_id: str):
    """Break a task's priority score down into its components."""
    task = _get_task_or_404(task_id)
    return score_breakdown(task, task.weather_context, task.traffic_context, today=local_today())


@app.put("/tasks/{task_id}", response_model=Task)
def update_task(task_id: str, request: TaskUpdateRequest, evaluator: TaskEvaluator = Depends(get_evaluator)):
    """Update a task; re-evaluate it when its schedule, place or category changed."""
    existing = _get_task_or_404(task_id)
    changes = request.model_dump(exclude_unset=True)
    if "location" in changes and changes["location"] is not None:
        changes["location"] = changes["location"].strip() or None
    for required in ("title", "category", "due_date", "is_completed"):
        if required in changes and changes[required] is None:
            raise HTTPException(status_code=400, detail=f"{required} cannot be null")

    updated = Task(**{**existing.model_dump(), **changes, "updated_at": datetime.utcnow()})
    if needs_reevaluation(existing, updated):
        updated = evaluator.enrich_and_evaluate(updated, profiles_store.get(updated.user_id))
    tasks_store[task_id] = updated
    return updated


@app.patch("/tasks/{task_id}/complete", response_model=Task)
def complete_task(task_id: str):
    """Mark a task as completed."""
    task = _get_task_or_404(task_id)
    task = task.model_copy(update={"is_completed": True, "updated_at": datetime.utcnow()})
    tasks_store[task_id] = task
    return task


@app.delete("/tasks/{task_id}", response_model=MessageResponse)
def delete_task(task_id: str):
    """Delete a task."""
    _get_task_or_404(task_id)
    del tasks_store[task_id]
    return MessageResponse(message="Task deleted successfully")


@app.get("/weather/current", response_model=WeatherResponse)
def current_weather(location: Optional[str] = None, evaluator: TaskEvaluator = Depends(get_evaluator)):
    """Current weather at a location."""
    result = evaluator.context.get_current_weather(location)
    return WeatherResponse(weather=result.value, **_context_fields(result))


@app.get("/weather/forecast", response_model=WeatherResponse)
def weather_forecast(
    location: Optional[str] = None,
    forecast_date: Optional[date] = Query(None, alias="date"),
    evaluator: TaskEvaluator = Depends(get_evaluator),
):
    """Weather forecast for a location on a date."""
    if forecast_date is None:
        raise HTTPException(status_code=400, detail="date parameter is required")
    result = evaluator.context.get_weather(location, forecast_date)
    return WeatherResponse(weather=result.value, **_context_fields(result))


@app.get("/traffic/location", response_model=TrafficResponse)
def traffic_by_location(location: Optional[str] = None, evaluator: TaskEvaluator = Depends(get_evaluator)):
    """Traffic around a named location."""
    result = evaluator.context.get_traffic(location)
    return TrafficResponse(traffic=result.value, **_context_fields(result))


@app.get("/traffic/route", response_model=TrafficResponse)
def traffic_by_route(
    origin_lat: Optional[float] = Query(None),
    origin_lon: Optional[float] = Query(None),
    dest_lat: Optional[float] = Query(None),
    dest_lon: Optional[float] = Query(None),
    evaluator: TaskEvaluator = Depends(get_evaluator),
):
    """Traffic along a route between two coordinates."""
    if None in (origin_lat, origin_lon, dest_lat, dest_lon):
        raise HTTPException(status_code=400, detail="Origin and destination coordinates required")
    result = evaluator.context.get_route_traffic((origin_lat, origin_lon), (dest_lat, dest_lon))
    return TrafficResponse(traffic=result.value, **_context_fields(result))


@app.get("/profile/{user_id}", response_model=ProfileResponse)
def get_profile(user_id: str):
    """Get a user's profile."""
    profile = profiles_store.get(user_id)
    return ProfileResponse(exists=profile is not None, user_id=user_id, profile=profile)


@app.put("/profile/{user_id}", response_model=ProfileResponse)
def put_profile(user_id: str, request: ProfileRequest):
    """Create or replace a user's profile."""
    profile = UserProfile(user_id=user_id, **request.model_dump())
    profiles_store[user_id] = profile
    return ProfileResponse(exists=True, user_id=user_id, profile=profile)


@app.delete("/profile/{user_id}", response_model=MessageResponse)
def delete_profile(user_id: str):
    """Delete a user's profile."""
    if profiles_store.pop(user_id, None) is None:
        raise HTTPException(status_code=404, detail=f"Profile for {user_id} not found")
    return MessageResponse(message="Profile deleted successfully")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
