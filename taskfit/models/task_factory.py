"""Task creation factory for taskFit.

This module centralizes task creation logic so every entry point builds
tasks with the same defaults. Derived fields (score, context, feasibility)
start empty and are filled in by the evaluator.
"""

import uuid
from datetime import date, datetime, time
from typing import Optional, Dict, Any, Union

from taskfit.models.task import Task, TaskCategory


def parse_due_date(value: Union[str, date]) -> date:
    """Parse an ISO due date.

    Args:
        value: ``YYYY-MM-DD`` string or a date

    Returns:
        The calendar date

    Raises:
        ValueError: If the value cannot be parsed into a calendar date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError as e:
        raise ValueError(f"Invalid due_date {value!r}: expected YYYY-MM-DD") from e


def create_task_defaults() -> Dict[str, Any]:
    """Get default task values as a dictionary."""
    return {
        "notes": None,
        "category": TaskCategory.OTHER,
        "due_time": None,
        "location": None,
        "estimated_travel_min": None,
        "is_completed": False,
    }


def create_task_base(
    user_id: str,
    title: str,
    due_date: Union[str, date],
    category: Optional[TaskCategory] = None,
    due_time: Optional[time] = None,
    location: Optional[str] = None,
    notes: Optional[str] = None,
    estimated_travel_min: Optional[int] = None,
    is_completed: Optional[bool] = None,
) -> Task:
    """Create a task with defaults, allowing overrides.

    Args:
        user_id: User ID who owns this task (required)
        title: Task title (required)
        due_date: Due date as a date or ISO string (required)
        category: Task category (defaults to OTHER)
        due_time: Time the user sets out for the task
        location: Free-text location
        notes: Task notes
        estimated_travel_min: Known base travel time in minutes
        is_completed: Completion flag (defaults to False)

    Returns:
        Task object with defaults applied
    """
    now = datetime.utcnow()
    defaults = create_task_defaults()

    location = location.strip() if location else None

    return Task(
        id=str(uuid.uuid4()),
        user_id=user_id,
        title=title.strip(),
        notes=notes if notes is not None else defaults["notes"],
        category=category if category is not None else defaults["category"],
        due_date=parse_due_date(due_date),
        due_time=due_time if due_time is not None else defaults["due_time"],
        location=location or defaults["location"],
        estimated_travel_min=estimated_travel_min if estimated_travel_min is not None else defaults["estimated_travel_min"],
        is_completed=is_completed if is_completed is not None else defaults["is_completed"],
        created_at=now,
        updated_at=now,
    )
