"""Ranking logic for taskFit.

Orders tasks so the most urgent and consequential ones surface first.
"""

from datetime import time
from typing import List

from taskfit.models.task import Task
from taskfit.models.constants import HIGH_PRIORITY_THRESHOLD


def rank_tasks(tasks: List[Task]) -> List[Task]:
    """Rank tasks by priority.

    Tasks are sorted:
    1. Open tasks before completed ones
    2. By priority score (highest first)
    3. By due date (earliest first)
    4. By due time (earliest first; tasks without a time go last for the day)

    This function is deterministic - same inputs always produce same outputs.

    Args:
        tasks: List of tasks to rank

    Returns:
        New list of tasks sorted by priority
    """
    return sorted(tasks, key=_rank_key)


def _rank_key(task: Task) -> tuple:
    due_time = task.due_time if task.due_time is not None else time.max
    return (task.is_completed, -task.priority_score, task.due_date, task.due_time is None, due_time)


def high_priority_tasks(tasks: List[Task], threshold: int = HIGH_PRIORITY_THRESHOLD) -> List[Task]:
    """Open tasks scoring above ``threshold``, highest score first."""
    return rank_tasks([t for t in tasks if not t.is_completed and t.priority_score > threshold])


def by_due_date(tasks: List[Task]) -> List[Task]:
    """Tasks ordered by due date, then due time."""
    return sorted(
        tasks,
        key=lambda t: (t.due_date, t.due_time is None, t.due_time or time.max),
    )
