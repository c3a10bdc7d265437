"""Task evaluation facade for taskFit.

The single entry point task create/update handlers call. It pulls weather and
traffic context through the cache-backed context service, scores the task,
validates its schedule, and returns the task with all four derived fields
refreshed. Calling it twice within the cache window gives the same result.
"""

import logging
from datetime import date
from typing import Callable, List, Optional

from taskfit.config import local_today
from taskfit.context.service import ContextService
from taskfit.engine.feasibility import FeasibilityValidator
from taskfit.engine.scoring import score_task
from taskfit.models.task import Task, FeasibilityVerdict
from taskfit.models.user import UserProfile

logger = logging.getLogger(__name__)

# Fields whose change invalidates a task's derived fields
SCHEDULE_FIELDS = ("title", "due_date", "due_time", "category", "location", "estimated_travel_min")


class TaskEvaluator:
    """Enriches tasks with context, a priority score and a feasibility verdict."""

    def __init__(
        self,
        context: Optional[ContextService] = None,
        validator: Optional[FeasibilityValidator] = None,
        today: Callable[[], date] = local_today,
    ):
        self.context = context or ContextService()
        self.validator = validator or FeasibilityValidator()
        self._today = today

    def enrich_and_evaluate(
        self,
        task: Task,
        profile: Optional[UserProfile] = None,
        hint: Optional[FeasibilityVerdict] = None,
    ) -> Task:
        """Refresh a task's weather, traffic, priority score and feasibility.

        Args:
            task: Task to evaluate (not modified)
            profile: Owner's profile, if known
            hint: Verdict from another source, merged as a non-authoritative hint

        Returns:
            Copy of the task with ``weather_context``, ``traffic_context``,
            ``priority_score`` and ``feasibility`` populated
        """
        weather = self.context.get_weather(task.location, task.due_date)
        traffic = self.context.get_traffic(task.location)
        if weather.is_fallback or traffic.is_fallback:
            logger.info(
                f"Task {task.id} evaluated with fallback context "
                f"(weather={weather.is_fallback}, traffic={traffic.is_fallback})"
            )

        priority_score = score_task(task, weather.value, traffic.value, today=self._today())
        verdict = self.validator.validate(task, profile, weather.value, traffic.value, hint=hint)

        logger.debug(f"Task {task.id} scored {priority_score}, feasible={verdict.is_feasible}")
        return task.model_copy(
            update={
                "weather_context": weather.value,
                "traffic_context": traffic.value,
                "priority_score": priority_score,
                "feasibility": verdict,
            }
        )

    def evaluate_many(self, tasks: List[Task], profile: Optional[UserProfile] = None) -> List[Task]:
        """Evaluate several tasks for the same user, preserving order."""
        return [self.enrich_and_evaluate(task, profile) for task in tasks]


def needs_reevaluation(old: Task, new: Task) -> bool:
    """Check whether an update touched any field the derived values depend on."""
    return any(getattr(old, name) != getattr(new, name) for name in SCHEDULE_FIELDS)
