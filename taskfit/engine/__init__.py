"""Feasibility and priority engine for taskFit."""

from taskfit.engine.calendar_rules import CalendarRules, CalendarConfig, VenueClass, VenueHours
from taskfit.engine.scoring import score_task, score_breakdown, ScoreBreakdown
from taskfit.engine.feasibility import FeasibilityValidator, VerdictBuilder, mobility_factor
from taskfit.engine.ranking import rank_tasks, high_priority_tasks
from taskfit.engine.evaluator import TaskEvaluator, needs_reevaluation

__all__ = [
    "CalendarRules",
    "CalendarConfig",
    "VenueClass",
    "VenueHours",
    "score_task",
    "score_breakdown",
    "ScoreBreakdown",
    "FeasibilityValidator",
    "VerdictBuilder",
    "mobility_factor",
    "rank_tasks",
    "high_priority_tasks",
    "TaskEvaluator",
    "needs_reevaluation",
]
