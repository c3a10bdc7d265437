"""Weather and traffic context for taskFit."""

from taskfit.context.cache import ContextCache, ContextResult, ContextSource
from taskfit.context.service import ContextService

__all__ = [
    "ContextCache",
    "ContextResult",
    "ContextSource",
    "ContextService",
]
