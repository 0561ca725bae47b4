"""Recovery Recommendation Services"""

from .response_cache import ResponseCache, CacheSweeper, compute_key
from .rate_limiter import RateLimiter, RateWindow, default_windows
from .exercise_catalog import (
    CatalogUnavailableError,
    ExerciseCatalog,
    InMemoryExerciseCatalog,
    JsonExerciseCatalog,
)
from .exercise_selector import ExerciseSelector
from .fallback_plan import FallbackPlanGenerator, task_count_for
from .completion_client import CompletionClient, CompletionError, OpenAICompletionClient
from .recommendation_service import RecommendationService, CacheTTLs

__all__ = [
    "ResponseCache",
    "CacheSweeper",
    "compute_key",
    "RateLimiter",
    "RateWindow",
    "default_windows",
    "CatalogUnavailableError",
    "ExerciseCatalog",
    "InMemoryExerciseCatalog",
    "JsonExerciseCatalog",
    "ExerciseSelector",
    "FallbackPlanGenerator",
    "task_count_for",
    "CompletionClient",
    "CompletionError",
    "OpenAICompletionClient",
    "RecommendationService",
    "CacheTTLs",
]
