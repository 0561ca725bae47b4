"""Shared models"""

from .exercise import Exercise, DifficultyLevel
from .soreness import SorenessEntry, ensure_unique_areas, soreness_from_mapping

__all__ = [
    "Exercise",
    "DifficultyLevel",
    "SorenessEntry",
    "soreness_from_mapping",
    "ensure_unique_areas",
]
