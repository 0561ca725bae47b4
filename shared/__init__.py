"""Shared module - models and utilities used by the recovery services"""

from shared.models.exercise import Exercise, DifficultyLevel
from shared.models.soreness import SorenessEntry, soreness_from_mapping

__all__ = [
    "Exercise",
    "DifficultyLevel",
    "SorenessEntry",
    "soreness_from_mapping",
]
