"""Catalog-based exercise selection

Filter order: equipment -> target muscles -> (shuffle) -> intensity.
The target-muscle and intensity filters fall back to their input when they
would leave too little to build a session from.
"""

import logging
import random
from typing import Callable, Dict, List, Optional, Sequence

from langsmith import traceable

from shared.models import Exercise
from recovery_recommendation.services.exercise_catalog import ExerciseCatalog

logger = logging.getLogger(__name__)

SOURCE_CATEGORIES = ("mobility", "recovery", "strength")

# focus area -> target muscle tags
TARGET_MUSCLES: Dict[str, List[str]] = {
    "full_body": ["core", "glutes", "hamstrings", "quads", "shoulders", "lower_back", "upper_back", "neck"],
    "upper_body": ["shoulders", "upper_back", "chest", "biceps", "triceps", "wrists", "forearms"],
    "lower_body": ["glutes", "hamstrings", "quads", "calves", "ankles", "hip_flexors", "adductors"],
    "back": ["lower_back", "upper_back", "spine"],
    "shoulders": ["shoulders", "rear_delts", "rotator_cuff"],
    "hips": ["hips", "glutes", "hip_flexors"],
    "legs": ["quads", "hamstrings", "calves", "adductors"],
}

DIFFICULTY_RANK = {"advanced": 0, "intermediate": 1, "beginner": 2}

MIN_TARGETED = 3
MIN_BEGINNER = 3

Shuffler = Callable[[List[Exercise]], None]


def normalize_equipment(equipment: Optional[Sequence[str]]) -> List[str]:
    """User equipment without 'none' and with the 'foam_' prefix stripped"""
    normalized = []
    for eq in equipment or []:
        eq = eq.strip().lower()
        if not eq or eq == "none":
            continue
        if eq.startswith("foam_"):
            eq = eq[len("foam_"):]
        normalized.append(eq)
    return normalized


def target_muscles_for(focus_areas: Sequence[str]) -> List[str]:
    muscles: List[str] = []
    for area in focus_areas:
        for muscle in TARGET_MUSCLES.get(area, []):
            if muscle not in muscles:
                muscles.append(muscle)
    return muscles


class ExerciseSelector:
    """Select catalog exercises for a recovery session"""

    def __init__(self, catalog: ExerciseCatalog, shuffle: Optional[Shuffler] = None):
        """
        Args:
            catalog: exercise catalog
            shuffle: in-place shuffle (default: random.Random().shuffle)
        """
        self._catalog = catalog
        self._shuffle = shuffle or random.Random().shuffle

    async def load_candidates(self) -> List[Exercise]:
        """Union of the mobility, recovery and strength categories

        Catalog errors propagate; callers decide how to degrade.
        """
        exercises: List[Exercise] = []
        seen = set()
        for category in SOURCE_CATEGORIES:
            for ex in await self._catalog.get_exercises_by_category(category):
                if str(ex.id) in seen:
                    continue
                seen.add(str(ex.id))
                exercises.append(ex)
        return exercises

    def filter_by_equipment(
        self, exercises: List[Exercise], equipment: Sequence[str]
    ) -> List[Exercise]:
        """Keep exercises the user can do with their equipment

        Equipment-free exercises always pass, so there is no wider set to
        fall back to: an empty result means the catalog has nothing usable.
        """
        owned = set(normalize_equipment(equipment))
        return [
            ex for ex in exercises
            if ex.needs_no_equipment
            or owned.intersection(eq.lower() for eq in ex.equipment_required)
        ]

    def filter_by_focus(
        self, exercises: List[Exercise], focus_areas: Sequence[str]
    ) -> List[Exercise]:
        """Keep exercises hitting the focus areas (skipped for full_body)"""
        if "full_body" in focus_areas:
            return exercises

        muscles = set(target_muscles_for(focus_areas))
        if not muscles:
            return exercises

        targeted = [ex for ex in exercises if muscles.intersection(ex.target_muscles)]
        if len(targeted) < MIN_TARGETED:
            logger.info(
                "Only %d exercises match %s, keeping the wider set",
                len(targeted), list(focus_areas),
            )
            return exercises
        return targeted

    def apply_intensity(self, exercises: List[Exercise], intensity: str) -> List[Exercise]:
        """light: beginner only (if enough); intense: hardest first"""
        if intensity == "light":
            beginner = [ex for ex in exercises if ex.difficulty_level == "beginner"]
            if len(beginner) >= MIN_BEGINNER:
                return beginner
            return exercises

        if intensity == "intense":
            return sorted(exercises, key=lambda ex: DIFFICULTY_RANK.get(ex.difficulty_level, 1))

        return exercises

    @traceable(name="recovery_exercise_selection")
    def select(
        self,
        exercises: List[Exercise],
        focus_areas: Sequence[str],
        intensity: str,
        equipment: Sequence[str],
    ) -> List[Exercise]:
        """
        Run every filter in order

        Args:
            exercises: catalog candidates
            focus_areas: requested focus areas
            intensity: light / moderate / intense
            equipment: user equipment

        Returns:
            ordered candidate list
        """
        selected = self.filter_by_equipment(exercises, equipment)
        logger.debug("After equipment filtering: %d exercises", len(selected))

        selected = self.filter_by_focus(selected, focus_areas)
        logger.debug("After target area filtering: %d exercises", len(selected))

        selected = list(selected)
        self._shuffle(selected)
        return self.apply_intensity(selected, intensity)
