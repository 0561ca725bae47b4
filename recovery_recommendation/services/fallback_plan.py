"""Local recovery plan generator

Used when the LLM is rate limited, unreachable, or returns an unusable
plan. Output is deterministic given the catalog contents and the injected
shuffle.

Rules:
1. Task count by session length (warm-up included)
   <=10 min: 3 / <=20: 4 / <=30: 5 / <=45: 6 / longer: 7
2. Dynamic Warm-Up first, then catalog exercises
3. Empty or failing catalog -> fixed routine library + Cool-Down Stretches
4. Durations always add up to the session length
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from langsmith import traceable

from shared.models import Exercise
from recovery_recommendation.models.output import RecoveryPlan, RecoveryTask
from recovery_recommendation.services.exercise_selector import ExerciseSelector

logger = logging.getLogger(__name__)

WARM_UP_MINUTES = 2
COOL_DOWN_MINUTES = 2


@dataclass(frozen=True)
class Routine:
    """Hardcoded routine used when the catalog is unavailable"""
    title: str
    description: str
    category: str
    focus_areas: Tuple[str, ...]

    def to_task(self, minutes: int) -> RecoveryTask:
        return RecoveryTask(
            title=self.title,
            description=self.description,
            category=self.category,
            duration_minutes=minutes,
        )


WARM_UP = Routine(
    title="Dynamic Warm-Up",
    description=(
        "Perform a series of gentle movements to prepare your body: arm circles, "
        "leg swings, torso rotations, and gentle neck rolls. Perform each movement "
        "for 15-20 seconds."
    ),
    category="mobility",
    focus_areas=(),
)

COOL_DOWN = Routine(
    title="Cool-Down Stretches",
    description=(
        "Perform a series of static stretches for all major muscle groups. Hold each "
        "position for 30 seconds, focusing on proper form and gentle intensity."
    ),
    category="stretching",
    focus_areas=(),
)

ROUTINE_LIBRARY: Tuple[Routine, ...] = (
    Routine(
        title="Shoulder & Chest Release",
        description=(
            "Perform arm circles forward and backward. Then, clasp hands behind back "
            "for a gentle chest stretch. Hold each stretch for 20-30 seconds."
        ),
        category="stretching",
        focus_areas=("upper_body", "full_body"),
    ),
    Routine(
        title="Lower Body Recovery",
        description=(
            "Perform gentle hamstring stretches, quad stretches, and calf stretches. "
            "Hold each position for 30 seconds and repeat on both sides."
        ),
        category="stretching",
        focus_areas=("lower_body", "legs", "full_body"),
    ),
    Routine(
        title="Back Mobility Flow",
        description=(
            "Perform cat-cow stretches, gentle spinal twists, and child's pose. Move "
            "slowly with controlled movement to improve spinal mobility."
        ),
        category="mobility",
        focus_areas=("back", "full_body"),
    ),
    Routine(
        title="Shoulder Mobility Routine",
        description=(
            "Perform shoulder rolls, arm circles, and shoulder stretches. Move slowly "
            "through each motion focusing on proper technique."
        ),
        category="mobility",
        focus_areas=("shoulders", "upper_body", "full_body"),
    ),
    Routine(
        title="Hip Mobility",
        description=(
            "Perform hip circles, lateral lunges, and hip flexor stretches. Move "
            "through a full range of motion on each exercise."
        ),
        category="mobility",
        focus_areas=("hips", "lower_body", "full_body"),
    ),
)


def task_count_for(time_available: int) -> int:
    """Number of tasks (warm-up included) for a session length"""
    if time_available <= 10:
        return 3
    elif time_available <= 20:
        return 4
    elif time_available <= 30:
        return 5
    elif time_available <= 45:
        return 6
    else:
        return 7


def _area_label(area: str) -> str:
    return area.replace("_", " ").title()


def plan_title(focus_areas: Sequence[str], intensity: str) -> str:
    if "full_body" in focus_areas:
        areas = "Full Body"
    else:
        areas = " & ".join(_area_label(a) for a in focus_areas)
    return f"{areas} {intensity.capitalize()} Recovery"


def plan_description(focus_areas: Sequence[str], intensity: str, time_available: int) -> str:
    if "full_body" in focus_areas:
        target = "your entire body"
    else:
        target = " and ".join(a.replace("_", " ") for a in focus_areas)
    return (
        f"A {intensity} intensity recovery session targeting {target}. "
        f"This {time_available}-minute recovery flow will help improve mobility, "
        "reduce soreness, and enhance your performance."
    )


def join_description(description: str, instructions: str) -> str:
    """Join description and instructions, skipping whichever part is empty"""
    description = description.strip().rstrip(".")
    if description and instructions:
        return f"{description}. {instructions}"
    return description or instructions


def exercise_task(exercise: Exercise, minutes: int) -> RecoveryTask:
    """Catalog exercise -> plan task"""
    instructions = exercise.instructions_text or (
        f"Perform {exercise.name} focusing on proper form and controlled movement."
    )
    description = join_description(exercise.description, instructions)
    return RecoveryTask(
        title=exercise.name,
        description=f"{description.rstrip('.')}. Adjust intensity as needed based on your recovery needs.",
        category=exercise.category or "recovery",
        duration_minutes=minutes,
    )


def reconcile_durations(tasks: List[RecoveryTask], time_available: int) -> None:
    """Make task durations add up to time_available

    Missing minutes go to the earliest tasks one at a time (round-robin);
    surplus minutes come off the latest tasks, never below one minute.
    """
    if not tasks:
        return

    shortfall = time_available - sum(t.duration_minutes for t in tasks)
    i = 0
    while shortfall > 0:
        tasks[i % len(tasks)].duration_minutes += 1
        shortfall -= 1
        i += 1

    while shortfall < 0:
        trimmed = False
        for task in reversed(tasks):
            if shortfall == 0:
                break
            if task.duration_minutes > 1:
                task.duration_minutes -= 1
                shortfall += 1
                trimmed = True
        if not trimmed:
            break


class FallbackPlanGenerator:
    """Deterministic recovery plan builder"""

    def __init__(self, selector: ExerciseSelector):
        """
        Args:
            selector: catalog exercise selector (owns the shuffle)
        """
        self._selector = selector

    @traceable(name="fallback_recovery_plan")
    async def generate(
        self,
        focus_areas: Optional[Sequence[str]] = None,
        time_available: int = 15,
        intensity: str = "moderate",
        equipment: Optional[Sequence[str]] = None,
    ) -> RecoveryPlan:
        """
        Build a recovery plan without the LLM

        Args:
            focus_areas: focus areas (default: full_body)
            time_available: session length (minutes)
            intensity: light / moderate / intense
            equipment: user equipment

        Returns:
            RecoveryPlan
        """
        focus_areas = list(focus_areas or ["full_body"])
        equipment = list(equipment or [])
        task_count = task_count_for(time_available)
        minutes = time_available // task_count

        exercises: List[Exercise] = []
        catalog_ok = True
        try:
            exercises = await self._selector.load_candidates()
        except Exception:
            logger.exception("Error getting exercises from catalog, using default routines")
            catalog_ok = False

        if catalog_ok and exercises:
            logger.info("Using catalog exercises for fallback plan")
            selected = self._selector.select(exercises, focus_areas, intensity, equipment)
            tasks = [WARM_UP.to_task(WARM_UP_MINUTES)]
            tasks += [exercise_task(ex, minutes) for ex in selected[: task_count - 1]]
            used = set()
            if len(tasks) < task_count:
                logger.info("Catalog short of exercises, padding with default routines")
                self._pad(tasks, task_count, focus_areas, minutes, used, cool_down=True)
        else:
            if catalog_ok:
                logger.info("No exercises in catalog, using default routines")
            tasks = [WARM_UP.to_task(WARM_UP_MINUTES)]
            used = set()
            for routine in ROUTINE_LIBRARY:
                if set(routine.focus_areas).intersection(focus_areas):
                    tasks.append(routine.to_task(minutes))
                    used.add(routine.title)
            tasks.append(COOL_DOWN.to_task(COOL_DOWN_MINUTES))

            # keep first and last
            while len(tasks) > task_count:
                del tasks[len(tasks) // 2]
            if len(tasks) < task_count:
                self._pad(tasks, task_count, focus_areas, minutes, used, cool_down=False)

        reconcile_durations(tasks, time_available)

        return RecoveryPlan(
            title=plan_title(focus_areas, intensity),
            description=plan_description(focus_areas, intensity, time_available),
            tasks=tasks,
        )

    def _pad(
        self,
        tasks: List[RecoveryTask],
        task_count: int,
        focus_areas: Sequence[str],
        minutes: int,
        used: set,
        cool_down: bool,
    ) -> None:
        """Fill up to task_count with unused routines

        Focus-matching routines go first. With cool_down=True the list is
        closed by Cool-Down Stretches; otherwise routines are inserted before
        the existing last task.
        """
        matching = [r for r in ROUTINE_LIBRARY if set(r.focus_areas).intersection(focus_areas)]
        others = [r for r in ROUTINE_LIBRARY if r not in matching]
        pool = [r for r in matching + others if r.title not in used]

        reserve = 1 if cool_down else 0
        for routine in pool:
            if len(tasks) >= task_count - reserve:
                break
            task = routine.to_task(minutes)
            if cool_down:
                tasks.append(task)
            else:
                tasks.insert(len(tasks) - 1, task)
            used.add(routine.title)

        if cool_down and len(tasks) < task_count:
            tasks.append(COOL_DOWN.to_task(COOL_DOWN_MINUTES))
