import pytest

from recovery_recommendation.models import RecoveryTask
from recovery_recommendation.services import (
    ExerciseSelector,
    FallbackPlanGenerator,
    InMemoryExerciseCatalog,
    task_count_for,
)
from recovery_recommendation.services.fallback_plan import join_description, reconcile_durations

from conftest import FailingCatalog, no_shuffle


def generator_for(catalog):
    return FallbackPlanGenerator(ExerciseSelector(catalog, shuffle=no_shuffle))


def titles(plan):
    return [t.title for t in plan.tasks]


def durations(plan):
    return [t.duration_minutes for t in plan.tasks]


@pytest.mark.parametrize(
    "minutes, expected",
    [(5, 3), (10, 3), (15, 4), (20, 4), (25, 5), (30, 5), (35, 6), (45, 6), (60, 7), (180, 7)],
)
def test_task_count_by_session_length(minutes, expected):
    assert task_count_for(minutes) == expected


@pytest.mark.asyncio
@pytest.mark.parametrize("minutes", [5, 10, 15, 20, 25, 30, 35, 45, 60, 90, 180])
async def test_durations_add_up_on_empty_catalog(minutes):
    plan = await generator_for(InMemoryExerciseCatalog()).generate(time_available=minutes)
    assert len(plan.tasks) == task_count_for(minutes)
    assert plan.total_minutes == minutes
    assert all(t.duration_minutes >= 1 for t in plan.tasks)


@pytest.mark.asyncio
@pytest.mark.parametrize("minutes", [5, 15, 30, 45, 60])
async def test_durations_add_up_on_catalog(sample_catalog, minutes):
    plan = await generator_for(sample_catalog).generate(
        focus_areas=["full_body"], time_available=minutes, equipment=["none"]
    )
    assert len(plan.tasks) == task_count_for(minutes)
    assert plan.total_minutes == minutes
    assert plan.tasks[0].title == "Dynamic Warm-Up"


@pytest.mark.asyncio
async def test_light_full_body_on_empty_catalog():
    plan = await generator_for(InMemoryExerciseCatalog()).generate(
        focus_areas=["full_body"], time_available=15, intensity="light", equipment=["none"]
    )

    assert plan.title == "Full Body Light Recovery"
    assert "your entire body" in plan.description
    assert titles(plan) == [
        "Dynamic Warm-Up",
        "Shoulder & Chest Release",
        "Hip Mobility",
        "Cool-Down Stretches",
    ]
    assert durations(plan) == [4, 4, 4, 3]


@pytest.mark.asyncio
async def test_failing_catalog_uses_routine_library():
    plan = await generator_for(FailingCatalog()).generate(time_available=15)
    assert len(plan.tasks) == 4
    assert plan.tasks[0].title == "Dynamic Warm-Up"
    assert plan.tasks[-1].title == "Cool-Down Stretches"
    assert plan.total_minutes == 15


@pytest.mark.asyncio
async def test_narrow_focus_is_padded_before_cool_down():
    plan = await generator_for(InMemoryExerciseCatalog()).generate(
        focus_areas=["back"], time_available=15
    )
    assert titles(plan) == [
        "Dynamic Warm-Up",
        "Back Mobility Flow",
        "Shoulder & Chest Release",
        "Cool-Down Stretches",
    ]
    assert plan.title == "Back Moderate Recovery"


@pytest.mark.asyncio
async def test_catalog_plan_uses_selected_exercises(sample_catalog):
    plan = await generator_for(sample_catalog).generate(
        focus_areas=["shoulders"], time_available=30, intensity="moderate", equipment=["band"]
    )

    assert titles(plan) == [
        "Dynamic Warm-Up",
        "Thread the Needle",
        "Scapular Wall Slides",
        "Band Pull-Apart",
        "Cool-Down Stretches",
    ]
    assert durations(plan) == [4, 8, 8, 7, 3]
    assert plan.title == "Shoulders Moderate Recovery"

    needle = plan.tasks[1]
    assert needle.category == "mobility"
    assert needle.description.startswith("Thoracic rotation. Start on hands and knees. Reach under")
    assert needle.description.endswith("Adjust intensity as needed based on your recovery needs.")
    assert not needle.is_completed


@pytest.mark.asyncio
async def test_equipment_filter_respected(sample_catalog):
    plan = await generator_for(sample_catalog).generate(
        focus_areas=["full_body"], time_available=60, equipment=["none"]
    )
    assert "Band Pull-Apart" not in titles(plan)
    assert "Copenhagen Plank" not in titles(plan)
    assert "Foam Roll Quads" not in titles(plan)


def test_reconcile_adds_shortfall_round_robin():
    tasks = [RecoveryTask(title=str(i), description="", duration_minutes=2) for i in range(3)]
    reconcile_durations(tasks, 10)
    assert [t.duration_minutes for t in tasks] == [4, 3, 3]


def test_reconcile_trims_surplus_from_latest():
    tasks = [
        RecoveryTask(title="a", description="", duration_minutes=2),
        RecoveryTask(title="b", description="", duration_minutes=5),
        RecoveryTask(title="c", description="", duration_minutes=5),
    ]
    reconcile_durations(tasks, 10)
    assert [t.duration_minutes for t in tasks] == [2, 4, 4]


def test_reconcile_never_goes_below_one_minute():
    tasks = [RecoveryTask(title=str(i), description="", duration_minutes=1) for i in range(3)]
    reconcile_durations(tasks, 2)
    assert [t.duration_minutes for t in tasks] == [1, 1, 1]


def test_join_description_skips_empty_parts():
    assert join_description("Hip opener.", "Sit tall") == "Hip opener. Sit tall"
    assert join_description("  ", "Sit tall") == "Sit tall"
    assert join_description("Hip opener", "") == "Hip opener"
