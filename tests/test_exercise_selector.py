import pytest

from shared.models import Exercise
from recovery_recommendation.services import ExerciseSelector, InMemoryExerciseCatalog
from recovery_recommendation.services.exercise_selector import normalize_equipment

from conftest import SAMPLE_EXERCISES, no_shuffle


def ids(exercises):
    return [ex.id for ex in exercises]


@pytest.fixture
def selector(sample_catalog):
    return ExerciseSelector(sample_catalog, shuffle=no_shuffle)


@pytest.fixture
def candidates():
    return [ex for ex in SAMPLE_EXERCISES if ex.category != "stretching"]


@pytest.mark.asyncio
async def test_load_candidates_unions_source_categories(selector):
    loaded = await selector.load_candidates()
    # mobility, then recovery, then strength; stretching is not a source
    assert ids(loaded) == [1, 2, 3, 8, 4, 5, 6, 7]


@pytest.mark.asyncio
async def test_load_candidates_dedupes_by_id():
    shared = Exercise(id="x", name="Everywhere", category="mobility")

    class RepeatingCatalog:
        async def get_exercises_by_category(self, category):
            return [shared]

    loaded = await ExerciseSelector(RepeatingCatalog(), shuffle=no_shuffle).load_candidates()
    assert ids(loaded) == ["x"]


def test_normalize_equipment():
    assert normalize_equipment(["none"]) == []
    assert normalize_equipment(["Foam_Roller", " band ", ""]) == ["roller", "band"]
    assert normalize_equipment(None) == []


def test_no_equipment_keeps_equipment_free_exercises(selector, candidates):
    result = selector.filter_by_equipment(candidates, ["none"])
    assert ids(result) == [1, 2, 3, 7, 8]


def test_owned_equipment_adds_matching_exercises(selector, candidates):
    assert ids(selector.filter_by_equipment(candidates, ["foam_roller"])) == [1, 2, 3, 4, 7, 8]
    assert ids(selector.filter_by_equipment(candidates, ["band", "bench"])) == [1, 2, 3, 5, 6, 7, 8]


def test_equipment_filter_has_no_wider_fallback(selector):
    gear_only = [ex for ex in SAMPLE_EXERCISES if not ex.needs_no_equipment]
    assert selector.filter_by_equipment(gear_only, ["none"]) == []
    assert ids(selector.filter_by_equipment(gear_only, ["bench"])) == [6]


def test_focus_filter_keeps_targeted_exercises(selector, candidates):
    assert ids(selector.filter_by_focus(candidates, ["shoulders"])) == [2, 5, 8]
    assert ids(selector.filter_by_focus(candidates, ["legs"])) == [4, 6, 7]


def test_focus_filter_keeps_input_when_too_few_match(selector, candidates):
    # only Cat-Cow and Thread the Needle hit the back
    assert selector.filter_by_focus(candidates, ["back"]) == candidates


def test_full_body_skips_focus_filter(selector, candidates):
    assert selector.filter_by_focus(candidates, ["full_body", "back"]) == candidates


def test_light_intensity_prefers_beginner(selector, candidates):
    result = selector.apply_intensity(candidates, "light")
    assert all(ex.difficulty_level == "beginner" for ex in result)
    assert ids(result) == [1, 2, 4, 5, 8]


def test_light_intensity_keeps_input_with_few_beginners(selector, candidates):
    hard = [ex for ex in candidates if ex.difficulty_level != "beginner"]
    hard.append(candidates[0])
    assert selector.apply_intensity(hard, "light") == hard


def test_select_shuffles_before_intense_ordering(sample_catalog, candidates):
    selector = ExerciseSelector(sample_catalog, shuffle=lambda items: items.reverse())
    result = selector.select(candidates, ["full_body"], "intense", ["roller", "band", "bench"])
    # reversed -> [8, 7, 6, 5, 4, 3, 2, 1], then stable sort hardest first
    assert ids(result) == [6, 7, 3, 8, 5, 4, 2, 1]


def test_select_does_not_mutate_input(sample_catalog, candidates):
    before = list(candidates)
    selector = ExerciseSelector(sample_catalog, shuffle=lambda items: items.reverse())
    selector.select(candidates, ["full_body"], "moderate", ["none"])
    assert candidates == before


@pytest.mark.asyncio
async def test_empty_catalog_gives_no_candidates():
    selector = ExerciseSelector(InMemoryExerciseCatalog(), shuffle=no_shuffle)
    assert await selector.load_candidates() == []
