import copy

import pytest

from shared.models import Exercise
from recovery_recommendation.services import (
    CacheTTLs,
    CompletionError,
    InMemoryExerciseCatalog,
    RateLimiter,
    RecommendationService,
    ResponseCache,
    default_windows,
)


class FakeClock:
    """Manually advanced time source"""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeCompletionClient:
    """Returns a canned JSON object (or raises it) and records every call"""

    def __init__(self, response=None):
        self.response = response
        self.calls = []

    async def complete_json(self, messages):
        self.calls.append(messages)
        if isinstance(self.response, Exception):
            raise self.response
        return copy.deepcopy(self.response)


class FailingCatalog:
    async def get_exercises_by_category(self, category):
        raise RuntimeError("catalog offline")

    async def get_exercises_by_equipment(self, equipment):
        raise RuntimeError("catalog offline")

    async def get_exercises_by_difficulty(self, difficulty_level):
        raise RuntimeError("catalog offline")


def no_shuffle(items):
    return None


SAMPLE_EXERCISES = [
    Exercise(id=1, name="Cat-Cow Stretch", description="Spinal flexion and extension",
             category="mobility", equipment_required=[], target_muscles=["lower_back", "upper_back"],
             difficulty_level="beginner", instructions=["Start on hands and knees", "Arch and round"]),
    Exercise(id=2, name="Thread the Needle", description="Thoracic rotation",
             category="mobility", equipment_required=["none"], target_muscles=["upper_back", "shoulders"],
             difficulty_level="beginner", instructions=["Start on hands and knees", "Reach under"]),
    Exercise(id=3, name="90/90 Hip Switch", description="Hip rotation drill",
             category="mobility", equipment_required=[], target_muscles=["hips", "glutes"],
             difficulty_level="intermediate"),
    Exercise(id=4, name="Foam Roll Quads", description="Quad release",
             category="recovery", equipment_required=["roller"], target_muscles=["quads"],
             difficulty_level="beginner"),
    Exercise(id=5, name="Band Pull-Apart", description="Rear shoulder activation",
             category="strength", equipment_required=["band"], target_muscles=["rear_delts", "shoulders"],
             difficulty_level="beginner"),
    Exercise(id=6, name="Copenhagen Plank", description="Adductor plank",
             category="strength", equipment_required=["bench"], target_muscles=["adductors", "core"],
             difficulty_level="advanced"),
    Exercise(id=7, name="Single-Leg Romanian Deadlift", description="Posterior chain",
             category="strength", equipment_required=[], target_muscles=["hamstrings", "glutes"],
             difficulty_level="intermediate"),
    Exercise(id=8, name="Scapular Wall Slides", description="Shoulder blade control",
             category="mobility", equipment_required=[], target_muscles=["shoulders", "rotator_cuff"],
             difficulty_level="beginner"),
    Exercise(id=9, name="Pigeon Stretch", description="Not loaded by the selector",
             category="stretching", equipment_required=[], target_muscles=["hips"],
             difficulty_level="beginner"),
]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sample_catalog():
    return InMemoryExerciseCatalog(SAMPLE_EXERCISES)


@pytest.fixture
def empty_catalog():
    return InMemoryExerciseCatalog()


@pytest.fixture
def make_service(clock, sample_catalog):
    """Factory for a service with fresh cache and limiter"""

    def _make(client=None, catalog=None, rate_limiter=None):
        return RecommendationService(
            cache=ResponseCache(default_ttl=3600, clock=clock),
            rate_limiter=rate_limiter or RateLimiter(default_windows(10, 100), clock=clock),
            catalog=catalog if catalog is not None else sample_catalog,
            completion_client=client or FakeCompletionClient(CompletionError("offline")),
            shuffle=no_shuffle,
            ttls=CacheTTLs(
                recommendation=12 * 3600,
                recovery_plan=24 * 3600,
                movement_analysis=7 * 24 * 3600,
                feedback_analysis=30 * 24 * 3600,
            ),
        )

    return _make


@pytest.fixture
def exhausted_limiter(clock):
    limiter = RateLimiter(default_windows(1, 100), clock=clock)
    assert limiter.try_acquire()
    return limiter
