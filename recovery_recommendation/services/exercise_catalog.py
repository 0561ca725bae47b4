"""Exercise catalog access

The catalog is owned by the persistence layer; the recovery service only
needs read access by category, equipment and difficulty.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Protocol

from shared.models import Exercise
from recovery_recommendation.config import settings

logger = logging.getLogger(__name__)


class CatalogUnavailableError(RuntimeError):
    """The exercise catalog could not be loaded"""


class ExerciseCatalog(Protocol):
    """Read-only exercise lookup"""

    async def get_exercises_by_category(self, category: str) -> List[Exercise]:
        ...

    async def get_exercises_by_equipment(self, equipment: str) -> List[Exercise]:
        ...

    async def get_exercises_by_difficulty(self, difficulty_level: str) -> List[Exercise]:
        ...


class InMemoryExerciseCatalog:
    """Catalog backed by a list of exercises"""

    def __init__(self, exercises: Optional[Iterable[Exercise]] = None):
        self._exercises: List[Exercise] = list(exercises or [])

    def all(self) -> List[Exercise]:
        return list(self._exercises)

    async def get_exercises_by_category(self, category: str) -> List[Exercise]:
        return [ex for ex in self.all() if ex.category == category]

    async def get_exercises_by_equipment(self, equipment: str) -> List[Exercise]:
        return [ex for ex in self.all() if equipment in ex.equipment_required]

    async def get_exercises_by_difficulty(self, difficulty_level: str) -> List[Exercise]:
        return [ex for ex in self.all() if ex.difficulty_level == difficulty_level]


class JsonExerciseCatalog(InMemoryExerciseCatalog):
    """Catalog loaded lazily from exercises.json

    File layout:
        {
            "_metadata": {...},
            "exercises": {
                "1": {"name": "...", "category": "mobility", ...},
                ...
            }
        }
    A bare {id: exercise} mapping or a list of exercises is accepted too.

    The file is read once per process. A failed read is remembered and
    reported as CatalogUnavailableError on every later lookup.
    """

    def __init__(self, path: Optional[Path] = None):
        super().__init__()
        self.path = path or settings.data_dir / "exercises.json"
        self._loaded = False
        self._load_error: Optional[Exception] = None

    def load(self) -> None:
        """Read the file now; the app calls this once while starting up"""
        if self._loaded:
            return
        self._loaded = True
        try:
            self._exercises = self._load()
        except (OSError, ValueError, TypeError) as e:
            self._load_error = e
            logger.error("Exercise catalog unavailable (%s): %s", self.path, e)

    def all(self) -> List[Exercise]:
        self.load()
        if self._load_error is not None:
            raise CatalogUnavailableError(
                f"Exercise catalog unavailable: {self._load_error}"
            ) from self._load_error
        return list(self._exercises)

    def _load(self) -> List[Exercise]:
        """Load exercise data"""
        if not self.path.exists():
            raise FileNotFoundError(f"Exercise file not found: {self.path}")

        with open(self.path, "r", encoding="utf-8") as f:
            raw_data = json.load(f)

        if isinstance(raw_data, dict):
            exercises_data = raw_data.get("exercises", raw_data)
        else:
            exercises_data = raw_data

        # Dict -> List
        if isinstance(exercises_data, dict):
            rows: List[Dict] = []
            for ex_id, ex_data in exercises_data.items():
                if ex_id.startswith("_"):  # skip _metadata etc.
                    continue
                rows.append({"id": ex_id, **ex_data})
        else:
            rows = list(exercises_data)

        exercises = [Exercise.model_validate(row) for row in rows]
        logger.info("Loaded %d exercises from %s", len(exercises), self.path)
        return exercises
