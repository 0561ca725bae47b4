"""Soreness input model (shared)"""

from typing import Any, Dict, List, Mapping
from pydantic import BaseModel, Field, field_validator


class SorenessEntry(BaseModel):
    """Soreness level for one body area"""

    area: str = Field(..., description="Body area (shoulders, lower_back, ...)")
    level: float = Field(..., ge=0, le=10, description="Soreness level (0-10)")

    @field_validator("area")
    @classmethod
    def normalize_area(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("area must not be empty")
        return v

    @property
    def label(self) -> str:
        """Readable area name ("lower_back" -> "lower back")"""
        return self.area.replace("_", " ")


def soreness_from_mapping(value: Any) -> Any:
    """Convert a {area: level} mapping into ordered entries

    A JSON object keeps its key order when decoded, so the entries follow the
    order in which the client listed the areas. Anything that is not a
    mapping is returned unchanged for normal validation.
    """
    if isinstance(value, Mapping):
        return [{"area": area, "level": level} for area, level in value.items()]
    return value


def soreness_to_mapping(entries: List[SorenessEntry]) -> Dict[str, float]:
    """Order-independent view used for cache fingerprints"""
    return {entry.area: entry.level for entry in entries}


def ensure_unique_areas(entries: List[SorenessEntry]) -> List[SorenessEntry]:
    """Reject a body area listed more than once"""
    seen = set()
    for entry in entries:
        if entry.area in seen:
            raise ValueError(f"soreness area '{entry.area}' is listed more than once")
        seen.add(entry.area)
    return entries
