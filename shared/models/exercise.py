"""Exercise catalog entry model (shared)"""

from typing import List, Optional, Union, Literal, get_args
from pydantic import BaseModel, ConfigDict, Field, field_validator

DifficultyLevel = Literal["beginner", "intermediate", "advanced"]

DIFFICULTY_LEVELS = get_args(DifficultyLevel)

# equipment tags that mean "nothing needed"
NO_EQUIPMENT = {"none", ""}


class Exercise(BaseModel):
    """Exercise library entry

    Catalog rows may carry null or malformed list columns, so
    equipment_required / target_muscles are coerced to lists of strings.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Union[int, str] = Field(..., description="Exercise ID")
    name: str = Field(..., description="Exercise name")
    description: str = Field(default="", description="Short description")
    category: str = Field(
        default="recovery",
        description="Category (mobility, recovery, strength, stretching)",
    )
    equipment_required: List[str] = Field(
        default_factory=list,
        alias="equipmentRequired",
        description="Equipment needed",
    )
    target_muscles: List[str] = Field(
        default_factory=list,
        alias="targetMuscles",
        description="Target muscle tags",
    )
    difficulty_level: DifficultyLevel = Field(
        default="beginner",
        alias="difficultyLevel",
        description="beginner / intermediate / advanced",
    )
    instructions: Union[List[str], str] = Field(
        default_factory=list, description="Step-by-step instructions"
    )
    video_url: Optional[str] = Field(default=None, alias="videoUrl")
    image_url: Optional[str] = Field(default=None, alias="imageUrl")

    @field_validator("equipment_required", "target_muscles", mode="before")
    @classmethod
    def coerce_tag_list(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            return [t.strip() for t in v.split(",") if t.strip()]
        if not isinstance(v, (list, tuple, set)):
            return []
        return [str(t) for t in v if t is not None]

    @field_validator("difficulty_level", mode="before")
    @classmethod
    def coerce_difficulty(cls, v):
        if v is None:
            return "beginner"
        v = str(v).strip().lower()
        return v if v in DIFFICULTY_LEVELS else "intermediate"

    @field_validator("instructions", mode="before")
    @classmethod
    def coerce_instructions(cls, v):
        if v is None:
            return []
        if isinstance(v, (list, tuple)):
            return [str(step) for step in v if step]
        if isinstance(v, str):
            return v
        return []

    @property
    def needs_no_equipment(self) -> bool:
        """True if the exercise can be done without equipment"""
        return all(eq.strip().lower() in NO_EQUIPMENT for eq in self.equipment_required)

    @property
    def instructions_text(self) -> str:
        """Instructions joined into a single sentence sequence"""
        if isinstance(self.instructions, list):
            return ". ".join(self.instructions)
        return self.instructions
