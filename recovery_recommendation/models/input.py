"""Recovery service input models

Bodies arrive from the route layer in camelCase; snake_case names are
accepted as well.
"""

from typing import List, Literal, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

from shared.models import SorenessEntry, ensure_unique_areas, soreness_from_mapping

Intensity = Literal["light", "moderate", "intense"]


class RecoveryRecommendationInput(BaseModel):
    """Soreness-based recommendation input

    Example:
    {
        "userId": 1,
        "soreness": {"shoulders": 8, "hips": 3},
        "intensity": "moderate"
    }
    """

    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(..., alias="userId", description="User ID")
    soreness: List[SorenessEntry] = Field(
        default_factory=list, description="Soreness per body area, in input order"
    )
    intensity: Optional[Intensity] = Field(
        default=None, description="Preferred recovery intensity"
    )

    @field_validator("soreness", mode="before")
    @classmethod
    def keep_soreness_order(cls, v):
        return soreness_from_mapping(v)

    @field_validator("soreness")
    @classmethod
    def unique_soreness_areas(cls, v: List[SorenessEntry]) -> List[SorenessEntry]:
        return ensure_unique_areas(v)


class Injury(BaseModel):
    """Reported injury"""

    model_config = ConfigDict(populate_by_name=True)

    body_part: str = Field(..., alias="bodyPart")
    description: str = Field(default="")


class RecoveryPlanInput(BaseModel):
    """Recovery plan input

    Example:
    {
        "userId": 1,
        "timeAvailable": 15,
        "focusAreas": ["full_body"],
        "intensity": "light",
        "equipment": ["none"],
        "soreness": {"hamstrings": 6}
    }
    """

    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(..., alias="userId", description="User ID")
    sport_type: str = Field(default="General", alias="sportType")
    time_available: int = Field(
        default=15, alias="timeAvailable", ge=5, le=180,
        description="Session length (minutes)"
    )
    focus_areas: List[str] = Field(
        default_factory=lambda: ["full_body"], alias="focusAreas"
    )
    intensity: Intensity = Field(default="moderate")
    equipment: List[str] = Field(default_factory=lambda: ["none"])
    injuries: Optional[List[Injury]] = Field(default=None)
    soreness: List[SorenessEntry] = Field(default_factory=list)

    @field_validator("soreness", mode="before")
    @classmethod
    def keep_soreness_order(cls, v):
        return soreness_from_mapping(v)

    @field_validator("soreness")
    @classmethod
    def unique_soreness_areas(cls, v: List[SorenessEntry]) -> List[SorenessEntry]:
        return ensure_unique_areas(v)

    @field_validator("focus_areas")
    @classmethod
    def default_focus_areas(cls, v: List[str]) -> List[str]:
        areas = [a.strip() for a in v if a and a.strip()]
        return areas or ["full_body"]

    @field_validator("equipment", mode="before")
    @classmethod
    def default_equipment(cls, v):
        return v if v else ["none"]


class MovementAnalysisInput(BaseModel):
    """Movement image analysis input"""

    model_config = ConfigDict(populate_by_name=True)

    image_data: str = Field(
        ..., alias="base64Image", min_length=1,
        description="Base64 image or data URL"
    )
    user_id: Optional[int] = Field(default=None, alias="userId")

    @property
    def image_url(self) -> str:
        """Image in a form the completion API accepts"""
        if self.image_data.startswith(("data:image", "http://", "https://")):
            return self.image_data
        return f"data:image/jpeg;base64,{self.image_data}"


class ExerciseFeedback(BaseModel):
    """Per-exercise feedback within a session"""

    name: str
    rating: int = Field(..., ge=1, le=5)
    difficulty: int = Field(..., ge=1, le=5)
    effectiveness: int = Field(..., ge=1, le=5)
    feedback: Optional[str] = None


class SessionFeedback(BaseModel):
    """Feedback for one completed recovery session"""

    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias="sessionId")
    rating: int = Field(..., ge=1, le=5)
    effectiveness: int = Field(..., ge=1, le=5)
    difficulty: int = Field(..., ge=1, le=5)
    enjoyment: int = Field(..., ge=1, le=5)
    feedback: Optional[str] = None
    completed_at: datetime = Field(..., alias="completedAt")
    exercises: List[ExerciseFeedback] = Field(default_factory=list)


class FeedbackAnalysisInput(BaseModel):
    """Session feedback analysis input (most recent session first)"""

    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(..., alias="userId")
    session_feedback: List[SessionFeedback] = Field(
        default_factory=list, alias="sessionFeedback"
    )
