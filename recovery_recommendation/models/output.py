"""Recovery service output models

Locally generated and LLM-generated results share these shapes, so callers
cannot tell the two apart.
"""

from typing import List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field

MovementQuality = Literal["excellent", "good", "fair", "poor"]


class RecoveryRecommendation(BaseModel):
    """Soreness-based recommendation"""

    model_config = ConfigDict(populate_by_name=True)

    recommendations: List[str] = Field(default_factory=list)
    focus_areas: List[str] = Field(default_factory=list, alias="focusAreas")


class RecoveryTask(BaseModel):
    """Single task of a recovery plan"""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: str
    category: str = Field(default="recovery")
    duration_minutes: int = Field(..., ge=0, alias="durationMinutes")
    is_completed: bool = Field(default=False, alias="isCompleted")


class RecoveryPlan(BaseModel):
    """Recovery plan"""

    title: str
    description: str
    tasks: List[RecoveryTask] = Field(default_factory=list)

    @property
    def total_minutes(self) -> int:
        return sum(t.duration_minutes for t in self.tasks)


class MovementAnalysis(BaseModel):
    """Movement / posture assessment"""

    quality: MovementQuality
    feedback: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)


class FeedbackAnalysis(BaseModel):
    """Insights drawn from session feedback"""

    insights: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)


# === LLM response schemas (validated at the parse boundary) ===


class LLMRecommendation(BaseModel):
    """Raw recommendation JSON from the model"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    recommendations: List[str] = Field(default_factory=list)
    focus_areas: List[str] = Field(default_factory=list, alias="focusAreas")


class LLMPlanTask(BaseModel):
    """Raw plan task from the model"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str = Field(..., min_length=1)
    exercise_id: Optional[Union[int, str]] = Field(default=None, alias="exerciseId")
    description: str = Field(default="")
    category: str = Field(default="recovery")
    duration: int = Field(default=0, ge=0)


class LLMPlan(BaseModel):
    """Raw plan JSON from the model"""

    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    description: Optional[str] = None
    tasks: List[LLMPlanTask] = Field(default_factory=list)


class LLMMovementAnalysis(BaseModel):
    """Raw movement analysis JSON from the model"""

    model_config = ConfigDict(extra="ignore")

    quality: MovementQuality
    feedback: List[str] = Field(..., min_length=1)
    suggestions: List[str] = Field(..., min_length=1)


class LLMFeedbackAnalysis(BaseModel):
    """Raw feedback analysis JSON from the model"""

    model_config = ConfigDict(extra="ignore")

    insights: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
