"""Recovery Recommendation Models"""

from .input import (
    RecoveryRecommendationInput,
    RecoveryPlanInput,
    MovementAnalysisInput,
    FeedbackAnalysisInput,
    SessionFeedback,
    ExerciseFeedback,
    Injury,
)
from .output import (
    RecoveryRecommendation,
    RecoveryPlan,
    RecoveryTask,
    MovementAnalysis,
    FeedbackAnalysis,
)

__all__ = [
    "RecoveryRecommendationInput",
    "RecoveryPlanInput",
    "MovementAnalysisInput",
    "FeedbackAnalysisInput",
    "SessionFeedback",
    "ExerciseFeedback",
    "Injury",
    "RecoveryRecommendation",
    "RecoveryPlan",
    "RecoveryTask",
    "MovementAnalysis",
    "FeedbackAnalysis",
]
