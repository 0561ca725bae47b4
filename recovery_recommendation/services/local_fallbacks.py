"""Local substitutes for LLM answers

Same response shapes as the LLM path. The plan substitute lives in
fallback_plan.py.
"""

from typing import List

from shared.models import SorenessEntry
from recovery_recommendation.models.output import (
    FeedbackAnalysis,
    MovementAnalysis,
    RecoveryRecommendation,
)

HIGH_SORENESS = 7
MODERATE_SORENESS = 4

FULL_BODY_MESSAGE = (
    "Focus on full-body mobility work to maintain movement quality and prevent soreness."
)


def soreness_recommendation(soreness: List[SorenessEntry]) -> RecoveryRecommendation:
    """Recommendation from soreness levels, in input order

    > 7 high, 4 < level <= 7 moderate; nothing above 4 -> full body.
    """
    result = RecoveryRecommendation()

    for entry in soreness:
        if entry.level > HIGH_SORENESS:
            result.recommendations.append(
                f"Your {entry.label} soreness is high. "
                "Focus on gentle recovery techniques today."
            )
            result.focus_areas.append(entry.area)
        elif entry.level > MODERATE_SORENESS:
            result.recommendations.append(
                f"Moderate {entry.label} soreness detected. "
                "Include targeted mobility exercises."
            )
            result.focus_areas.append(entry.area)

    if not result.recommendations:
        result.recommendations.append(FULL_BODY_MESSAGE)
        result.focus_areas.append("full_body")

    return result


def default_recommendation() -> RecoveryRecommendation:
    return RecoveryRecommendation(
        recommendations=[FULL_BODY_MESSAGE], focus_areas=["full_body"]
    )


def movement_analysis_unavailable() -> MovementAnalysis:
    """Generic assessment while the LLM is rate limited"""
    return MovementAnalysis(
        quality="fair",
        feedback=[
            "Your movement appears to be functional, but there may be room for improvement.",
            "Focus on maintaining neutral spine alignment during exercises.",
            "Consider working on your shoulder and hip mobility.",
        ],
        suggestions=[
            "Add hip mobility drills to your warm-up routine.",
            "Include thoracic spine mobility exercises in your recovery sessions.",
        ],
    )


def movement_analysis_failed() -> MovementAnalysis:
    """Generic assessment when the image could not be analyzed"""
    return MovementAnalysis(
        quality="fair",
        feedback=[
            "Unable to analyze image properly. Please try again with a clearer image.",
            "Ensure adequate lighting and that your full form is visible in the frame.",
        ],
        suggestions=[
            "Try uploading a different image where your form is clearly visible.",
            "Consider seeking in-person movement assessment from a qualified professional.",
        ],
    )


def feedback_analysis_unavailable() -> FeedbackAnalysis:
    return FeedbackAnalysis(
        insights=[
            "Your feedback shows you're making progress with your recovery routine.",
            "You seem to respond well to moderate-intensity exercises.",
        ],
        recommendations=[
            "Continue with your current recovery plan and track your progress.",
            "Try varying your exercise selection to prevent plateaus.",
        ],
    )


def feedback_analysis_failed() -> FeedbackAnalysis:
    return FeedbackAnalysis(
        insights=[
            "You've been consistent with your recovery sessions.",
            "Your feedback helps us improve your future recovery plans.",
        ],
        recommendations=[
            "Continue with your current recovery routine and provide feedback.",
            "Consider trying different exercise variations to find what works best for you.",
        ],
    )
