"""LLM prompts for the recovery operations"""

import json
from typing import Any, Dict, List

from shared.models import Exercise
from recovery_recommendation.models.input import (
    FeedbackAnalysisInput,
    MovementAnalysisInput,
    RecoveryPlanInput,
    RecoveryRecommendationInput,
)

FOCUS_AREA_CHOICES = "full_body, upper_body, lower_body, back, shoulders, hips, legs"


def recommendation_messages(request: RecoveryRecommendationInput) -> List[Dict[str, Any]]:
    soreness = ", ".join(f"{e.label}: {e.level:g}/10" for e in request.soreness) or "none reported"
    prompt = f"""
Based on the following athlete data, provide 2-3 specific recovery recommendations
and suggest key focus areas for recovery work.

## Athlete Data
- Soreness Map: {soreness}
- Recovery Intensity Preference: {request.intensity or 'moderate'}

Respond with JSON in this format:
{{
    "recommendations": ["recommendation 1", "recommendation 2"],
    "focusAreas": ["area1", "area2"]
}}

The focusAreas should be from this list only: {FOCUS_AREA_CHOICES}
"""
    return [
        {
            "role": "system",
            "content": (
                "You are an expert sports recovery coach analyzing athlete data "
                "to provide targeted recommendations. Always respond in JSON."
            ),
        },
        {"role": "user", "content": prompt},
    ]


def _exercise_summary(ex: Exercise) -> Dict[str, Any]:
    return {
        "id": ex.id,
        "name": ex.name,
        "category": ex.category,
        "equipment": ex.equipment_required,
        "targetMuscles": ex.target_muscles,
        "difficulty": ex.difficulty_level,
        "description": ex.description,
    }


def plan_messages(
    request: RecoveryPlanInput,
    exercises: List[Exercise],
) -> List[Dict[str, Any]]:
    injuries = (
        ", ".join(f"{i.body_part} - {i.description}" for i in request.injuries)
        if request.injuries else "None reported"
    )
    soreness = "\n".join(f"- {e.area}: {e.level:g}/10" for e in request.soreness) or "- None reported"
    exercises_json = json.dumps([_exercise_summary(ex) for ex in exercises], default=str)

    prompt = f"""
Create a personalized recovery plan for an athlete with the following details:

## Athlete
- Sport Type: {request.sport_type}
- Time Available: {request.time_available} minutes
- Focus Areas: {', '.join(request.focus_areas)}
- Intensity Level: {request.intensity}
- Equipment Available: {', '.join(request.equipment)}
- Injuries: {injuries}

## Soreness Areas
{soreness}

## Exercises available in our catalog
{exercises_json}

Create a recovery flow session using these exercises. For each exercise,
include the exercise name exactly as written and its ID.

Respond with JSON in this format:
{{
    "title": "Recovery Plan Title",
    "description": "Brief overview of the recovery plan",
    "tasks": [
        {{
            "title": "Exercise Name",
            "exerciseId": 123,
            "description": "Instructions for the exercise",
            "category": "One of: stretching, mobility, recovery, strength",
            "duration": 5
        }}
    ]
}}

The plan should include 4-7 exercises depending on the available time.
Focus EXCLUSIVELY on physical recovery exercises such as stretching, mobility
work, and gentle strength exercises. Do NOT include meditation, mindfulness, or
breathing exercises. Durations are in minutes and must add up to the time available.
"""
    return [
        {
            "role": "system",
            "content": "You are an expert sports recovery coach. Always respond in JSON.",
        },
        {"role": "user", "content": prompt},
    ]


def movement_messages(request: MovementAnalysisInput) -> List[Dict[str, Any]]:
    return [
        {
            "role": "system",
            "content": (
                "You are an expert movement analyst who can assess posture, mobility, "
                "and movement quality from images. Focus on providing evidence-based, "
                "practical feedback."
            ),
        },
        {
            "role": "user",
            "content": [
                {
                    "type": "text",
                    "text": (
                        "Analyze this image of my movement/posture and provide feedback on "
                        "quality, potential issues, and recommendations for improvement. "
                        "Format your response as JSON with these keys: 'quality' "
                        "(excellent/good/fair/poor), 'feedback' (array of 2-3 observations), "
                        "'suggestions' (array of 2-3 improvement recommendations)"
                    ),
                },
                {"type": "image_url", "image_url": {"url": request.image_url}},
            ],
        },
    ]


def feedback_messages(request: FeedbackAnalysisInput) -> List[Dict[str, Any]]:
    sessions = json.dumps(
        [s.model_dump(mode="json", by_alias=True) for s in request.session_feedback],
        indent=2,
    )
    prompt = f"""
Based on the following athlete feedback data, provide insights and recommendations.

## Feedback data
{sessions}

Respond with JSON in this format:
{{
    "insights": ["insight 1", "insight 2", "insight 3"],
    "recommendations": ["recommendation 1", "recommendation 2", "recommendation 3"]
}}

Insights should be observations about patterns in the data.
Recommendations should be actionable advice based on the feedback patterns.
"""
    return [
        {
            "role": "system",
            "content": (
                "You are an expert recovery coach analyzing feedback data to provide "
                "personalized insights and recommendations. Always respond in JSON."
            ),
        },
        {"role": "user", "content": prompt},
    ]
