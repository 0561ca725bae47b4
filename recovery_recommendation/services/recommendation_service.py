"""Recovery recommendation service

Flow for every operation:
1. Cache lookup (fingerprint of the fields that shape the answer)
2. Local rate limit check
3. LLM call, or local fallback when denied
4. LLM failure / malformed answer -> local fallback (single attempt, never raised)
5. Cache store
"""

import hashlib
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ValidationError
from langsmith import traceable

from shared.models import Exercise
from shared.models.soreness import soreness_to_mapping
from recovery_recommendation.config import settings
from recovery_recommendation.models.input import (
    FeedbackAnalysisInput,
    MovementAnalysisInput,
    RecoveryPlanInput,
    RecoveryRecommendationInput,
)
from recovery_recommendation.models.output import (
    FeedbackAnalysis,
    LLMFeedbackAnalysis,
    LLMMovementAnalysis,
    LLMPlan,
    LLMRecommendation,
    MovementAnalysis,
    RecoveryPlan,
    RecoveryRecommendation,
    RecoveryTask,
)
from recovery_recommendation.services import local_fallbacks, prompts
from recovery_recommendation.services.completion_client import (
    CompletionClient,
    CompletionError,
)
from recovery_recommendation.services.exercise_catalog import ExerciseCatalog
from recovery_recommendation.services.exercise_selector import ExerciseSelector, Shuffler
from recovery_recommendation.services.fallback_plan import FallbackPlanGenerator, join_description
from recovery_recommendation.services.rate_limiter import RateLimiter
from recovery_recommendation.services.response_cache import ResponseCache, compute_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheTTLs:
    """Cache lifetime per operation (seconds)"""
    recommendation: float
    recovery_plan: float
    movement_analysis: float
    feedback_analysis: float

    @classmethod
    def from_settings(cls) -> "CacheTTLs":
        return cls(
            recommendation=settings.recommendation_ttl_seconds,
            recovery_plan=settings.recovery_plan_ttl_seconds,
            movement_analysis=settings.movement_analysis_ttl_seconds,
            feedback_analysis=settings.feedback_analysis_ttl_seconds,
        )


class RecommendationService:
    """Cache + rate limit + fallback in front of the recovery LLM

    Every operation returns a usable result. Callers cannot tell whether it
    came from the LLM, the cache or a local fallback.
    """

    def __init__(
        self,
        cache: ResponseCache,
        rate_limiter: RateLimiter,
        catalog: ExerciseCatalog,
        completion_client: CompletionClient,
        shuffle: Optional[Shuffler] = None,
        ttls: Optional[CacheTTLs] = None,
        max_prompt_exercises: Optional[int] = None,
    ):
        """
        Args:
            cache: response cache
            rate_limiter: local LLM rate limiter
            catalog: exercise catalog
            completion_client: LLM client
            shuffle: shuffle used for exercise variety
            ttls: cache TTL per operation (default: settings)
            max_prompt_exercises: catalog exercises embedded in the plan prompt
        """
        self._cache = cache
        self._rate_limiter = rate_limiter
        self._client = completion_client
        self._selector = ExerciseSelector(catalog, shuffle=shuffle)
        self._fallback_plans = FallbackPlanGenerator(self._selector)
        self._ttls = ttls or CacheTTLs.from_settings()
        self._max_prompt_exercises = max_prompt_exercises or settings.max_prompt_exercises

    def _cached(self, key: str) -> Optional[BaseModel]:
        value = self._cache.get(key)
        return value.model_copy(deep=True) if value is not None else None

    def _store(self, key: str, value: BaseModel, ttl: float) -> BaseModel:
        self._cache.set(key, value.model_copy(deep=True), ttl=ttl)
        return value

    # === Soreness recommendation ===

    @traceable(name="recovery_recommendation")
    async def generate_recovery_recommendation(
        self, request: RecoveryRecommendationInput
    ) -> RecoveryRecommendation:
        """
        Soreness-based recovery recommendation

        Args:
            request: user id + soreness per area

        Returns:
            RecoveryRecommendation (never empty)
        """
        key = compute_key({
            "userId": request.user_id,
            "soreness": soreness_to_mapping(request.soreness),
            "function": "generateRecoveryRecommendation",
        })
        cached = self._cached(key)
        if cached is not None:
            return cached

        if not self._rate_limiter.try_acquire():
            logger.info("Rate limit reached, using fallback recommendation generator")
            result = local_fallbacks.soreness_recommendation(request.soreness)
            return self._store(key, result, self._ttls.recommendation)

        try:
            data = await self._client.complete_json(prompts.recommendation_messages(request))
            parsed = LLMRecommendation.model_validate(data)
        except (CompletionError, ValidationError) as e:
            logger.warning("LLM recommendation failed, using fallback: %s", e)
            return local_fallbacks.soreness_recommendation(request.soreness)

        result = RecoveryRecommendation(
            recommendations=[r for r in parsed.recommendations if r.strip()],
            focus_areas=[a for a in parsed.focus_areas if a.strip()],
        )
        if not result.recommendations or not result.focus_areas:
            logger.warning("LLM returned an empty recommendation, using default")
            result = local_fallbacks.default_recommendation()

        return self._store(key, result, self._ttls.recommendation)

    # === Recovery plan ===

    @traceable(name="recovery_plan")
    async def generate_recovery_plan(self, request: RecoveryPlanInput) -> RecoveryPlan:
        """
        Time-boxed recovery plan

        Args:
            request: plan preferences

        Returns:
            RecoveryPlan with at least one task
        """
        key = compute_key({
            "userId": request.user_id,
            "timeAvailable": request.time_available,
            "focusAreas": ",".join(sorted(request.focus_areas)),
            "intensity": request.intensity,
            "equipment": ",".join(sorted(request.equipment)),
            "function": "generateRecoveryPlan",
        })
        cached = self._cached(key)
        if cached is not None:
            return cached

        if not self._rate_limiter.try_acquire():
            logger.info("Rate limit reached, using fallback plan generator")
            result = await self._fallback_plan(request)
            return self._store(key, result, self._ttls.recovery_plan)

        candidates: List[Exercise] = []
        prompt_exercises: List[Exercise] = []
        try:
            candidates = await self._selector.load_candidates()
            prompt_exercises = self._selector.select(
                candidates, request.focus_areas, request.intensity, request.equipment
            )
        except Exception:
            logger.exception("Catalog lookup failed, prompting without catalog exercises")

        try:
            data = await self._client.complete_json(
                prompts.plan_messages(request, prompt_exercises[: self._max_prompt_exercises])
            )
            parsed = LLMPlan.model_validate(data)
        except (CompletionError, ValidationError) as e:
            logger.warning("LLM recovery plan failed, using fallback: %s", e)
            return await self._fallback_plan(request)

        if not parsed.tasks:
            logger.warning("LLM returned a plan without tasks, using fallback")
            return await self._fallback_plan(request)

        result = self._build_plan(parsed, candidates)
        return self._store(key, result, self._ttls.recovery_plan)

    async def _fallback_plan(self, request: RecoveryPlanInput) -> RecoveryPlan:
        return await self._fallback_plans.generate(
            focus_areas=request.focus_areas,
            time_available=request.time_available,
            intensity=request.intensity,
            equipment=request.equipment,
        )

    def _build_plan(self, parsed: LLMPlan, catalog: List[Exercise]) -> RecoveryPlan:
        """LLM plan -> RecoveryPlan, using catalog names/instructions where referenced"""
        by_id: Dict[str, Exercise] = {str(ex.id): ex for ex in catalog}
        tasks = []

        for task in parsed.tasks:
            exercise = by_id.get(str(task.exercise_id)) if task.exercise_id is not None else None
            if exercise is None:
                tasks.append(RecoveryTask(
                    title=task.title,
                    description=task.description,
                    category=task.category,
                    duration_minutes=task.duration,
                ))
                continue

            instructions = exercise.instructions_text
            if instructions:
                description = join_description(exercise.description, instructions)
            else:
                description = task.description or exercise.description
            tasks.append(RecoveryTask(
                title=exercise.name,
                description=description,
                category=exercise.category or task.category,
                duration_minutes=task.duration,
            ))

        return RecoveryPlan(
            title=parsed.title or "Recovery Plan",
            description=parsed.description or "Personalized recovery plan for optimal performance",
            tasks=tasks,
        )

    # === Movement analysis ===

    @traceable(name="movement_analysis")
    async def analyze_movement(self, request: MovementAnalysisInput) -> MovementAnalysis:
        """
        Posture / movement quality from an image

        Args:
            request: base64 image or data URL

        Returns:
            MovementAnalysis
        """
        image_digest = hashlib.sha256(request.image_data.encode("utf-8")).hexdigest()
        key = compute_key({"imageHash": image_digest, "function": "analyzeMovement"})
        cached = self._cached(key)
        if cached is not None:
            return cached

        if not self._rate_limiter.try_acquire():
            logger.info("Rate limit reached, using fallback movement analysis")
            result = local_fallbacks.movement_analysis_unavailable()
            return self._store(key, result, self._ttls.movement_analysis)

        try:
            data = await self._client.complete_json(prompts.movement_messages(request))
            parsed = LLMMovementAnalysis.model_validate(data)
        except (CompletionError, ValidationError) as e:
            logger.warning("LLM movement analysis failed, using fallback: %s", e)
            return local_fallbacks.movement_analysis_failed()

        result = MovementAnalysis(
            quality=parsed.quality,
            feedback=parsed.feedback,
            suggestions=parsed.suggestions,
        )
        return self._store(key, result, self._ttls.movement_analysis)

    # === Feedback analysis ===

    @traceable(name="feedback_analysis")
    async def analyze_feedback(self, request: FeedbackAnalysisInput) -> FeedbackAnalysis:
        """
        Insights from recent session feedback

        Args:
            request: user id + session feedback (most recent first)

        Returns:
            FeedbackAnalysis
        """
        sessions = request.session_feedback
        key = compute_key({
            "userId": request.user_id,
            "sessionCount": len(sessions),
            "lastSessionTimestamp": sessions[0].completed_at.isoformat() if sessions else None,
            "function": "analyzeFeedback",
        })
        cached = self._cached(key)
        if cached is not None:
            return cached

        if not self._rate_limiter.try_acquire():
            logger.info("Rate limit reached, using fallback feedback analysis")
            result = local_fallbacks.feedback_analysis_unavailable()
            return self._store(key, result, self._ttls.feedback_analysis)

        try:
            data = await self._client.complete_json(prompts.feedback_messages(request))
            parsed = LLMFeedbackAnalysis.model_validate(data)
        except (CompletionError, ValidationError) as e:
            logger.warning("LLM feedback analysis failed, using fallback: %s", e)
            return local_fallbacks.feedback_analysis_failed()

        default = local_fallbacks.feedback_analysis_failed()
        result = FeedbackAnalysis(
            insights=[i for i in parsed.insights if i.strip()] or default.insights,
            recommendations=[r for r in parsed.recommendations if r.strip()] or default.recommendations,
        )
        return self._store(key, result, self._ttls.feedback_analysis)

    @property
    def cache(self) -> ResponseCache:
        return self._cache

    def clear_cache(self) -> None:
        self._cache.clear()
        logger.info("Response cache cleared")

    def status(self) -> Dict[str, Any]:
        """Cache size and rate-limit headroom"""
        return {
            "cache": self._cache.stats(),
            "rate_limit_remaining": self._rate_limiter.remaining(),
        }
