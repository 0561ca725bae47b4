"""Recovery Recommendation FastAPI server

Usage:
    uvicorn recovery_recommendation.main:app
    python -m recovery_recommendation.main

Port: 8000 (default)
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from dotenv import load_dotenv
load_dotenv(override=True)

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from shared.utils import get_logger
from recovery_recommendation import __version__
from recovery_recommendation.config import settings
from recovery_recommendation.models import (
    FeedbackAnalysisInput,
    MovementAnalysisInput,
    RecoveryPlanInput,
    RecoveryRecommendationInput,
)
from recovery_recommendation.services import (
    CacheSweeper,
    InMemoryExerciseCatalog,
    JsonExerciseCatalog,
    OpenAICompletionClient,
    RateLimiter,
    RecommendationService,
    ResponseCache,
    default_windows,
)

logger = get_logger("recovery_recommendation", settings.log_level)


def build_service() -> RecommendationService:
    """Wire the service from settings"""
    catalog_path = settings.data_dir / "exercises.json"
    if catalog_path.exists():
        catalog = JsonExerciseCatalog(catalog_path)
        catalog.load()
    else:
        logger.warning("Exercise file not found (%s), using an empty catalog", catalog_path)
        catalog = InMemoryExerciseCatalog()

    return RecommendationService(
        cache=ResponseCache(default_ttl=settings.cache_default_ttl_seconds),
        rate_limiter=RateLimiter(
            default_windows(settings.rate_limit_per_minute, settings.rate_limit_per_hour)
        ),
        catalog=catalog,
        completion_client=OpenAICompletionClient(),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """App lifecycle: service + periodic cache sweep"""
    logger.info("Recovery Recommendation service starting...")
    service = build_service()
    sweeper = CacheSweeper(service.cache, settings.cache_sweep_interval_seconds)
    sweeper.start()
    app.state.recommendation_service = service
    logger.info("Recovery Recommendation service ready")
    yield
    await sweeper.stop()
    logger.info("Recovery Recommendation service stopped")


app = FastAPI(
    title="Recovery Recommendation API",
    description="Athlete recovery recommendations and plans (LLM with local fallback)",
    version=__version__,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_recommendation_service(request: Request) -> RecommendationService:
    return request.app.state.recommendation_service


def _error_payload(error: Exception, hint: Optional[str] = None) -> dict:
    """Error response payload"""
    return {
        "error": str(error),
        "type": type(error).__name__,
        "hint": hint,
    }


def _raise_http(e: Exception) -> None:
    if isinstance(e, ValueError):
        raise HTTPException(status_code=400, detail=_error_payload(e))
    raise HTTPException(
        status_code=500,
        detail=_error_payload(e, hint="Check the exercise catalog and service logs."),
    )


@app.get("/health")
async def health_check(service: RecommendationService = Depends(get_recommendation_service)):
    """Health check"""
    return {
        "status": "healthy",
        "service": "recovery-recommendation",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        **service.status(),
    }


@app.post("/api/v1/recovery/recommendation")
async def recommend_recovery(
    request: RecoveryRecommendationInput,
    service: RecommendationService = Depends(get_recommendation_service),
):
    """Soreness-based recovery recommendation"""
    try:
        result = await service.generate_recovery_recommendation(request)
    except Exception as e:
        logger.exception("Recovery recommendation failed")
        _raise_http(e)
    return {"recommendation": result.model_dump(by_alias=True)}


@app.post("/api/v1/recovery/plan")
async def recovery_plan(
    request: RecoveryPlanInput,
    service: RecommendationService = Depends(get_recommendation_service),
):
    """Recovery plan for the available time"""
    try:
        result = await service.generate_recovery_plan(request)
    except Exception as e:
        logger.exception("Recovery plan failed")
        _raise_http(e)
    return result.model_dump(by_alias=True)


@app.post("/api/v1/movement/analyze")
async def analyze_movement(
    request: MovementAnalysisInput,
    service: RecommendationService = Depends(get_recommendation_service),
):
    """Movement / posture image analysis"""
    try:
        result = await service.analyze_movement(request)
    except Exception as e:
        logger.exception("Movement analysis failed")
        _raise_http(e)
    return {"analysis": result.model_dump(by_alias=True)}


@app.post("/api/v1/feedback/analyze")
async def analyze_feedback(
    request: FeedbackAnalysisInput,
    service: RecommendationService = Depends(get_recommendation_service),
):
    """Session feedback insights"""
    try:
        result = await service.analyze_feedback(request)
    except Exception as e:
        logger.exception("Feedback analysis failed")
        _raise_http(e)
    return result.model_dump(by_alias=True)


@app.post("/api/v1/cache/clear")
async def clear_cache(service: RecommendationService = Depends(get_recommendation_service)):
    """Drop every cached response"""
    service.clear_cache()
    return {"status": "cleared", **service.status()}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "recovery_recommendation.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
    )
