"""Health check endpoints."""

from typing import Any, Dict

from fastapi import APIRouter

from recipeai.config import settings
from recipeai.middleware.performance import metrics

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check() -> Dict[str, str]:
    """Liveness probe."""
    return {"status": "healthy"}


@router.get("/ready")
async def readiness_check() -> Dict[str, Any]:
    """Readiness probe; reports which Gemini models requests will use."""
    return {
        "status": "ready",
        "dependencies": {
            "gemini": {
                "configured": bool(settings.gemini_api_key),
                "model": settings.gemini_model,
                "image_model": settings.gemini_image_model,
            }
        },
    }


@router.get("/metrics")
async def performance_metrics() -> Dict[str, Any]:
    """Request counts, durations and error rates since startup."""
    return {"status": "ok", **metrics.get_summary()}
