from __future__ import annotations

from fastapi import APIRouter, Depends

from ..models.schemas import SystemHealth
from ..services.rate_limiter import RateLimiterService
from ..utils.deps import get_rate_limiter

router = APIRouter(prefix="/api/v1", tags=["health"])


@router.get("/health", response_model=SystemHealth)
def health(limiter: RateLimiterService = Depends(get_rate_limiter)) -> SystemHealth:
    components = {
        "limiter": "ok",
        "sweeper": "running" if limiter.sweeper.running else "stopped",
        "tracked_numbers": str(len(limiter.registry)),
    }
    return SystemHealth(status="ok", components=components)
