from __future__ import annotations

from fastapi import HTTPException, Request

from ..services.rate_limiter import RateLimiterService


def get_rate_limiter(request: Request) -> RateLimiterService:
    service = getattr(request.app.state, "rate_limiter", None)
    if service is None:
        raise HTTPException(status_code=503, detail={"error_code": "LIMITER_UNAVAILABLE", "message": "Rate limiter not initialised"})
    return service
