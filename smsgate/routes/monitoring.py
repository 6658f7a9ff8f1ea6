from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from ..models.schemas import PhoneNumberStats, RateLimiterStats
from ..services.rate_limiter import RateLimiterService
from ..utils.deps import get_rate_limiter

router = APIRouter(prefix="/api/monitoring", tags=["monitoring"])


@router.get("/stats", response_model=RateLimiterStats)
def get_stats(limiter: RateLimiterService = Depends(get_rate_limiter)) -> RateLimiterStats:
    return limiter.get_stats()


@router.get("/phone/{phone_number}", response_model=PhoneNumberStats)
def get_phone_stats(phone_number: str, limiter: RateLimiterService = Depends(get_rate_limiter)) -> PhoneNumberStats:
    return limiter.get_phone_number_stats(phone_number)


@router.get("/active-numbers", response_model=List[PhoneNumberStats])
def get_active_numbers(limiter: RateLimiterService = Depends(get_rate_limiter)) -> List[PhoneNumberStats]:
    return limiter.get_all_active_numbers()
