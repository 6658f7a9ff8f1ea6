from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..logging_config import logger
from ..models.schemas import SmsRequest, SmsResponse
from ..services.rate_limiter import RateLimiterService
from ..utils.deps import get_rate_limiter

router = APIRouter(prefix="/api/sms", tags=["sms"])

ALLOWED_MESSAGE = "Message can be sent"
DENIED_MESSAGE = "Rate limit exceeded. Please try again later."


@router.post("/check", response_model=SmsResponse)
def check_sms_limit(
    payload: SmsRequest,
    limiter: RateLimiterService = Depends(get_rate_limiter),
):
    if not (payload.phone_number or "").strip():
        logger.warning("sms.check_rejected", reason="missing phone number")
        body = SmsResponse(can_send=False, message="Phone number is required")
        return JSONResponse(status_code=400, content=body.model_dump())
    can_send = limiter.can_send_message(payload.phone_number)
    return SmsResponse(can_send=can_send, message=ALLOWED_MESSAGE if can_send else DENIED_MESSAGE)


@router.get("/status")
async def status() -> str:
    return "SMS Rate Limiter is running"
