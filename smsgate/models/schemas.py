from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class BaseSchema(BaseModel):
    """Base schema with attribute extraction enabled."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class SystemHealth(BaseSchema):
    status: str
    components: Dict[str, str] = Field(default_factory=dict)


class SmsRequest(BaseSchema):
    phone_number: Optional[str] = ""
    message: str = ""
    recipient_number: str = ""


class SmsResponse(BaseSchema):
    can_send: bool
    message: Optional[str] = None


class RateLimiterStats(BaseSchema):
    total_messages: int = 0
    account_limit: int
    last_reset: datetime
    active_phone_numbers: int = 0
    messages_per_second: Dict[str, int] = Field(default_factory=dict)


class PhoneNumberStats(BaseSchema):
    phone_number: str
    message_count: int = 0
    last_reset: Optional[datetime] = None
    last_used: Optional[datetime] = None
    messages_per_second: int = 0
    messages_last_minute: int = 0
    messages_last_5_seconds: int = 0
    message_timestamps: List[datetime] = Field(default_factory=list)
