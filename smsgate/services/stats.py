"""Read-only views over the limiter state for monitoring consumers."""
from __future__ import annotations

from typing import List

from ..models.schemas import PhoneNumberStats, RateLimiterStats
from ..utils.rate_limiter import AdmissionEngine
from ..utils.state import IdentifierRegistry
from ..utils.windows import Clock, IdentifierWindow, utc_now


class StatsReporter:
    def __init__(self, engine: AdmissionEngine, clock: Clock = utc_now) -> None:
        self.engine = engine
        self.clock = clock

    @property
    def registry(self) -> IdentifierRegistry:
        return self.engine.registry

    def account_snapshot(self) -> RateLimiterStats:
        total, last_reset = self.engine.account_state()
        per_second = {}
        for window in self.registry.snapshot():
            with window.lock:
                per_second[window.identifier] = window.messages_per_second
        return RateLimiterStats(
            total_messages=total,
            account_limit=self.engine.account_limit,
            last_reset=last_reset,
            active_phone_numbers=len(per_second),
            messages_per_second=per_second,
        )

    def identifier_snapshot(self, identifier: str) -> PhoneNumberStats:
        key = (identifier or "").strip()
        window = self.registry.get(key)
        if window is None:
            return PhoneNumberStats(phone_number=key)
        return self._describe(window)

    def all_active(self) -> List[PhoneNumberStats]:
        return [self._describe(window) for window in self.registry.snapshot()]

    def _describe(self, window: IdentifierWindow) -> PhoneNumberStats:
        now = self.clock()
        with window.lock:
            return PhoneNumberStats(
                phone_number=window.identifier,
                message_count=window.count,
                last_reset=window.window_start,
                last_used=window.last_used,
                messages_per_second=window.messages_per_second,
                messages_last_minute=window.count_last_minute(now),
                messages_last_5_seconds=window.count_last_5_seconds(now),
                message_timestamps=list(window.history),
            )
