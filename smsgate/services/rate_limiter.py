"""Service facade wiring the admission engine, eviction sweeper and stats."""
from __future__ import annotations

from datetime import timedelta
from typing import List, Optional

from ..config import Settings
from ..logging_config import logger
from ..models.schemas import PhoneNumberStats, RateLimiterStats
from ..utils.rate_limiter import AdmissionEngine
from ..utils.state import IdentifierRegistry
from ..utils.windows import Clock, utc_now
from .stats import StatsReporter
from .sweeper import EvictionSweeper


class RateLimiterService:
    def __init__(
        self,
        phone_number_limit: int = 1,
        account_limit: int = 5,
        cleanup_interval: timedelta = timedelta(minutes=60),
        inactivity_threshold: timedelta = timedelta(hours=24),
        clock: Clock = utc_now,
    ) -> None:
        self.registry = IdentifierRegistry(limit=phone_number_limit)
        self.engine = AdmissionEngine(self.registry, account_limit=account_limit, clock=clock)
        self.sweeper = EvictionSweeper(
            self.registry,
            interval=cleanup_interval,
            inactivity_threshold=inactivity_threshold,
            clock=clock,
        )
        self.stats = StatsReporter(self.engine, clock=clock)

    @classmethod
    def from_settings(cls, settings: Settings, clock: Clock = utc_now) -> "RateLimiterService":
        return cls(
            phone_number_limit=settings.max_messages_per_phone_number_per_second,
            account_limit=settings.max_messages_per_account_per_second,
            cleanup_interval=timedelta(minutes=settings.cleanup_interval_minutes),
            inactivity_threshold=timedelta(hours=settings.inactivity_threshold_hours),
            clock=clock,
        )

    def can_send_message(self, phone_number: Optional[str]) -> bool:
        return self.engine.check_and_reserve(phone_number)

    def cleanup_inactive_numbers(self) -> List[str]:
        return self.sweeper.sweep()

    def get_stats(self) -> RateLimiterStats:
        return self.stats.account_snapshot()

    def get_phone_number_stats(self, phone_number: str) -> PhoneNumberStats:
        return self.stats.identifier_snapshot(phone_number)

    def get_all_active_numbers(self) -> List[PhoneNumberStats]:
        return self.stats.all_active()

    def start(self) -> None:
        logger.info(
            "limiter.start",
            phone_limit=self.engine.phone_number_limit,
            account_limit=self.engine.account_limit,
        )
        self.sweeper.start()

    def stop(self) -> None:
        logger.info("limiter.stop")
        self.sweeper.stop()
