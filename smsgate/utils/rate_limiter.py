"""Admission decisions: per phone number cap plus account-wide cap, per second."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..logging_config import logger
from .state import IdentifierRegistry
from .windows import AccountWindow, Clock, utc_now


class AdmissionEngine:
    """Decides whether a message for a phone number may be sent right now.

    The account check, the per number decision and the account increment all
    happen while the account lock is held, so concurrent callers can never push
    ``total_count`` past the account limit. Each number's window is additionally
    guarded by its own lock; the lock order is always account first.
    """

    def __init__(
        self,
        registry: IdentifierRegistry,
        account_limit: int,
        clock: Clock = utc_now,
    ) -> None:
        if account_limit < 0:
            raise ValueError("account limit must be >= 0")
        self.registry = registry
        self.clock = clock
        self.account = AccountWindow(limit=account_limit, window_start=clock())

    @property
    def phone_number_limit(self) -> int:
        return self.registry.limit

    @property
    def account_limit(self) -> int:
        return self.account.limit

    def check_and_reserve(self, identifier: Optional[str]) -> bool:
        key = (identifier or "").strip()
        if not key:
            logger.warning("limiter.invalid_identifier")
            return False

        account = self.account
        with account.lock:
            now = self.clock()
            if account.reset_if_elapsed(now):
                self._reset_per_second_counters()

            if account.exhausted:
                logger.info("limiter.account_limit_reached", current=account.total_count, limit=account.limit)
                return False

            window = self.registry.get_or_create(key, now)
            with window.lock:
                window.reset_if_elapsed(now)
                window.touch(now)
                if window.exhausted:
                    logger.info("limiter.phone_limit_reached", phone=key, current=window.count, limit=window.limit)
                    return False
                window.record(now)

            account.total_count += 1
            return True

    def _reset_per_second_counters(self) -> None:
        # caller holds the account lock
        for window in self.registry.snapshot():
            with window.lock:
                window.messages_per_second = 0

    def account_state(self) -> tuple[int, datetime]:
        """Return ``(total_count, window_start)`` read in one critical section."""
        with self.account.lock:
            return self.account.total_count, self.account.window_start
