"""Fixed-window counters for a single phone number and for the whole account."""
from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, Deque

Clock = Callable[[], datetime]

WINDOW = timedelta(seconds=1)
HISTORY_WINDOW = timedelta(minutes=1)
BURST_WINDOW = timedelta(seconds=5)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def window_elapsed(start: datetime, now: datetime) -> bool:
    return now - start >= WINDOW


@dataclass
class AccountWindow:
    """Account-wide counter. Callers must hold ``lock`` for every access."""

    limit: int
    window_start: datetime
    total_count: int = 0
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def reset_if_elapsed(self, now: datetime) -> bool:
        if not window_elapsed(self.window_start, now):
            return False
        self.total_count = 0
        self.window_start = now
        return True

    @property
    def exhausted(self) -> bool:
        return self.total_count >= self.limit


@dataclass
class IdentifierWindow:
    """Per phone number counter plus the trailing-minute admission history.

    Fields are only touched while ``lock`` is held. ``messages_per_second`` is a
    display statistic reset on the account cadence; ``count`` is what the limit
    is enforced against.
    """

    identifier: str
    limit: int
    window_start: datetime
    last_used: datetime
    count: int = 0
    messages_per_second: int = 0
    history: Deque[datetime] = field(default_factory=deque)
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @classmethod
    def fresh(cls, identifier: str, limit: int, now: datetime) -> "IdentifierWindow":
        return cls(identifier=identifier, limit=limit, window_start=now, last_used=now)

    def reset_if_elapsed(self, now: datetime) -> bool:
        if not window_elapsed(self.window_start, now):
            return False
        self.count = 0
        self.messages_per_second = 0
        self.window_start = now
        return True

    def touch(self, now: datetime) -> None:
        if now > self.last_used:
            self.last_used = now

    @property
    def exhausted(self) -> bool:
        return self.count >= self.limit

    def record(self, now: datetime) -> None:
        self.count += 1
        self.messages_per_second += 1
        self.history.append(now)
        self.purge_history(now)

    def purge_history(self, now: datetime) -> None:
        history = self.history
        while history and now - history[0] > HISTORY_WINDOW:
            history.popleft()

    def count_last_minute(self, now: datetime) -> int:
        self.purge_history(now)
        return len(self.history)

    def count_last_5_seconds(self, now: datetime) -> int:
        self.purge_history(now)
        return sum(1 for stamp in self.history if now - stamp <= BURST_WINDOW)
