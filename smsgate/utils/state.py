"""In-memory registry of per phone number windows."""
from __future__ import annotations

import threading
from datetime import datetime
from typing import Dict, List, Optional

from .windows import IdentifierWindow


class IdentifierRegistry:
    """Thread-safe identifier -> IdentifierWindow map.

    The registry lock only guards the mapping itself. It is never held while a
    window's own lock is taken, so work on one phone number never blocks on
    another.
    """

    def __init__(self, limit: int) -> None:
        if limit < 0:
            raise ValueError("per phone number limit must be >= 0")
        self.limit = limit
        self._lock = threading.Lock()
        self._windows: Dict[str, IdentifierWindow] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._windows)

    def __contains__(self, identifier: object) -> bool:
        with self._lock:
            return identifier in self._windows

    def get(self, identifier: str) -> Optional[IdentifierWindow]:
        with self._lock:
            return self._windows.get(identifier)

    def get_or_create(self, identifier: str, now: datetime) -> IdentifierWindow:
        with self._lock:
            window = self._windows.get(identifier)
            if window is None:
                window = IdentifierWindow.fresh(identifier, self.limit, now)
                self._windows[identifier] = window
            return window

    def remove(self, identifier: str) -> bool:
        with self._lock:
            return self._windows.pop(identifier, None) is not None

    def remove_if(self, identifier: str, window: IdentifierWindow) -> bool:
        """Remove ``identifier`` only while it still maps to ``window``."""
        with self._lock:
            if self._windows.get(identifier) is not window:
                return False
            del self._windows[identifier]
            return True

    def identifiers(self) -> List[str]:
        with self._lock:
            return list(self._windows)

    def snapshot(self) -> List[IdentifierWindow]:
        with self._lock:
            return list(self._windows.values())
