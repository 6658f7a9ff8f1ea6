"""Background eviction of phone numbers that have gone quiet."""
from __future__ import annotations

import threading
from datetime import timedelta
from typing import List, Optional

from ..logging_config import logger
from ..utils.state import IdentifierRegistry
from ..utils.windows import Clock, utc_now


class EvictionSweeper:
    def __init__(
        self,
        registry: IdentifierRegistry,
        interval: timedelta,
        inactivity_threshold: timedelta,
        clock: Clock = utc_now,
    ) -> None:
        if interval <= timedelta(0):
            raise ValueError("sweep interval must be positive")
        if inactivity_threshold <= timedelta(0):
            raise ValueError("inactivity threshold must be positive")
        self.registry = registry
        self.interval = interval
        self.inactivity_threshold = inactivity_threshold
        self.clock = clock
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._lifecycle_lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def sweep(self) -> List[str]:
        """Drop every number whose last use is older than the threshold."""
        cutoff = self.clock() - self.inactivity_threshold
        removed: List[str] = []
        for identifier in self.registry.identifiers():
            window = self.registry.get(identifier)
            if window is None:
                continue
            with window.lock:
                if window.last_used >= cutoff:
                    continue
                if self.registry.remove_if(identifier, window):
                    removed.append(identifier)
                    logger.info("sweeper.removed_inactive", phone=identifier, last_used=window.last_used.isoformat())
        return removed

    def start(self) -> None:
        with self._lifecycle_lock:
            if self.running:
                return
            self._stop_event = threading.Event()
            self._thread = threading.Thread(
                target=self._run,
                args=(self._stop_event,),
                name="smsgate-sweeper",
                daemon=True,
            )
            self._thread.start()
        logger.info("sweeper.start", interval_seconds=self.interval.total_seconds())

    def stop(self, timeout: Optional[float] = None) -> None:
        with self._lifecycle_lock:
            self._stop_event.set()
            thread = self._thread
            self._thread = None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        logger.info("sweeper.stop")

    def _run(self, stop_event: threading.Event) -> None:
        seconds = self.interval.total_seconds()
        while not stop_event.wait(seconds):
            try:
                removed = self.sweep()
            except Exception as exc:  # pragma: no cover - keep the timer alive
                logger.warning("sweeper.failed", error=str(exc))
                continue
            logger.debug("sweeper.run", removed=len(removed), remaining=len(self.registry))
