"""Time-boxed cache for the leaderboard payload."""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)

STALE_WARNING = "Data may be outdated due to temporary service issues"


class LeaderboardCache:
    """Serve a computed payload for ``ttl_seconds``.

    When a refresh fails and an earlier payload exists, that payload is
    returned with a ``warning`` key instead of raising.
    """

    def __init__(
        self,
        ttl_seconds: float = 300,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._value: Optional[Dict[str, Any]] = None
        self._stored_at = 0.0

    def age(self) -> Optional[float]:
        if self._value is None:
            return None
        return self._clock() - self._stored_at

    def get_or_compute(self, compute: Callable[[], Dict[str, Any]]) -> Dict[str, Any]:
        with self._lock:
            age = self.age()
            if age is not None and age < self.ttl_seconds:
                logger.debug("Serving leaderboard from cache (age: %.0fs)", age)
                return self._value

            try:
                value = compute()
            except Exception:
                if self._value is None:
                    raise
                logger.warning("Serving stale leaderboard cache after refresh failure", exc_info=True)
                return {**self._value, "warning": STALE_WARNING}

            self._value = value
            self._stored_at = self._clock()
            return value

    def clear(self) -> None:
        with self._lock:
            self._value = None
            self._stored_at = 0.0


__all__ = ["LeaderboardCache", "STALE_WARNING"]
