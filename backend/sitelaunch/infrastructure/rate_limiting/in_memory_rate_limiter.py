"""Process-local rolling-window rate limiter.

State lives in this process only, so with several server instances the
effective limit is per instance. Swap in a shared-store implementation of
``RateLimiter`` for a global limit.
"""

import time
from collections import defaultdict, deque
from collections.abc import Callable

from sitelaunch.application.interfaces import RateLimiter


class InMemoryRateLimiter(RateLimiter):
    """Allows at most ``limit`` attempts per key within any ``window_seconds`` span."""

    def __init__(
        self,
        limit: int = 10,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._limit = limit
        self._window = window_seconds
        self._clock = clock
        self._hits: dict[str, deque[float]] = defaultdict(deque)

    def allow(self, key: str) -> bool:
        now = self._clock()
        hits = self._hits[key]
        while hits and now - hits[0] >= self._window:
            hits.popleft()
        if len(hits) >= self._limit:
            return False
        hits.append(now)
        return True

    def reset(self, key: str | None = None) -> None:
        if key is None:
            self._hits.clear()
        else:
            self._hits.pop(key, None)
