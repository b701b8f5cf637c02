"""Rate limiter port."""

from abc import ABC, abstractmethod


class RateLimiter(ABC):
    """Decides whether a caller identified by ``key`` may make another request."""

    @abstractmethod
    def allow(self, key: str) -> bool:
        """Record an attempt for ``key`` and return False once over budget."""
        ...
