from .in_memory_rate_limiter import InMemoryRateLimiter

__all__ = ["InMemoryRateLimiter"]
