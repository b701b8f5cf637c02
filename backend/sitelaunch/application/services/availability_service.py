"""Subdomain availability use case."""

import logging
from dataclasses import dataclass
from enum import Enum

from sitelaunch.application.interfaces import ClientRecordRepository, RateLimiter
from sitelaunch.application.services.validation_service import validate_subdomain

logger = logging.getLogger(__name__)


class AvailabilityOutcome(str, Enum):
    AVAILABLE = "available"
    TAKEN = "taken"
    INVALID = "invalid"
    RATE_LIMITED = "rate_limited"


@dataclass
class AvailabilityResult:
    outcome: AvailabilityOutcome
    message: str

    @property
    def available(self) -> bool:
        return self.outcome is AvailabilityOutcome.AVAILABLE


class SubdomainAvailabilityService:
    """Answers "can I still claim this subdomain?" for the signup wizard.

    The answer is advisory: a concurrent create-site can still claim the
    name between this check and submission.
    """

    def __init__(self, repository: ClientRecordRepository, rate_limiter: RateLimiter):
        self._repository = repository
        self._rate_limiter = rate_limiter

    async def check(self, subdomain: str | None, client_key: str) -> AvailabilityResult:
        if not self._rate_limiter.allow(client_key):
            logger.info("Subdomain check rate-limited for %s", client_key)
            return AvailabilityResult(
                AvailabilityOutcome.RATE_LIMITED,
                "Rate limit exceeded. Please try again later.",
            )

        if not subdomain:
            return AvailabilityResult(
                AvailabilityOutcome.INVALID, "Subdomain parameter is required"
            )

        result = validate_subdomain(subdomain)
        if not result.ok:
            return AvailabilityResult(AvailabilityOutcome.INVALID, result.errors[0].message)

        existing = await self._repository.get_by_subdomain(subdomain.lower())
        if existing is not None:
            return AvailabilityResult(
                AvailabilityOutcome.TAKEN, "This subdomain is already taken"
            )
        return AvailabilityResult(AvailabilityOutcome.AVAILABLE, "Subdomain is available")
