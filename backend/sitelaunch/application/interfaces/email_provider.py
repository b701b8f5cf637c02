"""Transactional email port."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class OutgoingEmail:
    to: str
    subject: str
    html_content: str
    text_content: str
    reply_to: str | None = None


class EmailProvider(ABC):
    """Port for sending one transactional email through an external provider."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        ...

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """False when the provider credential is missing."""
        ...

    @abstractmethod
    async def send(self, email: OutgoingEmail) -> None:
        """Send a single email. No retry.

        Raises:
            UpstreamServiceError: If the provider rejects the request.
        """
        ...
