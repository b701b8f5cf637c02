"""Client-side port for the Site Launch HTTP API.

Used by the signup wizard and the status poller; implemented over HTTP in
the infrastructure layer.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass
class AvailabilityReply:
    available: bool
    message: str


@dataclass
class CreateSiteReply:
    client_id: str
    subdomain: str
    website_url: str


@dataclass
class StatusReply:
    status: str
    deployment_url: str | None
    subdomain: str


class SiteApi(ABC):
    @abstractmethod
    async def check_subdomain(self, subdomain: str) -> AvailabilityReply:
        """Ask whether a subdomain can be claimed.

        Rate-limited and malformed requests come back as ``available=False``
        with the server's message.
        """
        ...

    @abstractmethod
    async def create_site(self, data: dict[str, Any]) -> CreateSiteReply:
        """Submit a complete client record.

        Raises:
            SiteApiError: With field errors on 400, or the server message otherwise.
        """
        ...

    @abstractmethod
    async def get_status(self, client_id: str) -> StatusReply:
        """Fetch deployment status for a client.

        Raises:
            SiteApiError: If the client is unknown or the request fails.
        """
        ...
