"""Domain entity: a tenant's business details and site-provisioning state."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import uuid4


class Industry(str, Enum):
    """Supported industries. Each one maps to exactly one site template."""

    RESTAURANT = "restaurant"
    SALON = "salon"
    PLUMBER = "plumber"

    @property
    def label(self) -> str:
        return _INDUSTRY_LABELS[self]


_INDUSTRY_LABELS = {
    Industry.RESTAURANT: "Restaurant",
    Industry.SALON: "Hair Salon",
    Industry.PLUMBER: "Plumber",
}


class ClientStatus(str, Enum):
    """Lifecycle states of a client's site deployment."""

    PENDING = "pending"
    DEPLOYING = "deploying"
    ACTIVE = "active"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (ClientStatus.ACTIVE, ClientStatus.FAILED)


WEEKDAYS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


def site_url(subdomain: str, saas_domain: str) -> str:
    """Public URL a client's site is served from."""
    return f"https://{subdomain}.{saas_domain}"


@dataclass
class ClientRecord:
    """Core domain entity for one tenant.

    ``subdomain`` is always stored lower-cased; ``template_id`` mirrors
    ``industry``. ``deployment_url`` is only set while ``status`` is active.
    """

    business_name: str
    subdomain: str
    industry: Industry
    email: str
    phone: str
    about_us: str
    services: list[str]
    address: str | None = None
    hours: dict[str, str | None] | None = None
    social_links: dict[str, str] | None = None
    template_id: str = ""
    status: ClientStatus = ClientStatus.PENDING
    deployment_url: str | None = None
    site_data: dict[str, Any] | None = None
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        self.subdomain = self.subdomain.lower()
        if not self.template_id:
            self.template_id = self.industry.value

    @property
    def services_list(self) -> list[str]:
        return list(self.services or [])

    def update_deployment(self, status: ClientStatus, deployment_url: str | None) -> None:
        """Apply a deployment status reported by the deploy workflow.

        No transition guard: any state may follow any other.
        """
        self.status = status
        self.deployment_url = deployment_url if status is ClientStatus.ACTIVE else None
        self.updated_at = datetime.now(timezone.utc)

    def cache_site(self, html: str) -> None:
        """Store the most recently generated site document."""
        now = datetime.now(timezone.utc)
        self.site_data = {"html": html, "generatedAt": now.isoformat()}
        self.updated_at = now
