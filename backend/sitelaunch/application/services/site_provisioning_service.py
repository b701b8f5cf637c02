"""Site provisioning use case: turns a signup into a pending client record."""

import logging
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from sitelaunch.application.interfaces import (
    ClientRecordRepository,
    DeployNotificationRepository,
)
from sitelaunch.application.schemas.client import ClientDataCreate
from sitelaunch.application.services.validation_service import validate_client_data
from sitelaunch.domain.entities import ClientRecord, DeployNotification
from sitelaunch.domain.entities.client_record import site_url
from sitelaunch.domain.exceptions import DuplicateEntityError, ValidationFailedError

logger = logging.getLogger(__name__)


@dataclass
class ProvisionedSite:
    client: ClientRecord
    website_url: str


class SiteProvisioningService:
    """Validates a signup, stores the client record and queues the deploy notification.

    The record and its outbox entry are written through the same session, so
    they commit together; delivery to the deploy workflow happens later in
    ``DeployDispatcher`` and never affects this call's outcome.
    """

    def __init__(
        self,
        client_repo: ClientRecordRepository,
        notification_repo: DeployNotificationRepository,
        saas_domain: str,
    ):
        self._client_repo = client_repo
        self._notification_repo = notification_repo
        self._saas_domain = saas_domain

    async def create_site(self, raw: Any) -> ProvisionedSite:
        """Provision a new site from raw signup input.

        Raises:
            ValidationFailedError: With every field error.
            DuplicateEntityError: If the subdomain is taken (case-insensitively).
        """
        result = validate_client_data(raw)
        if not result.ok:
            raise ValidationFailedError(result.errors)
        data = result.value
        subdomain = data.subdomain.lower()

        # Fast path only; the unique constraint in create() is authoritative.
        if await self._client_repo.get_by_subdomain(subdomain) is not None:
            raise DuplicateEntityError("ClientRecord", "subdomain", subdomain)

        client = await self._client_repo.create(self._build_record(data, subdomain))
        await self._notification_repo.create(
            DeployNotification(
                client_id=client.id,
                payload=self._build_payload(client, data),
            )
        )
        logger.info(
            "Provisioned client %s (%s, template=%s)",
            client.id,
            client.subdomain,
            client.template_id,
        )
        return ProvisionedSite(
            client=client,
            website_url=site_url(subdomain, self._saas_domain),
        )

    @staticmethod
    def _build_record(data: ClientDataCreate, subdomain: str) -> ClientRecord:
        return ClientRecord(
            business_name=data.business_name,
            subdomain=subdomain,
            industry=data.industry,
            email=data.email,
            phone=data.phone,
            address=data.address or None,
            about_us=data.about_us,
            services=list(data.services),
            hours=_filled(data.hours),
            social_links=_filled(data.social_links),
            template_id=data.industry.value,
        )

    @staticmethod
    def _build_payload(client: ClientRecord, data: ClientDataCreate) -> dict[str, Any]:
        # The shared secret is added at delivery time and never stored.
        return {
            "clientId": client.id,
            "subdomain": client.subdomain,
            "templateId": client.template_id,
            "data": data.business_fields(),
        }


def _filled(section: BaseModel | None) -> dict[str, str] | None:
    """Only the entries that carry a value; None when nothing was filled in."""
    if section is None:
        return None
    values = {key: value for key, value in section.model_dump().items() if value}
    return values or None
