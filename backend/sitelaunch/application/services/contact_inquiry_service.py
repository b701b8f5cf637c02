"""Contact inquiry use case: messages sent from a generated site's contact form."""

import logging
from typing import Any

from sitelaunch.application.schemas.client import ContactInquiry
from sitelaunch.application.services.client_record_service import ClientRecordService
from sitelaunch.application.services.notification_service import NotificationService
from sitelaunch.application.services.validation_service import validate_contact_inquiry
from sitelaunch.domain.exceptions import ValidationFailedError

logger = logging.getLogger(__name__)

THANK_YOU_MESSAGE = "Thank you! We'll be in touch soon."


class ContactInquiryService:
    """Validates a visitor inquiry with the shared rules and forwards it to the owner.

    Delivery problems are logged and never reported to the visitor.
    """

    def __init__(self, clients: ClientRecordService, notifications: NotificationService):
        self._clients = clients
        self._notifications = notifications

    async def submit(self, subdomain: str, raw: Any) -> ContactInquiry:
        """Validate one inquiry and forward it to the business owner.

        Raises:
            EntityNotFoundError: No site is registered under ``subdomain``.
            ValidationFailedError: With every field error.
        """
        client = await self._clients.get_by_subdomain(subdomain)

        result = validate_contact_inquiry(raw)
        if not result.ok:
            raise ValidationFailedError(result.errors)
        inquiry = result.value

        outcome = await self._notifications.send_contact_inquiry(
            client.email, client.subdomain, client.business_name, inquiry
        )
        if not outcome.success:
            logger.warning(
                "Inquiry for %s from %s not forwarded: %s",
                client.subdomain,
                inquiry.email,
                outcome.error,
            )
        return inquiry
