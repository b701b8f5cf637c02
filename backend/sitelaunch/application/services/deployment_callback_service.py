"""Deployment Callback use case: applies status reports from the deploy workflow."""

import hmac
import logging
from typing import Any

from sitelaunch.application.interfaces import ClientRecordRepository
from sitelaunch.application.services.notification_service import (
    NotificationResult,
    NotificationService,
)
from sitelaunch.application.services.validation_service import validate_webhook_payload
from sitelaunch.domain.entities import ClientRecord, ClientStatus
from sitelaunch.domain.exceptions import (
    EntityNotFoundError,
    ValidationFailedError,
    WebhookAuthError,
)

logger = logging.getLogger(__name__)

UNKNOWN_DEPLOYMENT_ERROR = "Unknown deployment error"


class DeploymentCallbackService:
    """Authenticates, validates and applies one deployment status report.

    The status update is committed by the request session regardless of the
    outcome of the follow-up email; notification failures are only logged.
    """

    def __init__(
        self,
        repository: ClientRecordRepository,
        notifications: NotificationService,
        webhook_secret: str = "",
    ):
        self._repository = repository
        self._notifications = notifications
        self._webhook_secret = webhook_secret

    def verify_secret(self, provided: str | None) -> None:
        """Raise WebhookAuthError unless ``provided`` matches the configured secret.

        With no secret configured every caller is accepted.
        """
        if not self._webhook_secret:
            return
        if provided is None or not hmac.compare_digest(
            provided.encode("utf-8"), self._webhook_secret.encode("utf-8")
        ):
            raise WebhookAuthError()

    async def update_deployment(self, raw: Any, secret: str | None) -> ClientRecord:
        """Apply a status report and send the matching owner notification.

        Raises:
            WebhookAuthError: Wrong or missing secret; nothing is read or written.
            ValidationFailedError: Malformed payload.
            EntityNotFoundError: Unknown client id.
        """
        self.verify_secret(secret)

        result = validate_webhook_payload(raw)
        if not result.ok:
            raise ValidationFailedError(result.errors, "Invalid payload")
        payload = result.value

        client = await self._repository.get_by_id(payload.client_id)
        if client is None:
            raise EntityNotFoundError("ClientRecord", payload.client_id)

        previous = client.status
        client.update_deployment(payload.status, payload.deployment_url)
        client = await self._repository.update(client)
        logger.info(
            "Client %s (%s) deployment %s -> %s",
            client.id,
            client.subdomain,
            previous.value,
            client.status.value,
        )

        await self._notify(client, payload.error)
        return client

    async def _notify(self, client: ClientRecord, error: str | None) -> None:
        try:
            outcome = await self._send_for_status(client, error)
        except Exception:
            logger.exception("Notification for client %s failed", client.id)
            return

        if outcome is not None and not outcome.success:
            logger.warning(
                "Notification for client %s not sent: %s", client.id, outcome.error
            )

    async def _send_for_status(
        self, client: ClientRecord, error: str | None
    ) -> NotificationResult | None:
        if client.status is ClientStatus.ACTIVE and client.deployment_url:
            return await self._notifications.send_welcome(
                client.email, client.subdomain, client.business_name
            )
        elif client.status is ClientStatus.FAILED:
            return await self._notifications.send_failure(
                client.email, client.business_name, error or UNKNOWN_DEPLOYMENT_ERROR
            )
        return None
