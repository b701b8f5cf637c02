"""Deploy workflow webhook client: implements the DeployWorkflowClient port.

Posts a queued client record to the n8n workflow that builds and hosts the
site. The shared secret is attached here, at delivery time, so it is never
stored alongside the outbox entry; the workflow echoes it back on the
update-deployment callback.
"""

import logging
from typing import Any

import httpx

from sitelaunch.application.interfaces import DeployWorkflowClient
from sitelaunch.domain.exceptions import UpstreamServiceError

logger = logging.getLogger(__name__)


class WorkflowWebhookClient(DeployWorkflowClient):
    """Infrastructure adapter for the deploy workflow's inbound webhook."""

    def __init__(
        self,
        webhook_url: str,
        secret: str = "",
        timeout: float = 15.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._webhook_url = webhook_url.strip()
        self._secret = secret
        self._timeout = timeout
        self._http_client = http_client

    @property
    def provider_name(self) -> str:
        return "n8n"

    @property
    def is_configured(self) -> bool:
        return bool(self._webhook_url)

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    async def trigger(self, payload: dict[str, Any]) -> None:
        if not self.is_configured:
            raise UpstreamServiceError(self.provider_name, 0, "Webhook URL not configured")

        body = {**payload, "secret": self._secret}
        client = await self._get_client()
        should_close = self._http_client is None

        try:
            response = await client.post(self._webhook_url, json=body)
        except httpx.HTTPError as exc:
            raise UpstreamServiceError(
                self.provider_name, 0, str(exc) or type(exc).__name__
            ) from exc
        finally:
            if should_close:
                await client.aclose()

        if response.is_error:
            raise UpstreamServiceError(
                provider=self.provider_name,
                status_code=response.status_code,
                message=response.text[:500] or response.reason_phrase,
            )
        logger.debug("Deploy workflow accepted client %s", payload.get("clientId"))
