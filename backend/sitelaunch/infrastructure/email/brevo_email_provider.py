"""Brevo transactional email adapter: implements the EmailProvider port.

Sends through the Brevo REST API (``POST /smtp/email``) using httpx.
"""

import logging

import httpx

from sitelaunch.application.interfaces import EmailProvider, OutgoingEmail
from sitelaunch.domain.exceptions import UpstreamServiceError

logger = logging.getLogger(__name__)


class BrevoEmailProvider(EmailProvider):
    def __init__(
        self,
        api_key: str,
        sender_email: str,
        sender_name: str = "WOW Sites",
        base_url: str = "https://api.brevo.com/v3",
        timeout: float = 15.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._api_key = api_key.strip()
        self._sender_email = sender_email
        self._sender_name = sender_name
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._http_client = http_client

    @property
    def provider_name(self) -> str:
        return "brevo"

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    def _get_headers(self) -> dict[str, str]:
        return {
            "api-key": self._api_key,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def _build_payload(self, email: OutgoingEmail) -> dict:
        payload: dict = {
            "sender": {"name": self._sender_name, "email": self._sender_email},
            "to": [{"email": email.to}],
            "subject": email.subject,
            "htmlContent": email.html_content,
            "textContent": email.text_content,
        }
        if email.reply_to:
            payload["replyTo"] = {"email": email.reply_to}
        return payload

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    async def send(self, email: OutgoingEmail) -> None:
        if not self.is_configured:
            raise UpstreamServiceError(self.provider_name, 0, "Brevo API key not configured")

        client = await self._get_client()
        should_close = self._http_client is None

        try:
            response = await client.post(
                f"{self._base_url}/smtp/email",
                headers=self._get_headers(),
                json=self._build_payload(email),
            )
        except httpx.HTTPError as exc:
            raise UpstreamServiceError(
                self.provider_name, 0, str(exc) or type(exc).__name__
            ) from exc
        finally:
            if should_close:
                await client.aclose()

        if response.is_error:
            self._raise_provider_error(response)
        logger.debug("Brevo accepted email to %s", email.to)

    def _raise_provider_error(self, response: httpx.Response) -> None:
        """Raise UpstreamServiceError from a non-2xx Brevo response."""
        try:
            data = response.json()
        except ValueError:
            data = {}
        message = (data.get("message") if isinstance(data, dict) else None) or "Failed to send email"

        raise UpstreamServiceError(
            provider=self.provider_name,
            status_code=response.status_code,
            message=message,
        )
