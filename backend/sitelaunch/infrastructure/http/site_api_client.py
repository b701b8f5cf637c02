"""HTTP client for the Site Launch API: implements the SiteApi port.

Used by the signup wizard and the status poller, which run outside the
server process.
"""

import logging
from typing import Any

import httpx

from sitelaunch.application.interfaces import (
    AvailabilityReply,
    CreateSiteReply,
    SiteApi,
    StatusReply,
)
from sitelaunch.domain.exceptions import FieldError, SiteApiError

logger = logging.getLogger(__name__)


class HttpSiteApiClient(SiteApi):
    def __init__(
        self,
        base_url: str,
        timeout: float = 15.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._http_client = http_client

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        client = await self._get_client()
        should_close = self._http_client is None
        try:
            return await client.request(method, f"{self._base_url}/{path}", **kwargs)
        except httpx.HTTPError as exc:
            raise SiteApiError(0, str(exc) or "Network error") from exc
        finally:
            if should_close:
                await client.aclose()

    @staticmethod
    def _body(response: httpx.Response) -> dict:
        try:
            data = response.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}

    async def check_subdomain(self, subdomain: str) -> AvailabilityReply:
        response = await self._request(
            "GET", "check-subdomain", params={"subdomain": subdomain}
        )
        data = self._body(response)
        if response.status_code >= 500:
            raise SiteApiError(response.status_code, data.get("error") or "Server error")
        # 400 and 429 carry a normal {available: false, message} body.
        return AvailabilityReply(
            available=bool(data.get("available")),
            message=data.get("message") or "",
        )

    async def create_site(self, data: dict[str, Any]) -> CreateSiteReply:
        response = await self._request("POST", "create-site", json=data)
        body = self._body(response)
        if response.is_error or not body.get("success"):
            errors = [
                FieldError(field=d.get("field", ""), message=d.get("message", ""))
                for d in body.get("details") or []
                if isinstance(d, dict)
            ]
            raise SiteApiError(
                response.status_code,
                body.get("error") or "Failed to create site",
                errors,
            )
        return CreateSiteReply(
            client_id=body["clientId"],
            subdomain=body["subdomain"],
            website_url=body["websiteUrl"],
        )

    async def get_status(self, client_id: str) -> StatusReply:
        response = await self._request(
            "GET", "client-status", params={"clientId": client_id}
        )
        body = self._body(response)
        if response.is_error:
            raise SiteApiError(response.status_code, body.get("error") or "Failed to fetch status")
        return StatusReply(
            status=body["status"],
            deployment_url=body.get("deploymentUrl"),
            subdomain=body["subdomain"],
        )
