"""Cloudflare DNS client: implements the DnsProvider port.

Manages the proxied CNAME that points a client subdomain at the Pages
target. Every failure (missing credentials, API error, network error) is
reported through the result object and logged; nothing is raised.
"""

import logging
from typing import Any

import httpx

from sitelaunch.application.interfaces import DnsLookup, DnsProvider, DnsResult

logger = logging.getLogger(__name__)

NOT_CONFIGURED = "Cloudflare credentials not configured"


class CloudflareDnsClient(DnsProvider):
    def __init__(
        self,
        api_token: str,
        zone_id: str,
        base_domain: str,
        *,
        pages_target: str = "pages.dev",
        base_url: str = "https://api.cloudflare.com/client/v4",
        timeout: float = 15.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._api_token = api_token.strip()
        self._zone_id = zone_id.strip()
        self._base_domain = base_domain
        self._pages_target = pages_target
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._http_client = http_client

    @property
    def is_configured(self) -> bool:
        return bool(self._api_token and self._zone_id)

    def _get_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_token}",
            "Content-Type": "application/json",
        }

    @property
    def _records_url(self) -> str:
        return f"{self._base_url}/zones/{self._zone_id}/dns_records"

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    async def _request(self, method: str, url: str, **kwargs: Any) -> tuple[int, dict]:
        client = await self._get_client()
        should_close = self._http_client is None
        try:
            response = await client.request(method, url, headers=self._get_headers(), **kwargs)
        finally:
            if should_close:
                await client.aclose()
        try:
            data = response.json()
        except ValueError:
            data = {}
        return response.status_code, data if isinstance(data, dict) else {}

    @staticmethod
    def _error_message(data: dict, fallback: str) -> str:
        errors = data.get("errors") or []
        if errors and isinstance(errors[0], dict) and errors[0].get("message"):
            return errors[0]["message"]
        return fallback

    async def create_cname(self, subdomain: str) -> DnsResult:
        """Create a proxied CNAME for ``subdomain`` with automatic TTL."""
        if not self.is_configured:
            return DnsResult(success=False, error=NOT_CONFIGURED)

        record = {
            "type": "CNAME",
            "name": subdomain,
            "content": self._pages_target,
            "ttl": 1,
            "proxied": True,
        }
        try:
            status, data = await self._request("POST", self._records_url, json=record)
        except httpx.HTTPError as exc:
            logger.error("Error creating DNS record for %s: %s", subdomain, exc)
            return DnsResult(success=False, error=str(exc) or type(exc).__name__)

        if status >= 400 or not data.get("success"):
            logger.error("Cloudflare API error creating %s: %s", subdomain, data)
            return DnsResult(
                success=False,
                error=self._error_message(data, "Failed to create DNS record"),
            )

        record_id = (data.get("result") or {}).get("id")
        logger.info("Created CNAME %s.%s (%s)", subdomain, self._base_domain, record_id)
        return DnsResult(success=True, record_id=record_id)

    async def delete_record(self, record_id: str) -> DnsResult:
        if not self.is_configured:
            return DnsResult(success=False, error=NOT_CONFIGURED)

        try:
            status, data = await self._request("DELETE", f"{self._records_url}/{record_id}")
        except httpx.HTTPError as exc:
            logger.error("Error deleting DNS record %s: %s", record_id, exc)
            return DnsResult(success=False, error=str(exc) or type(exc).__name__)

        if status >= 400 or not data.get("success"):
            logger.error("Cloudflare API error deleting %s: %s", record_id, data)
            return DnsResult(
                success=False,
                error=self._error_message(data, "Failed to delete DNS record"),
            )
        return DnsResult(success=True, record_id=record_id)

    async def find_cname(self, subdomain: str) -> DnsLookup:
        """Look up the CNAME for ``subdomain``. Any failure reads as "not found"."""
        if not self.is_configured:
            return DnsLookup(exists=False)

        params = {"name": f"{subdomain}.{self._base_domain}", "type": "CNAME"}
        try:
            status, data = await self._request("GET", self._records_url, params=params)
        except httpx.HTTPError as exc:
            logger.error("Error checking DNS record for %s: %s", subdomain, exc)
            return DnsLookup(exists=False)

        if status >= 400 or not data.get("success"):
            return DnsLookup(exists=False)

        records = data.get("result") or []
        if not records:
            return DnsLookup(exists=False)
        return DnsLookup(exists=True, record_id=records[0].get("id"))
