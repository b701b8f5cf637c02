"""Unit tests for the deploy workflow webhook client."""

import json

import httpx
import pytest

from sitelaunch.domain.exceptions import UpstreamServiceError
from sitelaunch.infrastructure.deploy import WorkflowWebhookClient

PAYLOAD = {"clientId": "c1", "subdomain": "joes-pizza", "templateId": "restaurant", "data": {}}


def _client(handler, url: str = "https://n8n.test/webhook/deploy") -> WorkflowWebhookClient:
    return WorkflowWebhookClient(
        webhook_url=url,
        secret="s3cret",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


@pytest.mark.asyncio
async def test_trigger_attaches_shared_secret():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"ok": True})

    await _client(handler).trigger(PAYLOAD)

    assert captured["url"] == "https://n8n.test/webhook/deploy"
    assert captured["body"] == {**PAYLOAD, "secret": "s3cret"}
    assert "secret" not in PAYLOAD


@pytest.mark.asyncio
async def test_error_status_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="workflow paused")

    with pytest.raises(UpstreamServiceError) as exc_info:
        await _client(handler).trigger(PAYLOAD)

    assert exc_info.value.provider == "n8n"
    assert exc_info.value.status_code == 503
    assert exc_info.value.message == "workflow paused"


@pytest.mark.asyncio
async def test_timeout_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out")

    with pytest.raises(UpstreamServiceError):
        await _client(handler).trigger(PAYLOAD)


@pytest.mark.asyncio
async def test_unconfigured_client_refuses():
    client = WorkflowWebhookClient(webhook_url="")
    assert not client.is_configured
    with pytest.raises(UpstreamServiceError):
        await client.trigger(PAYLOAD)
