"""Unit tests for the BrevoEmailProvider."""

import json

import httpx
import pytest

from sitelaunch.application.interfaces import OutgoingEmail
from sitelaunch.domain.exceptions import UpstreamServiceError
from sitelaunch.infrastructure.email import BrevoEmailProvider


# ── Helpers ──


def _email(**overrides) -> OutgoingEmail:
    fields = {
        "to": "owner@example.com",
        "subject": "Hello",
        "html_content": "<p>Hi</p>",
        "text_content": "Hi",
    }
    fields.update(overrides)
    return OutgoingEmail(**fields)


def _provider(handler, api_key: str = "xkeysib-test") -> BrevoEmailProvider:
    return BrevoEmailProvider(
        api_key=api_key,
        sender_email="noreply@example.com",
        sender_name="WOW Sites",
        base_url="https://brevo.test/v3",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


# ── Tests ──


@pytest.mark.asyncio
async def test_send_posts_transactional_email():
    captured: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["api_key"] = request.headers.get("api-key")
        captured["body"] = json.loads(request.content)
        return httpx.Response(201, json={"messageId": "<abc@smtp-relay>"})

    await _provider(handler).send(_email(reply_to="ann@example.com"))

    assert captured["url"] == "https://brevo.test/v3/smtp/email"
    assert captured["api_key"] == "xkeysib-test"
    body = captured["body"]
    assert body["sender"] == {"name": "WOW Sites", "email": "noreply@example.com"}
    assert body["to"] == [{"email": "owner@example.com"}]
    assert body["subject"] == "Hello"
    assert body["htmlContent"] == "<p>Hi</p>"
    assert body["textContent"] == "Hi"
    assert body["replyTo"] == {"email": "ann@example.com"}


@pytest.mark.asyncio
async def test_reply_to_omitted_when_unset():
    bodies = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(201, json={})

    await _provider(handler).send(_email())
    assert "replyTo" not in bodies[0]


@pytest.mark.asyncio
async def test_error_response_uses_provider_message():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"code": "invalid_parameter", "message": "sender is invalid"})

    with pytest.raises(UpstreamServiceError) as exc_info:
        await _provider(handler).send(_email())

    assert exc_info.value.provider == "brevo"
    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "sender is invalid"


@pytest.mark.asyncio
async def test_error_response_without_body_uses_fallback():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="gateway exploded")

    with pytest.raises(UpstreamServiceError) as exc_info:
        await _provider(handler).send(_email())

    assert exc_info.value.message == "Failed to send email"


@pytest.mark.asyncio
async def test_network_error_becomes_upstream_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused")

    with pytest.raises(UpstreamServiceError) as exc_info:
        await _provider(handler).send(_email())

    assert exc_info.value.status_code == 0


def test_is_configured_requires_api_key():
    assert not BrevoEmailProvider(api_key="  ", sender_email="a@b.com").is_configured
    assert BrevoEmailProvider(api_key="key", sender_email="a@b.com").is_configured
