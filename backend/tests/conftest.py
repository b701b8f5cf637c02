"""Shared fixtures."""

from typing import Any

import pytest

from fakes import (
    FakeClientRecordRepository,
    FakeDeployNotificationRepository,
    FakeEmailProvider,
)


@pytest.fixture
def valid_signup() -> dict[str, Any]:
    return {
        "businessName": "Joe's Pizza",
        "subdomain": "joes-pizza",
        "industry": "restaurant",
        "email": "a@b.com",
        "phone": "1234567890",
        "aboutUs": "A decade of great pizza.",
        "services": ["Pizza", "Pasta", "Salad"],
    }


@pytest.fixture
def client_repo() -> FakeClientRecordRepository:
    return FakeClientRecordRepository()


@pytest.fixture
def notification_repo() -> FakeDeployNotificationRepository:
    return FakeDeployNotificationRepository()


@pytest.fixture
def email_provider() -> FakeEmailProvider:
    return FakeEmailProvider()
