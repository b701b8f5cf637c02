"""Pydantic DTOs and validation rules for client records.

Every rule raises ``PydanticCustomError`` with a fixed message so the
field errors returned to callers are stable strings. The same models back
the API, the signup wizard and the generated sites' contact endpoint.
"""

import re
from datetime import date, datetime
from typing import Annotated, Any

from pydantic import (
    AfterValidator,
    AnyUrl,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from sitelaunch.domain.entities.client_record import ClientStatus, Industry

SUBDOMAIN_MIN_LENGTH = 3
SUBDOMAIN_MAX_LENGTH = 30
MIN_SERVICES = 3

# Applied with fullmatch, so a trailing newline is rejected too.
_SUBDOMAIN_CHARSET = re.compile(r"[a-z0-9-]+")
_EMAIL_PATTERN = re.compile(r"[A-Za-z0-9._%+'-]+@[A-Za-z0-9-]+(\.[A-Za-z0-9-]+)*\.[A-Za-z]{2,}")
_PHONE_CHARSET = re.compile(r"[\d \-\+\(\)]+", re.ASCII)
_INDUSTRY_VALUES = frozenset(i.value for i in Industry)
_STATUS_VALUES = frozenset(s.value for s in ClientStatus)
_url_adapter = TypeAdapter(AnyUrl)


def _fail(field: str, message: str) -> PydanticCustomError:
    return PydanticCustomError(field, message)


# ── Field rules (shared) ─────────────────────────────────────────────


def check_subdomain(value: str) -> str:
    """Raise for the first failing subdomain rule, in declaration order."""
    problems = subdomain_problems(value)
    if problems:
        raise _fail("subdomain", problems[0])
    return value


def subdomain_problems(value: str) -> list[str]:
    """Every subdomain rule the value breaks. Does not lower-case."""
    problems = []
    if len(value) < SUBDOMAIN_MIN_LENGTH:
        problems.append("Subdomain must be at least 3 characters")
    if len(value) > SUBDOMAIN_MAX_LENGTH:
        problems.append("Subdomain must be at most 30 characters")
    if value and not _SUBDOMAIN_CHARSET.fullmatch(value):
        problems.append(
            "Subdomain can only contain lowercase letters, numbers, and hyphens"
        )
    if value.startswith("-") or value.endswith("-"):
        problems.append("Subdomain cannot start or end with a hyphen")
    return problems


def check_email(value: str) -> str:
    if not value:
        raise _fail("email", "Email is required")
    if not _EMAIL_PATTERN.fullmatch(value):
        raise _fail("email", "Please enter a valid email address")
    return value


def check_phone(value: str) -> str:
    # Raw length, not digit count.
    if len(value) < 10:
        raise _fail("phone", "Phone number must be at least 10 digits")
    if not _PHONE_CHARSET.fullmatch(value):
        raise _fail("phone", "Please enter a valid phone number")
    return value


def check_url(value: str) -> str:
    try:
        _url_adapter.validate_python(value)
    except ValidationError:
        raise _fail("url", "Please enter a valid URL") from None
    return value


def check_service_name(value: str) -> str:
    if not value.strip():
        raise _fail("service", "Service name cannot be empty")
    return value


ServiceName = Annotated[str, AfterValidator(check_service_name)]


# ── Client data ──────────────────────────────────────────────────────


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class BusinessHours(_CamelModel):
    """Opening hours keyed by weekday; a missing or empty day means closed."""

    monday: str | None = None
    tuesday: str | None = None
    wednesday: str | None = None
    thursday: str | None = None
    friday: str | None = None
    saturday: str | None = None
    sunday: str | None = None


class SocialLinks(_CamelModel):
    """Optional social profile links. Empty strings are allowed."""

    facebook: str | None = None
    instagram: str | None = None
    website: str | None = None

    @field_validator("facebook", "instagram", "website")
    @classmethod
    def _url_or_empty(cls, value: str | None) -> str | None:
        if value is None or value == "":
            return value
        return check_url(value)


class ClientDataCreate(_CamelModel):
    """Full client record as submitted by the signup wizard."""

    business_name: str = Field(..., examples=["Joe's Pizza"])
    subdomain: str = Field(..., examples=["joes-pizza"])
    industry: Industry
    email: str = Field(..., examples=["owner@joespizza.com"])
    phone: str = Field(..., examples=["(555) 123-4567"])
    address: str | None = None
    about_us: str
    services: list[ServiceName] = Field(..., examples=[["Pizza", "Pasta", "Salad"]])
    hours: BusinessHours | None = None
    social_links: SocialLinks | None = None

    @field_validator("business_name")
    @classmethod
    def _business_name(cls, value: str) -> str:
        if len(value) < 1:
            raise _fail("business_name", "Business name is required")
        if len(value) > 100:
            raise _fail("business_name", "Business name must be at most 100 characters")
        return value

    @field_validator("subdomain")
    @classmethod
    def _subdomain(cls, value: str) -> str:
        return check_subdomain(value)

    @field_validator("industry", mode="before")
    @classmethod
    def _industry(cls, value: Any) -> Any:
        if isinstance(value, Industry):
            return value
        if not isinstance(value, str) or value not in _INDUSTRY_VALUES:
            raise _fail("industry", "Please select an industry")
        return value

    @field_validator("email")
    @classmethod
    def _email(cls, value: str) -> str:
        return check_email(value)

    @field_validator("phone")
    @classmethod
    def _phone(cls, value: str) -> str:
        return check_phone(value)

    @field_validator("address")
    @classmethod
    def _address(cls, value: str | None) -> str | None:
        if value is not None and len(value) > 200:
            raise _fail("address", "Address must be at most 200 characters")
        return value

    @field_validator("about_us")
    @classmethod
    def _about_us(cls, value: str) -> str:
        if len(value) < 10:
            raise _fail("about_us", "About us must be at least 10 characters")
        if len(value) > 500:
            raise _fail("about_us", "About us must be at most 500 characters")
        return value

    @field_validator("services")
    @classmethod
    def _services(cls, value: list[ServiceName]) -> list[str]:
        if len(value) < MIN_SERVICES:
            raise _fail("services", "Please add at least 3 services")
        return value

    def business_fields(self) -> dict[str, Any]:
        """Business fields forwarded to the deploy workflow, wire-named."""
        return {
            "businessName": self.business_name,
            "email": self.email,
            "phone": self.phone,
            "address": self.address,
            "aboutUs": self.about_us,
            "services": list(self.services),
            "hours": self.hours.model_dump() if self.hours else None,
            "socialLinks": self.social_links.model_dump() if self.social_links else None,
        }


class DeploymentWebhookPayload(_CamelModel):
    """Status report posted back by the deploy workflow."""

    client_id: str
    status: ClientStatus
    deployment_url: str | None = None
    error: str | None = None

    @field_validator("client_id")
    @classmethod
    def _client_id(cls, value: str) -> str:
        if not value:
            raise _fail("client_id", "Client ID is required")
        return value

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value: Any) -> Any:
        if isinstance(value, ClientStatus):
            return value
        if not isinstance(value, str) or value not in _STATUS_VALUES:
            raise _fail("status", "Invalid deployment status")
        return value

    @field_validator("deployment_url")
    @classmethod
    def _deployment_url(cls, value: str | None) -> str | None:
        if value is None:
            return value
        return check_url(value)


class ContactInquiry(_CamelModel):
    """Visitor message submitted from a generated site's contact form."""

    name: str
    email: str
    phone: str
    message: str
    preferred_date: date | None = None
    service_type: str | None = None

    @field_validator("name")
    @classmethod
    def _name(cls, value: str) -> str:
        if not value.strip():
            raise _fail("name", "Name is required")
        return value.strip()

    @field_validator("email")
    @classmethod
    def _email(cls, value: str) -> str:
        return check_email(value.strip())

    @field_validator("phone")
    @classmethod
    def _phone(cls, value: str) -> str:
        return check_phone(value.strip())

    @field_validator("message")
    @classmethod
    def _message(cls, value: str) -> str:
        if not value.strip():
            raise _fail("message", "Message is required")
        return value.strip()

    @field_validator("preferred_date", mode="before")
    @classmethod
    def _preferred_date(cls, value: Any) -> Any:
        if value in (None, ""):
            return None
        return value

    @field_validator("preferred_date")
    @classmethod
    def _future_date(cls, value: date | None) -> date | None:
        if value is not None and value < date.today():
            raise _fail("preferred_date", "Please select a future date")
        return value


# ── Responses ────────────────────────────────────────────────────────


class FieldErrorSchema(BaseModel):
    field: str
    message: str


class SubdomainCheckResponse(BaseModel):
    available: bool
    message: str


class CreateSiteResponse(_CamelModel):
    success: bool = True
    client_id: str
    subdomain: str
    website_url: str
    message: str = "Site creation initiated successfully"


class DeploymentClientSummary(_CamelModel):
    id: str
    status: ClientStatus
    deployment_url: str | None


class DeploymentUpdateResponse(_CamelModel):
    success: bool = True
    message: str = "Deployment status updated successfully"
    client: DeploymentClientSummary


class ClientResponse(_CamelModel):
    """Full client record as returned to the dashboard."""

    id: str
    business_name: str
    subdomain: str
    industry: Industry
    email: str
    phone: str
    address: str | None
    about_us: str
    services: list[str]
    hours: dict[str, str | None] | None
    social_links: dict[str, str | None] | None
    template_id: str
    status: ClientStatus
    deployment_url: str | None
    created_at: datetime
    updated_at: datetime


class ClientStatusResponse(_CamelModel):
    status: ClientStatus
    deployment_url: str | None
    subdomain: str


class ContactInquiryResponse(BaseModel):
    success: bool = True
    message: str
