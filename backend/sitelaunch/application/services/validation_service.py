"""Canonical validation entry points.

Each ``validate_*`` function is total: it never raises for bad input and
returns a ``ValidationResult`` holding either the typed value or the ordered
list of field errors. Object schemas report every failing field, not just
the first one.
"""

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from sitelaunch.application.schemas.client import (
    ClientDataCreate,
    ContactInquiry,
    DeploymentWebhookPayload,
    check_email,
    check_phone,
    subdomain_problems,
)
from sitelaunch.domain.exceptions import FieldError

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

# Messages for fields that are absent altogether (or null where a string is required).
_REQUIRED_MESSAGES: dict[str, str] = {
    "businessName": "Business name is required",
    "subdomain": "Subdomain is required",
    "industry": "Please select an industry",
    "email": "Email is required",
    "phone": "Phone is required",
    "aboutUs": "About us is required",
    "services": "Please add at least 3 services",
    "clientId": "Client ID is required",
    "status": "Invalid deployment status",
    "name": "Name is required",
    "message": "Message is required",
}


@dataclass
class ValidationResult(Generic[T]):
    """Either a typed value (``ok``) or a list of field errors."""

    value: T | None = None
    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def _field_path(loc: tuple[Any, ...]) -> str:
    return ".".join(str(part) for part in loc) or "__root__"


def _to_field_errors(exc: ValidationError) -> list[FieldError]:
    errors: list[FieldError] = []
    for err in exc.errors(include_url=False):
        path = _field_path(tuple(err["loc"]))
        if err["type"] == "missing" or (
            err["type"] in ("string_type", "list_type") and err.get("input") is None
        ):
            message = _REQUIRED_MESSAGES.get(path, "This field is required")
        else:
            message = err["msg"]
        errors.append(FieldError(field=path, message=message))
    return errors


def _validate_model(model: type[M], raw: Any) -> ValidationResult[M]:
    if not isinstance(raw, dict):
        return ValidationResult(errors=[FieldError("__root__", "Expected a JSON object")])
    try:
        return ValidationResult(value=model.model_validate(raw))
    except ValidationError as exc:
        return ValidationResult(errors=_to_field_errors(exc))


def validate_client_data(raw: Any) -> ValidationResult[ClientDataCreate]:
    return _validate_model(ClientDataCreate, raw)


def validate_webhook_payload(raw: Any) -> ValidationResult[DeploymentWebhookPayload]:
    return _validate_model(DeploymentWebhookPayload, raw)


def validate_contact_inquiry(raw: Any) -> ValidationResult[ContactInquiry]:
    return _validate_model(ContactInquiry, raw)


def validate_subdomain(raw: Any) -> ValidationResult[str]:
    """Shape check only; the caller lower-cases before any lookup."""
    if not isinstance(raw, str) or not raw:
        return ValidationResult(errors=[FieldError("subdomain", "Subdomain is required")])
    problems = subdomain_problems(raw)
    if problems:
        return ValidationResult(errors=[FieldError("subdomain", p) for p in problems])
    return ValidationResult(value=raw)


def validate_email(raw: Any) -> ValidationResult[str]:
    return _validate_scalar("email", check_email, raw)


def validate_phone(raw: Any) -> ValidationResult[str]:
    return _validate_scalar("phone", check_phone, raw)


def _validate_scalar(name: str, check, raw: Any) -> ValidationResult[str]:
    if not isinstance(raw, str):
        return ValidationResult(errors=[FieldError(name, _REQUIRED_MESSAGES[name])])
    try:
        return ValidationResult(value=check(raw))
    except ValueError as exc:
        # PydanticCustomError is a ValueError subclass carrying the stable message.
        message = exc.message() if hasattr(exc, "message") else str(exc)
        return ValidationResult(errors=[FieldError(name, message)])


def first_error_per_field(errors: list[FieldError]) -> dict[str, str]:
    """Collapse errors to one message per top-level field, keeping the first."""
    collapsed: dict[str, str] = {}
    for error in errors:
        top = error.field.split(".", 1)[0]
        collapsed.setdefault(top, error.message)
    return collapsed
