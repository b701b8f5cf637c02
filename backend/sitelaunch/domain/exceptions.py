"""Domain-specific exceptions, framework-independent."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    """A single user-correctable problem with one input field."""

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(Exception):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class ValidationFailedError(Exception):
    """Raised when input fails schema validation. Carries every field error."""

    def __init__(self, errors: list[FieldError], message: str = "Validation failed"):
        self.errors = errors
        self.message = message
        super().__init__(f"{message}: {len(errors)} error(s)")


class WebhookAuthError(Exception):
    """Raised when an inbound webhook carries the wrong shared secret."""

    def __init__(self, message: str = "Invalid webhook secret"):
        self.message = message
        super().__init__(message)


class UnknownTemplateError(ValueError):
    """Raised for a template variant with no generator."""

    def __init__(self, template_id: str):
        self.template_id = template_id
        super().__init__(f"Unknown template ID: {template_id}")


class UpstreamServiceError(Exception):
    """Raised when an external service (deploy workflow, DNS, email) fails.

    Provider-agnostic: used by the n8n, Cloudflare and Brevo adapters.
    """

    def __init__(self, provider: str, status_code: int, message: str):
        self.provider = provider
        self.status_code = status_code
        self.message = message
        super().__init__(f"[{provider}] {status_code}: {message}")


class SiteApiError(Exception):
    """Raised by the Site API client when the backend rejects a request."""

    def __init__(
        self,
        status_code: int,
        message: str,
        errors: list[FieldError] | None = None,
    ):
        self.status_code = status_code
        self.message = message
        self.errors = errors or []
        super().__init__(f"{status_code}: {message}")
