"""Domain entity for the client-side signup wizard draft."""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any


class WizardStep(IntEnum):
    """The five ordered wizard steps."""

    BUSINESS_BASICS = 1
    CONTACT_INFO = 2
    BUSINESS_DETAILS = 3
    SOCIAL_LINKS = 4
    PREVIEW = 5

    @property
    def title(self) -> str:
        return self.name.replace("_", " ").title()


class WizardPhase(str, Enum):
    EDITING = "editing"
    SUBMITTING = "submitting"
    SUBMITTED = "submitted"


class AvailabilityState(str, Enum):
    """What the wizard currently knows about the chosen subdomain."""

    UNKNOWN = "unknown"
    CHECKING = "checking"
    AVAILABLE = "available"
    TAKEN = "taken"


@dataclass
class WizardDraft:
    """A partially filled client record plus UI-only state.

    ``data`` uses the wire (camelCase) field names so it can be sent to
    the create-site endpoint unchanged.
    """

    data: dict[str, Any] = field(default_factory=lambda: {"services": []})
    step: WizardStep = WizardStep.BUSINESS_BASICS
    errors: dict[str, str] = field(default_factory=dict)
    availability: AvailabilityState = AvailabilityState.UNKNOWN

    def to_dict(self) -> dict[str, Any]:
        return {
            "data": self.data,
            "step": int(self.step),
            "errors": dict(self.errors),
            "availability": self.availability.value,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "WizardDraft":
        data = raw.get("data") or {}
        data.setdefault("services", [])
        # A check in flight when the draft was saved never completed.
        availability = AvailabilityState(raw.get("availability", "unknown"))
        if availability is AvailabilityState.CHECKING:
            availability = AvailabilityState.UNKNOWN
        return cls(
            data=data,
            step=WizardStep(raw.get("step", 1)),
            errors=dict(raw.get("errors") or {}),
            availability=availability,
        )
