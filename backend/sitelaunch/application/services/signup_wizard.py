"""Signup Wizard: five-step state machine that collects a client record.

The wizard persists its draft after every mutation, re-checks subdomain
availability after a debounce, and runs the canonical schema before
submitting. Availability replies carry the token of the request that
produced them; only the reply for the latest token may update the draft,
so a slow response for an older value can never overwrite a fresher one.

Must be driven from inside a running event loop.
"""

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Any

from sitelaunch.application.interfaces import DraftStore, SiteApi
from sitelaunch.application.schemas.client import SUBDOMAIN_MIN_LENGTH
from sitelaunch.application.services.validation_service import (
    first_error_per_field,
    validate_client_data,
)
from sitelaunch.domain.entities.wizard_draft import (
    AvailabilityState,
    WizardDraft,
    WizardPhase,
    WizardStep,
)
from sitelaunch.domain.exceptions import SiteApiError

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 0.5

_NOT_SUBDOMAIN_CHARS = re.compile(r"[^a-z0-9-]")
# Deliberately looser than the canonical email rule.
_LOOSE_EMAIL = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def sanitize_subdomain(value: str) -> str:
    """Lower-case and drop every character a subdomain cannot contain."""
    return _NOT_SUBDOMAIN_CHARS.sub("", value.lower())


@dataclass
class SubmitOutcome:
    success: bool
    client_id: str | None = None
    website_url: str | None = None
    toast: str | None = None


class SignupWizard:
    def __init__(
        self,
        draft_store: DraftStore,
        site_api: SiteApi,
        *,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
    ):
        self._store = draft_store
        self._api = site_api
        self._debounce_seconds = debounce_seconds
        self.draft = draft_store.load() or WizardDraft()
        self.phase = WizardPhase.EDITING
        self.toast: str | None = None
        self.client_id: str | None = None
        self._check_token = 0
        self._debounce_task: asyncio.Task | None = None
        self._inflight: set[asyncio.Task] = set()

    # ── Read-only view ───────────────────────────────────────────────

    @property
    def step(self) -> WizardStep:
        return self.draft.step

    @property
    def data(self) -> dict[str, Any]:
        return self.draft.data

    @property
    def errors(self) -> dict[str, str]:
        return self.draft.errors

    @property
    def availability(self) -> AvailabilityState:
        return self.draft.availability

    # ── Mutations (each one persists the draft) ──────────────────────

    def update_field(self, name: str, value: Any) -> None:
        if name == "subdomain":
            value = sanitize_subdomain(value or "")
        self.draft.data[name] = value
        self.draft.errors.pop(name, None)
        if name == "subdomain":
            self._schedule_availability_check(value)
        self._persist()

    def update_hours(self, day: str, value: str) -> None:
        hours = self.draft.data.get("hours") or {}
        hours[day] = value
        self.draft.data["hours"] = hours
        self._persist()

    def update_social_link(self, network: str, url: str) -> None:
        links = self.draft.data.get("socialLinks") or {}
        links[network] = url
        self.draft.data["socialLinks"] = links
        self.draft.errors.pop("socialLinks", None)
        self._persist()

    def add_service(self) -> None:
        self._services().append("")
        self._persist()

    def remove_service(self, index: int) -> None:
        services = self._services()
        if 0 <= index < len(services):
            del services[index]
        self._persist()

    def update_service(self, index: int, value: str) -> None:
        services = self._services()
        if 0 <= index < len(services):
            services[index] = value
        self._persist()

    # ── Navigation ───────────────────────────────────────────────────

    def next(self) -> bool:
        """Advance one step if the current step's rules pass."""
        errors = self.validate_step(self.draft.step)
        self.draft.errors = errors
        if not errors and self.draft.step < WizardStep.PREVIEW:
            self.draft.step = WizardStep(self.draft.step + 1)
        self._persist()
        return not errors

    def back(self) -> None:
        if self.draft.step > WizardStep.BUSINESS_BASICS:
            self.draft.step = WizardStep(self.draft.step - 1)
            self._persist()

    def validate_step(self, step: WizardStep) -> dict[str, str]:
        """Per-step rules. Looser than the full schema, which runs on submit."""
        data = self.draft.data
        errors: dict[str, str] = {}

        if step is WizardStep.BUSINESS_BASICS:
            if not data.get("businessName"):
                errors["businessName"] = "Business name is required"
            if not data.get("subdomain"):
                errors["subdomain"] = "Subdomain is required"
            elif self.draft.availability is AvailabilityState.TAKEN:
                errors["subdomain"] = "Subdomain is not available"
            if not data.get("industry"):
                errors["industry"] = "Please select an industry"

        elif step is WizardStep.CONTACT_INFO:
            email = data.get("email")
            if not email:
                errors["email"] = "Email is required"
            elif not _LOOSE_EMAIL.fullmatch(email):
                errors["email"] = "Please enter a valid email"
            if not data.get("phone"):
                errors["phone"] = "Phone is required"

        elif step is WizardStep.BUSINESS_DETAILS:
            about = data.get("aboutUs") or ""
            if len(about) < 10:
                errors["aboutUs"] = "About us must be at least 10 characters"
            services = data.get("services") or []
            if len(services) < 3:
                errors["services"] = "Please add at least 3 services"
            if any(not s or not s.strip() for s in services):
                errors["services"] = "All services must have a name"

        return errors

    # ── Submission ───────────────────────────────────────────────────

    async def submit(self) -> SubmitOutcome:
        """Validate against the full schema and send the record.

        On success the draft is cleared and the new client id is returned;
        on failure the wizard stays on Preview with one error per field.
        """
        if self.draft.step is not WizardStep.PREVIEW or self.phase is not WizardPhase.EDITING:
            return SubmitOutcome(success=False, toast="Complete every step before submitting")

        result = validate_client_data(self.draft.data)
        if not result.ok:
            self.draft.errors = first_error_per_field(result.errors)
            self._persist()
            return self._fail("Please fix the errors in the form")

        self.phase = WizardPhase.SUBMITTING
        payload = result.value.model_dump(by_alias=True, mode="json", exclude_none=True)
        try:
            reply = await self._api.create_site(payload)
        except SiteApiError as exc:
            logger.warning("Site creation rejected (%s): %s", exc.status_code, exc.message)
            self.phase = WizardPhase.EDITING
            if exc.errors:
                self.draft.errors = first_error_per_field(exc.errors)
                self._persist()
            return self._fail(exc.message or "Failed to create site")

        await self.close()
        self._store.clear()
        self.phase = WizardPhase.SUBMITTED
        self.client_id = reply.client_id
        self.toast = None
        return SubmitOutcome(
            success=True,
            client_id=reply.client_id,
            website_url=reply.website_url,
        )

    # ── Availability checks ──────────────────────────────────────────

    async def wait_for_checks(self) -> None:
        """Wait until the debounce timer and every in-flight check have finished."""
        if self._debounce_task is not None:
            await asyncio.gather(self._debounce_task, return_exceptions=True)
        if self._inflight:
            await asyncio.gather(*self._inflight, return_exceptions=True)

    async def close(self) -> None:
        """Cancel the pending debounce timer and in-flight checks."""
        tasks = [t for t in (self._debounce_task, *self._inflight) if t is not None]
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._debounce_task = None

    def _schedule_availability_check(self, subdomain: str) -> None:
        if self._debounce_task is not None and not self._debounce_task.done():
            self._debounce_task.cancel()

        # A new token invalidates every reply still in flight.
        self._check_token += 1
        if len(subdomain) < SUBDOMAIN_MIN_LENGTH:
            self.draft.availability = AvailabilityState.UNKNOWN
            self._debounce_task = None
            return

        self._debounce_task = asyncio.create_task(
            self._debounce(subdomain, self._check_token)
        )

    async def _debounce(self, subdomain: str, token: int) -> None:
        await asyncio.sleep(self._debounce_seconds)
        # Spawned separately so a later keystroke cancels the timer, not the request.
        task = asyncio.create_task(self._check(subdomain, token))
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)

    async def _check(self, subdomain: str, token: int) -> None:
        if token == self._check_token:
            self.draft.availability = AvailabilityState.CHECKING
        try:
            reply = await self._api.check_subdomain(subdomain)
        except Exception:
            logger.exception("Error checking subdomain %s", subdomain)
            if token == self._check_token:
                self.draft.availability = AvailabilityState.UNKNOWN
                self.toast = "Error checking subdomain availability"
            return

        if token != self._check_token:
            logger.debug("Discarding stale availability reply for %s", subdomain)
            return

        if reply.available:
            self.draft.availability = AvailabilityState.AVAILABLE
            self.draft.errors.pop("subdomain", None)
        else:
            self.draft.availability = AvailabilityState.TAKEN
            self.draft.errors["subdomain"] = reply.message or "Subdomain is not available"
        self._persist()

    # ── Internal ─────────────────────────────────────────────────────

    def _services(self) -> list[str]:
        return self.draft.data.setdefault("services", [])

    def _fail(self, toast: str) -> SubmitOutcome:
        self.toast = toast
        return SubmitOutcome(success=False, toast=toast)

    def _persist(self) -> None:
        self._store.save(self.draft)
