"""Unit tests for the SignupWizard state machine."""

import asyncio

import pytest

from fakes import FakeSiteApi, MemoryDraftStore
from sitelaunch.application.services import SignupWizard
from sitelaunch.application.services.signup_wizard import sanitize_subdomain
from sitelaunch.domain.entities import AvailabilityState, WizardDraft, WizardPhase, WizardStep
from sitelaunch.domain.exceptions import FieldError, SiteApiError


# ── Helpers ──


class GatedSiteApi(FakeSiteApi):
    """Availability replies are held until the test opens the gate for that value."""

    def __init__(self, taken: set[str] | None = None):
        super().__init__(taken)
        self.gates: dict[str, asyncio.Event] = {}

    async def check_subdomain(self, subdomain: str):
        gate = self.gates.setdefault(subdomain, asyncio.Event())
        await gate.wait()
        return await super().check_subdomain(subdomain)


async def _until(predicate, attempts: int = 200) -> None:
    for _ in range(attempts):
        if predicate():
            return
        await asyncio.sleep(0)
    raise AssertionError("condition never became true")


def _wizard(api=None, store=None) -> SignupWizard:
    return SignupWizard(store or MemoryDraftStore(), api or FakeSiteApi(), debounce_seconds=0)


async def _fill_to_preview(wizard: SignupWizard) -> None:
    wizard.update_field("businessName", "Joe's Pizza")
    wizard.update_field("subdomain", "joes-pizza")
    wizard.update_field("industry", "restaurant")
    await wizard.wait_for_checks()
    assert wizard.next()

    wizard.update_field("email", "a@b.com")
    wizard.update_field("phone", "1234567890")
    assert wizard.next()

    wizard.update_field("aboutUs", "A decade of great pizza.")
    for name in ("Pizza", "Pasta", "Salad"):
        wizard.add_service()
        wizard.update_service(len(wizard.data["services"]) - 1, name)
    assert wizard.next()

    assert wizard.next()
    assert wizard.step is WizardStep.PREVIEW


# ── Subdomain input ──


def test_sanitize_subdomain():
    assert sanitize_subdomain("Joe's Pizza!") == "joespizza"
    assert sanitize_subdomain("JOES-PIZZA_2") == "joes-pizza2"


@pytest.mark.asyncio
async def test_subdomain_is_sanitized_and_checked():
    api = FakeSiteApi()
    wizard = _wizard(api)

    wizard.update_field("subdomain", "Joes-Pizza")
    await wizard.wait_for_checks()

    assert wizard.data["subdomain"] == "joes-pizza"
    assert api.checked == ["joes-pizza"]
    assert wizard.availability is AvailabilityState.AVAILABLE


@pytest.mark.asyncio
async def test_short_subdomain_is_not_checked():
    api = FakeSiteApi()
    wizard = _wizard(api)

    wizard.update_field("subdomain", "jo")
    await wizard.wait_for_checks()

    assert api.checked == []
    assert wizard.availability is AvailabilityState.UNKNOWN


@pytest.mark.asyncio
async def test_rapid_typing_is_debounced_to_one_check():
    api = FakeSiteApi()
    wizard = SignupWizard(MemoryDraftStore(), api, debounce_seconds=0.05)

    for value in ("j", "jo", "joe", "joes"):
        wizard.update_field("subdomain", value)
    await wizard.wait_for_checks()

    assert api.checked == ["joes"]


@pytest.mark.asyncio
async def test_taken_subdomain_sets_error():
    wizard = _wizard(FakeSiteApi(taken={"joes-pizza"}))

    wizard.update_field("subdomain", "joes-pizza")
    await wizard.wait_for_checks()

    assert wizard.availability is AvailabilityState.TAKEN
    assert wizard.errors["subdomain"] == "This subdomain is already taken"


@pytest.mark.asyncio
async def test_stale_availability_reply_is_discarded():
    api = GatedSiteApi(taken={"joes"})
    wizard = _wizard(api)

    wizard.update_field("subdomain", "joes")
    await _until(lambda: "joes" in api.gates)
    wizard.update_field("subdomain", "joes-pizza")
    await _until(lambda: "joes-pizza" in api.gates)

    # The fresher value answers first; the older "taken" verdict arrives late.
    api.gates["joes-pizza"].set()
    await _until(lambda: wizard.availability is AvailabilityState.AVAILABLE)
    api.gates["joes"].set()
    await wizard.wait_for_checks()

    assert wizard.availability is AvailabilityState.AVAILABLE
    assert "subdomain" not in wizard.errors


@pytest.mark.asyncio
async def test_check_failure_shows_toast():
    class BrokenSiteApi(FakeSiteApi):
        async def check_subdomain(self, subdomain):
            raise SiteApiError(500, "Server error")

    wizard = _wizard(BrokenSiteApi())

    wizard.update_field("subdomain", "joes-pizza")
    await wizard.wait_for_checks()

    assert wizard.availability is AvailabilityState.UNKNOWN
    assert wizard.toast == "Error checking subdomain availability"


# ── Navigation ──


@pytest.mark.asyncio
async def test_step_one_rules():
    wizard = _wizard()

    assert not wizard.next()

    assert wizard.step is WizardStep.BUSINESS_BASICS
    assert wizard.errors == {
        "businessName": "Business name is required",
        "subdomain": "Subdomain is required",
        "industry": "Please select an industry",
    }


@pytest.mark.asyncio
async def test_taken_subdomain_blocks_step_one():
    wizard = _wizard(FakeSiteApi(taken={"joes-pizza"}))
    wizard.update_field("businessName", "Joe's Pizza")
    wizard.update_field("industry", "restaurant")
    wizard.update_field("subdomain", "joes-pizza")
    await wizard.wait_for_checks()

    assert not wizard.next()
    assert wizard.errors == {"subdomain": "Subdomain is not available"}


@pytest.mark.asyncio
async def test_contact_step_uses_loose_email_rule():
    wizard = _wizard()
    wizard.draft.step = WizardStep.CONTACT_INFO

    wizard.update_field("email", "a@b")
    assert not wizard.next()
    assert wizard.errors == {"email": "Please enter a valid email", "phone": "Phone is required"}

    wizard.update_field("email", "a@b.c")
    wizard.update_field("phone", "555")
    assert wizard.next()
    assert wizard.step is WizardStep.BUSINESS_DETAILS


@pytest.mark.asyncio
async def test_details_step_rules():
    wizard = _wizard()
    wizard.draft.step = WizardStep.BUSINESS_DETAILS
    wizard.update_field("aboutUs", "Too short")

    assert not wizard.next()
    assert wizard.errors == {
        "aboutUs": "About us must be at least 10 characters",
        "services": "Please add at least 3 services",
    }

    for name in ("Pizza", "", "Salad"):
        wizard.add_service()
        wizard.update_service(len(wizard.data["services"]) - 1, name)
    assert not wizard.next()
    assert wizard.errors["services"] == "All services must have a name"


@pytest.mark.asyncio
async def test_service_list_editing():
    wizard = _wizard()
    for name in ("Pizza", "Pasta", "Salad"):
        wizard.add_service()
        wizard.update_service(len(wizard.data["services"]) - 1, name)

    wizard.remove_service(1)
    wizard.remove_service(9)
    wizard.update_service(9, "ignored")

    assert wizard.data["services"] == ["Pizza", "Salad"]


@pytest.mark.asyncio
async def test_back_is_a_no_op_on_first_step():
    wizard = _wizard()
    wizard.back()
    assert wizard.step is WizardStep.BUSINESS_BASICS

    wizard.draft.step = WizardStep.SOCIAL_LINKS
    wizard.back()
    assert wizard.step is WizardStep.BUSINESS_DETAILS


# ── Persistence ──


@pytest.mark.asyncio
async def test_every_mutation_persists_and_draft_survives_restart():
    store = MemoryDraftStore()
    wizard = _wizard(store=store)

    wizard.update_field("businessName", "Joe's Pizza")
    wizard.update_hours("monday", "9-5")
    wizard.update_social_link("facebook", "https://facebook.com/joes")
    wizard.add_service()

    assert store.saves == 4
    restored = _wizard(store=store)
    assert restored.data["businessName"] == "Joe's Pizza"
    assert restored.data["hours"] == {"monday": "9-5"}
    assert restored.data["socialLinks"] == {"facebook": "https://facebook.com/joes"}


def test_restored_draft_keeps_step():
    store = MemoryDraftStore(WizardDraft(data={"services": []}, step=WizardStep.SOCIAL_LINKS))
    wizard = SignupWizard(store, FakeSiteApi())
    assert wizard.step is WizardStep.SOCIAL_LINKS


# ── Submission ──


@pytest.mark.asyncio
async def test_submit_requires_preview():
    wizard = _wizard()

    outcome = await wizard.submit()

    assert not outcome.success
    assert outcome.toast == "Complete every step before submitting"


@pytest.mark.asyncio
async def test_successful_submit_clears_draft():
    api = FakeSiteApi()
    store = MemoryDraftStore()
    wizard = _wizard(api, store)
    await _fill_to_preview(wizard)

    outcome = await wizard.submit()

    assert outcome.success
    assert outcome.client_id == "client-1"
    assert outcome.website_url == "https://joes-pizza.saas.wow-sites.com"
    assert wizard.phase is WizardPhase.SUBMITTED
    assert store.draft is None
    [sent] = api.created
    assert sent["businessName"] == "Joe's Pizza"
    assert sent["aboutUs"] == "A decade of great pizza."
    assert sent["industry"] == "restaurant"
    assert sent["services"] == ["Pizza", "Pasta", "Salad"]


@pytest.mark.asyncio
async def test_submit_runs_full_schema():
    api = FakeSiteApi()
    wizard = _wizard(api)
    await _fill_to_preview(wizard)
    # Step 2 only checks presence; the full schema counts characters.
    wizard.update_field("phone", "12345")

    outcome = await wizard.submit()

    assert not outcome.success
    assert outcome.toast == "Please fix the errors in the form"
    assert wizard.errors == {"phone": "Phone number must be at least 10 digits"}
    assert wizard.step is WizardStep.PREVIEW
    assert api.created == []


@pytest.mark.asyncio
async def test_server_rejection_stays_on_preview():
    api = FakeSiteApi()
    store = MemoryDraftStore()
    wizard = _wizard(api, store)
    await _fill_to_preview(wizard)
    api.create_error = SiteApiError(
        400, "Validation failed", [FieldError("subdomain", "Subdomain is already taken")]
    )

    outcome = await wizard.submit()

    assert not outcome.success
    assert outcome.toast == "Validation failed"
    assert wizard.phase is WizardPhase.EDITING
    assert wizard.step is WizardStep.PREVIEW
    assert wizard.errors == {"subdomain": "Subdomain is already taken"}
    assert store.draft is not None


@pytest.mark.asyncio
async def test_server_rejection_without_message_uses_fallback():
    api = FakeSiteApi()
    wizard = _wizard(api)
    await _fill_to_preview(wizard)
    api.create_error = SiteApiError(409, "")

    outcome = await wizard.submit()

    assert outcome.toast == "Failed to create site"
