"""Public signup endpoints: subdomain availability, site creation, site contact forms."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Request, status
from fastapi.responses import JSONResponse

from sitelaunch.application.schemas.client import (
    ContactInquiryResponse,
    CreateSiteResponse,
    SubdomainCheckResponse,
)
from sitelaunch.application.services import (
    AvailabilityOutcome,
    ContactInquiryService,
    SiteProvisioningService,
    SubdomainAvailabilityService,
)
from sitelaunch.application.services.contact_inquiry_service import THANK_YOU_MESSAGE
from sitelaunch.infrastructure.dependencies import (
    get_availability_service,
    get_contact_inquiry_service,
    get_site_provisioning_service,
)
from sitelaunch.presentation.api.v1.errors import client_ip

router = APIRouter(tags=["Sites"])

_AVAILABILITY_STATUS = {
    AvailabilityOutcome.AVAILABLE: status.HTTP_200_OK,
    AvailabilityOutcome.TAKEN: status.HTTP_200_OK,
    AvailabilityOutcome.INVALID: status.HTTP_400_BAD_REQUEST,
    AvailabilityOutcome.RATE_LIMITED: status.HTTP_429_TOO_MANY_REQUESTS,
}


@router.get("/check-subdomain", response_model=SubdomainCheckResponse)
async def check_subdomain(
    request: Request,
    subdomain: str | None = Query(None, description="Candidate subdomain"),
    service: SubdomainAvailabilityService = Depends(get_availability_service),
) -> JSONResponse:
    """Report whether a subdomain can still be claimed (advisory)."""
    result = await service.check(subdomain, client_ip(request))
    body = SubdomainCheckResponse(available=result.available, message=result.message)
    return JSONResponse(
        status_code=_AVAILABILITY_STATUS[result.outcome],
        content=body.model_dump(),
    )


@router.post("/create-site", response_model=CreateSiteResponse, response_model_by_alias=True)
async def create_site(
    payload: Any = Body(None),
    service: SiteProvisioningService = Depends(get_site_provisioning_service),
) -> CreateSiteResponse:
    """Validate a signup, store the client and queue its deployment."""
    site = await service.create_site(payload)
    return CreateSiteResponse(
        client_id=site.client.id,
        subdomain=site.client.subdomain,
        website_url=site.website_url,
    )


@router.post("/sites/{subdomain}/contact", response_model=ContactInquiryResponse)
async def submit_contact_inquiry(
    subdomain: str,
    payload: Any = Body(None),
    service: ContactInquiryService = Depends(get_contact_inquiry_service),
) -> ContactInquiryResponse:
    """Forward a visitor's message from a generated site to its owner."""
    await service.submit(subdomain, payload)
    return ContactInquiryResponse(message=THANK_YOU_MESSAGE)
