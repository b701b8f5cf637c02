"""Read endpoints for the dashboard and the post-signup status page."""

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import HTMLResponse, JSONResponse

from sitelaunch.application.schemas.client import ClientResponse, ClientStatusResponse
from sitelaunch.application.services import ClientRecordService, SiteGenerationService
from sitelaunch.infrastructure.dependencies import (
    get_client_record_service,
    get_site_generation_service,
)
from sitelaunch.presentation.api.v1.errors import error_body

router = APIRouter(tags=["Clients"])


@router.get("/client/{client_id}", response_model=ClientResponse, response_model_by_alias=True)
async def get_client(
    client_id: str,
    service: ClientRecordService = Depends(get_client_record_service),
) -> ClientResponse:
    """Retrieve a full client record."""
    record = await service.get_record(client_id)
    return ClientResponse.model_validate(record, from_attributes=True)


@router.get("/client/{client_id}/site", response_class=HTMLResponse)
async def get_client_site(
    client_id: str,
    service: SiteGenerationService = Depends(get_site_generation_service),
) -> HTMLResponse:
    """Render the client's site, cache it on the record and return the document."""
    record = await service.generate_for_client(client_id)
    return HTMLResponse(content=record.site_data["html"])


@router.get(
    "/client-status",
    response_model=ClientStatusResponse,
    response_model_by_alias=True,
)
async def get_client_status(
    client_id: str | None = Query(None, alias="clientId"),
    service: ClientRecordService = Depends(get_client_record_service),
):
    """Deployment status for the polling status page."""
    if not client_id:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body("Client ID is required"),
        )
    record = await service.get_record(client_id)
    return ClientStatusResponse.model_validate(record, from_attributes=True)
