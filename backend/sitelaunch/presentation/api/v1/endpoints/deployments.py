"""Deployment callback endpoint, called by the deploy workflow."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Header

from sitelaunch.application.schemas.client import (
    DeploymentClientSummary,
    DeploymentUpdateResponse,
)
from sitelaunch.application.services import DeploymentCallbackService
from sitelaunch.infrastructure.dependencies import get_deployment_callback_service

router = APIRouter(tags=["Deployments"])


@router.post(
    "/update-deployment",
    response_model=DeploymentUpdateResponse,
    response_model_by_alias=True,
)
async def update_deployment(
    payload: Any = Body(None),
    x_webhook_secret: str | None = Header(None),
    service: DeploymentCallbackService = Depends(get_deployment_callback_service),
) -> DeploymentUpdateResponse:
    """Apply a deployment status report and notify the owner."""
    # The header wins; older workflow versions send the secret in the body.
    secret = x_webhook_secret
    if secret is None and isinstance(payload, dict):
        body_secret = payload.get("secret")
        secret = body_secret if isinstance(body_secret, str) else None

    client = await service.update_deployment(payload, secret)
    return DeploymentUpdateResponse(
        client=DeploymentClientSummary(
            id=client.id,
            status=client.status,
            deployment_url=client.deployment_url,
        )
    )
