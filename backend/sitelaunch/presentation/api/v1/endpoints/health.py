"""Health check endpoint: no database access, always available."""

from fastapi import APIRouter

from sitelaunch.config import get_settings
from sitelaunch.infrastructure.dependencies import (
    build_dns_client,
    build_email_provider,
    build_workflow_client,
)

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> dict:
    """Reports version, environment and which outbound integrations are configured."""
    settings = get_settings()
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "integrations": {
            "deployWorkflow": build_workflow_client(settings).is_configured,
            "email": build_email_provider(settings).is_configured,
            "dns": build_dns_client(settings).is_configured,
        },
    }
