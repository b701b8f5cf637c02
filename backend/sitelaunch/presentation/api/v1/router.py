"""V1 API router: aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from sitelaunch.presentation.api.v1.endpoints.clients import router as clients_router
from sitelaunch.presentation.api.v1.endpoints.deployments import router as deployments_router
from sitelaunch.presentation.api.v1.endpoints.health import router as health_router
from sitelaunch.presentation.api.v1.endpoints.sites import router as sites_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(sites_router)
router.include_router(deployments_router)
router.include_router(clients_router)
