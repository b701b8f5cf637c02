"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sitelaunch.config import get_settings
from sitelaunch.application.services import DeployDispatcher
from sitelaunch.infrastructure.database import Base, engine
from sitelaunch.infrastructure.database.session import async_session_factory
from sitelaunch.infrastructure.database.repositories import SQLAlchemyDeployNotificationRepository
from sitelaunch.infrastructure.dependencies import build_workflow_client
from sitelaunch.infrastructure.logging.log_config import setup_logging
from sitelaunch.presentation.api.router import router as api_router
from sitelaunch.presentation.api.v1.errors import register_exception_handlers

logger = logging.getLogger(__name__)


async def _ensure_database_exists() -> None:
    """Create the PostgreSQL database if it does not yet exist.

    Connects to the default ``postgres`` maintenance database, checks for the
    target database name, and issues ``CREATE DATABASE`` when missing.
    SQLite URLs are skipped.
    """
    from urllib.parse import urlparse

    import asyncpg

    settings = get_settings()
    url = settings.database_url.replace("postgresql+asyncpg://", "postgresql://", 1)
    if not url.startswith(("postgresql://", "postgres://")):
        return

    parsed = urlparse(url)
    db_name = parsed.path.lstrip("/")
    if not db_name:
        return

    maintenance_url = url.rsplit("/", 1)[0] + "/postgres"

    try:
        conn = await asyncpg.connect(maintenance_url)
        try:
            exists = await conn.fetchval(
                "SELECT 1 FROM pg_database WHERE datname = $1", db_name
            )
            if not exists:
                # CREATE DATABASE cannot run inside a transaction block
                await conn.execute(f'CREATE DATABASE "{db_name}"')
                logger.info("Created database '%s'", db_name)
            else:
                logger.debug("Database '%s' already exists", db_name)
        finally:
            await conn.close()
    except Exception as exc:
        logger.warning("Could not auto-create database '%s': %s", db_name, exc)


def build_deploy_dispatcher() -> DeployDispatcher:
    """Outbox worker wired to the shared session factory and the n8n webhook."""
    settings = get_settings()
    return DeployDispatcher(
        session_factory=async_session_factory,
        repository_factory=SQLAlchemyDeployNotificationRepository,
        workflow=build_workflow_client(settings),
        poll_interval=settings.deploy_dispatch_poll_interval,
        max_attempts=settings.deploy_dispatch_max_attempts,
        backoff_seconds=settings.deploy_dispatch_backoff_seconds,
        backoff_max_seconds=settings.deploy_dispatch_backoff_max_seconds,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: create tables, start the deploy dispatcher."""
    settings = get_settings()
    setup_logging(settings)

    # 0. Ensure the PostgreSQL database exists (auto-create if missing)
    await _ensure_database_exists()

    # 1. Create all database tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    if not settings.n8n_webhook_url.strip():
        logger.warning("N8N_WEBHOOK_URL not configured; new sites will stay pending")

    # 2. Start the outbox dispatcher
    dispatcher = build_deploy_dispatcher()
    await dispatcher.start()
    app.state.deploy_dispatcher = dispatcher

    yield

    # Shutdown
    await dispatcher.stop()
    await engine.dispose()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "sitelaunch.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
