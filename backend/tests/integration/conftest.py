"""API fixtures: the real app on an in-memory SQLite database with fake outbound adapters."""

import pytest_asyncio
from fastapi import Depends
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from fakes import make_client
from sitelaunch.application.services import DeploymentCallbackService, NotificationService
from sitelaunch.infrastructure.database import Base, get_db_session
from sitelaunch.infrastructure.database.repositories import SQLAlchemyClientRecordRepository
from sitelaunch.infrastructure.dependencies import (
    get_deployment_callback_service,
    get_notification_service,
    get_rate_limiter,
)
from sitelaunch.infrastructure.rate_limiting import InMemoryRateLimiter
from sitelaunch.main import create_app

WEBHOOK_SECRET = "s3cret"


@pytest_asyncio.fixture
async def session_factory():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest_asyncio.fixture
async def app(session_factory, email_provider):
    application = create_app()
    rate_limiter = InMemoryRateLimiter(limit=10, window_seconds=60)

    async def _session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    def _notification_service() -> NotificationService:
        return NotificationService(
            email_provider,
            saas_domain="saas.wow-sites.com",
            dashboard_url="https://app.saas.wow-sites.com/dashboard",
            support_email="support@wow-sites.com",
        )

    async def _callbacks(session: AsyncSession = Depends(get_db_session)):
        yield DeploymentCallbackService(
            SQLAlchemyClientRecordRepository(session),
            _notification_service(),
            webhook_secret=WEBHOOK_SECRET,
        )

    application.dependency_overrides[get_db_session] = _session
    application.dependency_overrides[get_notification_service] = _notification_service
    application.dependency_overrides[get_rate_limiter] = lambda: rate_limiter
    application.dependency_overrides[get_deployment_callback_service] = _callbacks
    return application


@pytest_asyncio.fixture
async def api(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def stored_client(session_factory):
    """Persist one client record and return it."""
    async with session_factory() as session:
        record = await SQLAlchemyClientRecordRepository(session).create(make_client())
        await session.commit()
    return record
