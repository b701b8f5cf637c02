"""FastAPI dependency injection: wires infrastructure to the application layer."""

from collections.abc import AsyncGenerator
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from sitelaunch.config import Settings, get_settings
from sitelaunch.application.interfaces import RateLimiter
from sitelaunch.application.services import (
    ClientRecordService,
    ContactInquiryService,
    DeploymentCallbackService,
    NotificationService,
    SiteGenerationService,
    SiteProvisioningService,
    SubdomainAvailabilityService,
)
from sitelaunch.infrastructure.database.session import get_db_session
from sitelaunch.infrastructure.database.repositories import (
    SQLAlchemyClientRecordRepository,
    SQLAlchemyDeployNotificationRepository,
)
from sitelaunch.infrastructure.deploy import WorkflowWebhookClient
from sitelaunch.infrastructure.dns import CloudflareDnsClient
from sitelaunch.infrastructure.email import BrevoEmailProvider
from sitelaunch.infrastructure.rate_limiting import InMemoryRateLimiter
from sitelaunch.infrastructure.rendering import SiteTemplateGenerator


# ── Adapter factories ────────────────────────────────────────────────


def build_email_provider(settings: Settings) -> BrevoEmailProvider:
    return BrevoEmailProvider(
        api_key=settings.brevo_api_key,
        sender_email=settings.brevo_sender_email,
        sender_name=settings.brevo_sender_name,
        base_url=settings.brevo_api_url,
        timeout=settings.http_timeout_seconds,
    )


def build_workflow_client(settings: Settings) -> WorkflowWebhookClient:
    return WorkflowWebhookClient(
        webhook_url=settings.n8n_webhook_url,
        secret=settings.n8n_webhook_secret,
        timeout=settings.http_timeout_seconds,
    )


def build_dns_client(settings: Settings) -> CloudflareDnsClient:
    return CloudflareDnsClient(
        api_token=settings.cloudflare_api_token,
        zone_id=settings.cloudflare_zone_id,
        base_domain=settings.saas_domain,
        pages_target=settings.cloudflare_pages_target,
        base_url=settings.cloudflare_api_url,
        timeout=settings.http_timeout_seconds,
    )


@lru_cache
def get_rate_limiter() -> RateLimiter:
    """Process-wide limiter for subdomain checks (shared across requests)."""
    settings = get_settings()
    return InMemoryRateLimiter(
        limit=settings.subdomain_check_limit,
        window_seconds=settings.subdomain_check_window_seconds,
    )


# ── Services ─────────────────────────────────────────────────────────


async def get_notification_service() -> AsyncGenerator[NotificationService, None]:
    """Provides a NotificationService sending through Brevo."""
    settings = get_settings()
    yield NotificationService(
        build_email_provider(settings),
        saas_domain=settings.saas_domain,
        dashboard_url=settings.dashboard_url,
        support_email=settings.support_email,
        sender_name=settings.brevo_sender_name,
    )


async def get_availability_service(
    session: AsyncSession = Depends(get_db_session),
    rate_limiter: RateLimiter = Depends(get_rate_limiter),
) -> AsyncGenerator[SubdomainAvailabilityService, None]:
    repository = SQLAlchemyClientRecordRepository(session)
    yield SubdomainAvailabilityService(repository, rate_limiter)


async def get_site_provisioning_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[SiteProvisioningService, None]:
    """Provides a SiteProvisioningService; record and outbox entry share the session."""
    settings = get_settings()
    yield SiteProvisioningService(
        client_repo=SQLAlchemyClientRecordRepository(session),
        notification_repo=SQLAlchemyDeployNotificationRepository(session),
        saas_domain=settings.saas_domain,
    )


async def get_deployment_callback_service(
    session: AsyncSession = Depends(get_db_session),
    notifications: NotificationService = Depends(get_notification_service),
) -> AsyncGenerator[DeploymentCallbackService, None]:
    settings = get_settings()
    yield DeploymentCallbackService(
        SQLAlchemyClientRecordRepository(session),
        notifications,
        webhook_secret=settings.n8n_webhook_secret,
    )


async def get_client_record_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[ClientRecordService, None]:
    """Provides a ClientRecordService instance with its repository wired up."""
    repository = SQLAlchemyClientRecordRepository(session)
    yield ClientRecordService(repository)


async def get_site_generation_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[SiteGenerationService, None]:
    settings = get_settings()
    yield SiteGenerationService(
        SQLAlchemyClientRecordRepository(session),
        SiteTemplateGenerator(contact_base_url=settings.public_api_url),
    )


async def get_contact_inquiry_service(
    clients: ClientRecordService = Depends(get_client_record_service),
    notifications: NotificationService = Depends(get_notification_service),
) -> AsyncGenerator[ContactInquiryService, None]:
    yield ContactInquiryService(clients, notifications)
