from .client_record_repository import ClientRecordRepository
from .deploy_notification_repository import DeployNotificationRepository
from .deploy_workflow import DeployWorkflowClient
from .dns_provider import DnsLookup, DnsProvider, DnsResult
from .draft_store import DraftStore
from .email_provider import EmailProvider, OutgoingEmail
from .rate_limiter import RateLimiter
from .site_api import AvailabilityReply, CreateSiteReply, SiteApi, StatusReply
from .site_renderer import SiteRenderer

__all__ = [
    "ClientRecordRepository",
    "DeployNotificationRepository",
    "DeployWorkflowClient",
    "DnsLookup",
    "DnsProvider",
    "DnsResult",
    "DraftStore",
    "EmailProvider",
    "OutgoingEmail",
    "RateLimiter",
    "AvailabilityReply",
    "CreateSiteReply",
    "SiteApi",
    "StatusReply",
    "SiteRenderer",
]
