from .client import (
    BusinessHours,
    ClientDataCreate,
    ClientResponse,
    ClientStatusResponse,
    ContactInquiry,
    ContactInquiryResponse,
    CreateSiteResponse,
    DeploymentClientSummary,
    DeploymentUpdateResponse,
    DeploymentWebhookPayload,
    FieldErrorSchema,
    SocialLinks,
    SubdomainCheckResponse,
)

__all__ = [
    "BusinessHours",
    "ClientDataCreate",
    "ClientResponse",
    "ClientStatusResponse",
    "ContactInquiry",
    "ContactInquiryResponse",
    "CreateSiteResponse",
    "DeploymentClientSummary",
    "DeploymentUpdateResponse",
    "DeploymentWebhookPayload",
    "FieldErrorSchema",
    "SocialLinks",
    "SubdomainCheckResponse",
]
