from .availability_service import (
    AvailabilityOutcome,
    AvailabilityResult,
    SubdomainAvailabilityService,
)
from .client_record_service import ClientRecordService
from .contact_inquiry_service import ContactInquiryService
from .deploy_dispatcher import DeployDispatcher
from .deployment_callback_service import DeploymentCallbackService
from .notification_service import NotificationResult, NotificationService
from .signup_wizard import SignupWizard, SubmitOutcome
from .site_generation_service import SiteGenerationService
from .site_provisioning_service import ProvisionedSite, SiteProvisioningService
from .status_poller import StatusPoller

__all__ = [
    "AvailabilityOutcome",
    "AvailabilityResult",
    "SubdomainAvailabilityService",
    "ClientRecordService",
    "ContactInquiryService",
    "DeployDispatcher",
    "DeploymentCallbackService",
    "NotificationResult",
    "NotificationService",
    "SignupWizard",
    "SubmitOutcome",
    "SiteGenerationService",
    "ProvisionedSite",
    "SiteProvisioningService",
    "StatusPoller",
]
