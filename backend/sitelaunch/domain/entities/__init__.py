from .client_record import ClientRecord, ClientStatus, Industry, WEEKDAYS
from .deploy_notification import DeployNotification, NotificationStatus
from .wizard_draft import AvailabilityState, WizardDraft, WizardPhase, WizardStep

__all__ = [
    "ClientRecord",
    "ClientStatus",
    "Industry",
    "WEEKDAYS",
    "DeployNotification",
    "NotificationStatus",
    "AvailabilityState",
    "WizardDraft",
    "WizardPhase",
    "WizardStep",
]
