from .client_record import ClientRecordModel
from .deploy_notification import DeployNotificationModel

__all__ = [
    "ClientRecordModel",
    "DeployNotificationModel",
]
