from .client_record_repository import SQLAlchemyClientRecordRepository
from .deploy_notification_repository import SQLAlchemyDeployNotificationRepository

__all__ = [
    "SQLAlchemyClientRecordRepository",
    "SQLAlchemyDeployNotificationRepository",
]
