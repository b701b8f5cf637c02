"""Abstract repository interface (port) for the deploy-notification outbox."""

from abc import ABC, abstractmethod
from datetime import datetime

from sitelaunch.domain.entities.deploy_notification import DeployNotification


class DeployNotificationRepository(ABC):
    """Port for outbox persistence, implemented in the infrastructure layer."""

    @abstractmethod
    async def create(self, notification: DeployNotification) -> DeployNotification:
        """Persist a new outbox entry and return it with the generated ID."""
        ...

    @abstractmethod
    async def get_due(self, now: datetime, limit: int = 10) -> list[DeployNotification]:
        """Pending entries whose next attempt is due, oldest first."""
        ...

    @abstractmethod
    async def get_by_client(self, client_id: str) -> list[DeployNotification]:
        """All entries for one client, oldest first."""
        ...

    @abstractmethod
    async def update(self, notification: DeployNotification) -> DeployNotification:
        """Persist the delivery state of an entry."""
        ...
