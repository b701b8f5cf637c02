"""SQLAlchemy implementation of the DeployNotificationRepository."""

import uuid
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sitelaunch.application.interfaces import DeployNotificationRepository
from sitelaunch.domain.entities import DeployNotification, NotificationStatus
from sitelaunch.infrastructure.database.models import DeployNotificationModel


class SQLAlchemyDeployNotificationRepository(DeployNotificationRepository):
    """Concrete outbox repository backed by PostgreSQL via SQLAlchemy."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def create(self, notification: DeployNotification) -> DeployNotification:
        if not notification.id:
            notification.id = str(uuid.uuid4())

        model = DeployNotificationModel(
            id=notification.id,
            client_id=notification.client_id,
            payload=notification.payload,
            status=notification.status.value,
            attempts=notification.attempts,
            last_error=notification.last_error,
            created_at=notification.created_at,
            next_attempt_at=notification.next_attempt_at,
            delivered_at=notification.delivered_at,
        )
        self._session.add(model)
        await self._session.flush()
        return notification

    async def get_due(self, now: datetime, limit: int = 10) -> list[DeployNotification]:
        result = await self._session.execute(
            select(DeployNotificationModel)
            .where(DeployNotificationModel.status == NotificationStatus.PENDING.value)
            .where(DeployNotificationModel.next_attempt_at <= now)
            .order_by(DeployNotificationModel.created_at.asc())
            .limit(limit)
        )
        return [self._to_domain(m) for m in result.scalars().all()]

    async def get_by_client(self, client_id: str) -> list[DeployNotification]:
        result = await self._session.execute(
            select(DeployNotificationModel)
            .where(DeployNotificationModel.client_id == client_id)
            .order_by(DeployNotificationModel.created_at.asc())
        )
        return [self._to_domain(m) for m in result.scalars().all()]

    async def update(self, notification: DeployNotification) -> DeployNotification:
        model = await self._session.get(DeployNotificationModel, notification.id)
        if model is None:
            raise ValueError(f"DeployNotification with id {notification.id} not found")

        model.status = notification.status.value
        model.attempts = notification.attempts
        model.last_error = notification.last_error
        model.next_attempt_at = notification.next_attempt_at
        model.delivered_at = notification.delivered_at
        await self._session.flush()
        return notification

    # ── Mapping ──────────────────────────────────────────────────────

    @staticmethod
    def _to_domain(model: DeployNotificationModel) -> DeployNotification:
        return DeployNotification(
            id=model.id,
            client_id=model.client_id,
            payload=dict(model.payload),
            status=NotificationStatus(model.status),
            attempts=model.attempts,
            last_error=model.last_error,
            created_at=model.created_at,
            next_attempt_at=model.next_attempt_at,
            delivered_at=model.delivered_at,
        )
