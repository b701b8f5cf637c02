"""Domain entity for deploy-workflow notifications (database-backed outbox)."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any


class NotificationStatus(str, Enum):
    """Lifecycle states of an outbox entry."""

    PENDING = "pending"
    DELIVERED = "delivered"
    FAILED = "failed"


@dataclass
class DeployNotification:
    """One pending delivery of a client record to the external deploy workflow.

    Created in the same transaction as the client record so a delivery can
    never be lost between the insert and the outbound call.
    """

    client_id: str
    payload: dict[str, Any]
    id: str | None = None
    status: NotificationStatus = NotificationStatus.PENDING
    attempts: int = 0
    last_error: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    next_attempt_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    delivered_at: datetime | None = None

    def mark_delivered(self) -> None:
        """Transition to delivered state."""
        self.attempts += 1
        self.status = NotificationStatus.DELIVERED
        self.delivered_at = datetime.now(timezone.utc)
        self.last_error = None

    def mark_retry(self, error: str, delay_seconds: float) -> None:
        """Record a failed attempt and schedule the next one."""
        self.attempts += 1
        self.last_error = error
        self.next_attempt_at = datetime.now(timezone.utc) + timedelta(seconds=delay_seconds)

    def mark_failed(self, error: str) -> None:
        """Give up on delivery."""
        self.attempts += 1
        self.status = NotificationStatus.FAILED
        self.last_error = error
