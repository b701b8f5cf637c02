"""Deploy Dispatcher: asyncio daemon delivering queued client records to the deploy workflow."""

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from sitelaunch.application.interfaces import (
    DeployNotificationRepository,
    DeployWorkflowClient,
)
from sitelaunch.domain.entities import DeployNotification
from sitelaunch.infrastructure.logging.colored_logger import DeployStage, PipelineLogger

logger = logging.getLogger(__name__)


class DeployDispatcher:
    """Asyncio daemon that polls the deploy_notifications outbox and delivers due entries.

    Runs as an asyncio.Task inside FastAPI's lifespan. Each delivery gets its
    own database session so one failing entry never blocks the others. A
    failed delivery is retried with capped exponential backoff until
    ``max_attempts`` is reached, after which the entry is marked failed and
    the client stays pending.
    """

    def __init__(
        self,
        session_factory: Callable[[], Any],
        repository_factory: Callable[[AsyncSession], DeployNotificationRepository],
        workflow: DeployWorkflowClient,
        *,
        poll_interval: float = 5.0,
        max_attempts: int = 5,
        backoff_seconds: float = 10.0,
        backoff_max_seconds: float = 600.0,
        batch_size: int = 10,
    ) -> None:
        self._session_factory = session_factory
        self._repository_factory = repository_factory
        self._workflow = workflow
        self._poll_interval = poll_interval
        self._max_attempts = max_attempts
        self._backoff_seconds = backoff_seconds
        self._backoff_max_seconds = backoff_max_seconds
        self._batch_size = batch_size
        self._log = PipelineLogger("DeployDispatcher")
        self._running = False
        self._stopping = False
        self._task: asyncio.Task | None = None

    @property
    def is_running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Start the background dispatch loop."""
        self._running = True
        self._stopping = False
        self._task = asyncio.create_task(self._loop())
        logger.info("DeployDispatcher started")

    async def stop(self) -> None:
        """Gracefully stop the background dispatch loop."""
        self._running = False
        self._stopping = True
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        logger.info("DeployDispatcher stopped")

    def backoff_for(self, attempt: int) -> float:
        """Delay before the attempt following failed attempt number ``attempt`` (1-based)."""
        delay = self._backoff_seconds * (2 ** (attempt - 1))
        return min(delay, self._backoff_max_seconds)

    async def _loop(self) -> None:
        """Main polling loop: picks up due entries and delivers them."""
        while self._running:
            try:
                await self.run_once()
            except asyncio.CancelledError:
                break
            except Exception:
                logger.exception("DeployDispatcher polling error")

            await asyncio.sleep(self._poll_interval)

    async def run_once(self) -> int:
        """Deliver every entry due now. Returns the number of delivery attempts made."""
        async with self._session_factory() as session:
            repo = self._repository_factory(session)
            due = await repo.get_due(datetime.now(timezone.utc), limit=self._batch_size)
            await session.commit()

        if not due:
            return 0

        if not self._workflow.is_configured:
            self._log.step_warning(
                DeployStage.QUEUE,
                "Deploy workflow URL not configured; leaving entries pending",
                pending=len(due),
            )
            return 0

        self._log.step_start(DeployStage.QUEUE, "Due deploy notifications", count=len(due))
        attempted = 0
        for notification in due:
            if self._stopping:
                break
            await self._deliver(notification)
            attempted += 1
        return attempted

    async def _deliver(self, notification: DeployNotification) -> None:
        """Attempt one delivery and persist its outcome in a dedicated session."""
        subdomain = notification.payload.get("subdomain", notification.client_id)
        attempt = notification.attempts + 1

        async with self._session_factory() as session:
            repo = self._repository_factory(session)
            try:
                self._log.step_start(
                    DeployStage.DISPATCH,
                    f"Delivering {subdomain}",
                    attempt=attempt,
                    client=notification.client_id,
                )
                self._log.detail(
                    "Payload", template=notification.payload.get("templateId")
                )
                await self._workflow.trigger(notification.payload)
            except Exception as e:
                self._record_failure(notification, subdomain, e)
            else:
                notification.mark_delivered()
                self._log.step_complete(
                    DeployStage.DELIVERED,
                    f"Deploy workflow accepted {subdomain}",
                    attempts=notification.attempts,
                )

            await repo.update(notification)
            await session.commit()

    def _record_failure(
        self, notification: DeployNotification, subdomain: str, error: Exception
    ) -> None:
        attempt = notification.attempts + 1
        if attempt >= self._max_attempts:
            notification.mark_failed(str(error))
            self._log.step_error(
                DeployStage.ERROR,
                f"Giving up on {subdomain} after {attempt} attempts",
                error=error,
            )
            return

        delay = self.backoff_for(attempt)
        notification.mark_retry(str(error), delay)
        self._log.step_warning(
            DeployStage.RETRY,
            f"Delivery of {subdomain} failed; retrying in {delay:.0f}s",
            attempt=attempt,
            error=str(error),
        )
