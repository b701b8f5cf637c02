"""Unit tests for the DeployDispatcher outbox worker."""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from fakes import FakeDeployNotificationRepository, FakeWorkflowClient
from sitelaunch.application.services import DeployDispatcher
from sitelaunch.domain.entities import DeployNotification, NotificationStatus


# ── Helpers ──


class FakeSession:
    def __init__(self):
        self.commits = 0

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False

    async def commit(self):
        self.commits += 1


def _dispatcher(repo, workflow, **kwargs) -> DeployDispatcher:
    return DeployDispatcher(
        session_factory=FakeSession,
        repository_factory=lambda session: repo,
        workflow=workflow,
        **kwargs,
    )


async def _queue(repo: FakeDeployNotificationRepository, client_id: str = "c1") -> DeployNotification:
    return await repo.create(
        DeployNotification(
            client_id=client_id,
            payload={"clientId": client_id, "subdomain": "joes-pizza", "templateId": "restaurant"},
        )
    )


def _make_due(notification: DeployNotification) -> None:
    notification.next_attempt_at = datetime.now(timezone.utc) - timedelta(seconds=1)


# ── Tests ──


def test_backoff_is_exponential_and_capped():
    dispatcher = _dispatcher(
        FakeDeployNotificationRepository(),
        FakeWorkflowClient(),
        backoff_seconds=10,
        backoff_max_seconds=600,
    )
    assert [dispatcher.backoff_for(n) for n in (1, 2, 3, 7, 10)] == [10, 20, 40, 600, 600]


@pytest.mark.asyncio
async def test_delivers_due_entry(notification_repo):
    workflow = FakeWorkflowClient()
    queued = await _queue(notification_repo)

    attempted = await _dispatcher(notification_repo, workflow).run_once()

    assert attempted == 1
    assert workflow.payloads == [queued.payload]
    assert queued.status is NotificationStatus.DELIVERED
    assert queued.attempts == 1
    assert queued.delivered_at is not None


@pytest.mark.asyncio
async def test_nothing_due(notification_repo):
    assert await _dispatcher(notification_repo, FakeWorkflowClient()).run_once() == 0


@pytest.mark.asyncio
async def test_failed_delivery_is_rescheduled(notification_repo):
    workflow = FakeWorkflowClient(failures=1)
    queued = await _queue(notification_repo)
    dispatcher = _dispatcher(notification_repo, workflow, backoff_seconds=10)

    await dispatcher.run_once()

    assert queued.status is NotificationStatus.PENDING
    assert queued.attempts == 1
    assert "Service Unavailable" in queued.last_error
    assert queued.next_attempt_at > datetime.now(timezone.utc) + timedelta(seconds=5)
    # Not due again until the backoff elapses.
    assert await dispatcher.run_once() == 0

    _make_due(queued)
    await dispatcher.run_once()
    assert queued.status is NotificationStatus.DELIVERED
    assert queued.attempts == 2
    assert queued.last_error is None


@pytest.mark.asyncio
async def test_gives_up_after_max_attempts(notification_repo):
    workflow = FakeWorkflowClient(failures=10)
    queued = await _queue(notification_repo)
    dispatcher = _dispatcher(notification_repo, workflow, max_attempts=2)

    await dispatcher.run_once()
    _make_due(queued)
    await dispatcher.run_once()

    assert queued.status is NotificationStatus.FAILED
    assert queued.attempts == 2
    _make_due(queued)
    assert await dispatcher.run_once() == 0


@pytest.mark.asyncio
async def test_unconfigured_workflow_leaves_entries_pending(notification_repo):
    queued = await _queue(notification_repo)

    attempted = await _dispatcher(notification_repo, FakeWorkflowClient(configured=False)).run_once()

    assert attempted == 0
    assert queued.status is NotificationStatus.PENDING
    assert queued.attempts == 0


@pytest.mark.asyncio
async def test_one_failure_does_not_block_the_batch(notification_repo):
    workflow = FakeWorkflowClient(failures=1)
    first = await _queue(notification_repo, "c1")
    second = await _queue(notification_repo, "c2")
    second.created_at = first.created_at + timedelta(seconds=1)

    attempted = await _dispatcher(notification_repo, workflow).run_once()

    assert attempted == 2
    assert first.status is NotificationStatus.PENDING
    assert second.status is NotificationStatus.DELIVERED


@pytest.mark.asyncio
async def test_background_loop_delivers_and_stops(notification_repo):
    workflow = FakeWorkflowClient()
    queued = await _queue(notification_repo)
    dispatcher = _dispatcher(notification_repo, workflow, poll_interval=0.01)

    await dispatcher.start()
    assert dispatcher.is_running
    for _ in range(100):
        if queued.status is NotificationStatus.DELIVERED:
            break
        await asyncio.sleep(0.01)
    await dispatcher.stop()

    assert queued.status is NotificationStatus.DELIVERED
    assert not dispatcher.is_running
