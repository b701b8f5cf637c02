"""Status Poller: follows a client's deployment until it settles."""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from sitelaunch.application.interfaces import SiteApi, StatusReply
from sitelaunch.domain.entities import ClientStatus

logger = logging.getLogger(__name__)

TERMINAL_STATUSES = frozenset(s.value for s in ClientStatus if s.is_terminal)


class StatusPoller:
    """Polls client-status with capped exponential backoff.

    Stops at a terminal status, on ``cancel()`` or after ``max_polls``
    requests, whichever comes first. Failed requests count as polls and
    back off like any other.
    """

    def __init__(
        self,
        site_api: SiteApi,
        *,
        initial_interval: float = 10.0,
        max_interval: float = 120.0,
        multiplier: float = 2.0,
        max_polls: int = 30,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._api = site_api
        self._initial_interval = initial_interval
        self._max_interval = max_interval
        self._multiplier = multiplier
        self._max_polls = max_polls
        self._sleep = sleep
        self._cancelled = asyncio.Event()
        self.polls = 0

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        """Stop polling; tied to the lifetime of whatever displays the status."""
        self._cancelled.set()

    def interval_for(self, poll: int) -> float:
        """Delay after poll number ``poll`` (1-based)."""
        return min(self._initial_interval * self._multiplier ** (poll - 1), self._max_interval)

    async def poll(
        self,
        client_id: str,
        on_update: Callable[[StatusReply], None] | None = None,
    ) -> StatusReply | None:
        """Poll until settled. Returns the last reply received, or None if none arrived."""
        last: StatusReply | None = None
        while not self.cancelled and self.polls < self._max_polls:
            self.polls += 1
            try:
                last = await self._api.get_status(client_id)
            except Exception as exc:
                logger.warning("Status poll %d for %s failed: %s", self.polls, client_id, exc)
            else:
                if on_update is not None:
                    on_update(last)
                if last.status in TERMINAL_STATUSES:
                    logger.info("Client %s settled as %s", client_id, last.status)
                    return last

            if self.polls >= self._max_polls:
                break
            await self._wait(self.interval_for(self.polls))

        logger.info("Stopped polling %s after %d polls", client_id, self.polls)
        return last

    async def _wait(self, seconds: float) -> None:
        # Sleep, but wake early when cancelled.
        cancel_wait = asyncio.create_task(self._cancelled.wait())
        sleeper = asyncio.create_task(self._sleep(seconds))
        try:
            await asyncio.wait({cancel_wait, sleeper}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in (cancel_wait, sleeper):
                task.cancel()
            await asyncio.gather(cancel_wait, sleeper, return_exceptions=True)
