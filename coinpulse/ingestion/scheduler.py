"""Periodic refresh loop gated by a throttle."""

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable

from coinpulse.ingestion.throttle import Throttle

logger = logging.getLogger(__name__)

RefreshAction = Callable[[], Awaitable[None]]


class RefresherState(str, Enum):
    """Lifecycle of a scheduled refresher."""

    IDLE = "idle"
    RUNNING = "running"
    CANCELLED = "cancelled"


class ScheduledRefresher:
    """Run an async action every ``period`` seconds, starting immediately.

    Every attempt first asks the throttle for a slot; a closed gate skips the
    cycle. The action is always awaited to completion before the next wait
    begins, so at most one execution is ever in flight. Setting
    ``cancel_event`` ends the loop at the next wait or attempt boundary.
    """

    def __init__(
        self,
        action: RefreshAction,
        period: float,
        throttle: Throttle,
        cancel_event: asyncio.Event,
        name: str = "refresher",
    ) -> None:
        if period <= 0:
            raise ValueError("period must be positive")
        self.action = action
        self.period = period
        self.throttle = throttle
        self.cancel_event = cancel_event
        self.name = name
        self.state = RefresherState.IDLE
        self._task: asyncio.Task | None = None

    @property
    def is_running(self) -> bool:
        return self.state == RefresherState.RUNNING

    async def start(self) -> None:
        """Run one attempt now, then continue on ``period`` in the background."""
        if self.state != RefresherState.IDLE:
            raise RuntimeError(f"{self.name} already started")
        self.state = RefresherState.RUNNING
        logger.info("Starting %s (period=%ss)", self.name, self.period)

        await self._attempt()

        if self.cancel_event.is_set():
            self.state = RefresherState.CANCELLED
            return
        self._task = asyncio.create_task(self._run(), name=f"{self.name}-loop")

    async def join(self) -> None:
        """Wait for the background loop to finish."""
        if self._task is not None:
            await self._task
            self._task = None

    async def stop(self) -> None:
        """Signal cancellation and wait for the loop to wind down."""
        self.cancel_event.set()
        await self.join()
        if self.state != RefresherState.IDLE:
            self.state = RefresherState.CANCELLED

    async def _run(self) -> None:
        try:
            while not self.cancel_event.is_set():
                if await self._wait_for_cancel(self.period):
                    break
                await self._attempt()
        finally:
            self.state = RefresherState.CANCELLED
            logger.info("Stopped %s", self.name)

    async def _wait_for_cancel(self, timeout: float) -> bool:
        """Sleep up to ``timeout``; True if cancellation arrived first."""
        try:
            await asyncio.wait_for(self.cancel_event.wait(), timeout=timeout)
        except asyncio.TimeoutError:
            return False
        return True

    async def _attempt(self) -> None:
        if self.cancel_event.is_set():
            return
        if not self.throttle.try_consume():
            logger.debug(
                "%s throttled, skipping cycle (%.1fs remaining)",
                self.name,
                self.throttle.remaining(),
            )
            return

        try:
            await self.action()
        except Exception:
            logger.exception("%s action failed", self.name)
