"""Base classes for scheduled data sources."""

import asyncio
import logging
from abc import ABC, abstractmethod

from coinpulse.ingestion.scheduler import ScheduledRefresher
from coinpulse.ingestion.throttle import Throttle


class DataSource(ABC):
    """Abstract base class for polled data sources.

    Provides throttling and the auto-update loop; subclasses implement
    ``refresh``, which is responsible for calling ``throttle.back_off()``
    on failures it detects.
    """

    source_name: str = "base"

    def __init__(
        self,
        cancel_event: asyncio.Event,
        min_interval: float,
        backoff_interval: float,
        refresh_period: float,
    ) -> None:
        self.throttle = Throttle(min_interval=min_interval, backoff_interval=backoff_interval)
        self.auto_update = ScheduledRefresher(
            self.refresh,
            refresh_period,
            self.throttle,
            cancel_event,
            name=f"{self.source_name}-refresh",
        )
        self.logger = logging.getLogger(f"datasource.{self.source_name}")

    async def start(self) -> None:
        """Refresh once immediately, then keep refreshing in the background."""
        await self.auto_update.start()

    async def stop(self) -> None:
        """Stop the refresh loop."""
        await self.auto_update.stop()

    @abstractmethod
    async def refresh(self) -> None:
        """Fetch and apply one round of data."""
        ...
