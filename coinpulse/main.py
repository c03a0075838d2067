"""Command-line entry point: poll CoinMarketCap until interrupted."""

import asyncio
import logging
import signal

from coinpulse.config.settings import Settings, settings as default_settings
from coinpulse.ingestion.market_data.coinmarketcap_client import CoinMarketCapSource
from coinpulse.ingestion.transport import Transport
from coinpulse.storage.registry import CoinRegistry

logger = logging.getLogger(__name__)


def _install_signal_handlers(stop_event: asyncio.Event) -> list[signal.Signals]:
    loop = asyncio.get_running_loop()
    installed = []
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop_event.set)
            installed.append(sig)
        except (NotImplementedError, RuntimeError):
            # Windows event loops and non-main threads
            logger.debug(f"Signal handler for {sig.name} not installed")
    return installed


async def run(
    settings: Settings | None = None,
    stop_event: asyncio.Event | None = None,
    transport: Transport | None = None,
    registry: CoinRegistry | None = None,
) -> CoinRegistry:
    """Run the poller until ``stop_event`` is set."""
    settings = settings or default_settings
    stop_event = stop_event or asyncio.Event()
    if registry is None:
        registry = CoinRegistry(blacklist=settings.coin_blacklist)

    installed = _install_signal_handlers(stop_event)

    source = CoinMarketCapSource(registry, stop_event, transport=transport, config=settings)
    logger.info("Starting coinpulse...")
    try:
        await source.start()
        await stop_event.wait()
    finally:
        logger.info("Shutting down coinpulse...")
        await source.stop()
        loop = asyncio.get_running_loop()
        for sig in installed:
            loop.remove_signal_handler(sig)

    tracked = sum(1 for coin in registry if coin.market_snapshot is not None)
    logger.info(f"coinpulse stopped with {tracked}/{len(registry)} coins priced")
    return registry


def main() -> None:
    logging.basicConfig(
        level=getattr(logging, default_settings.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run())


if __name__ == "__main__":
    main()
