"""CoinMarketCap ticker data source.

Polls the public v1 ticker endpoint for the full coin list and attaches a
fresh ``TickerSnapshot`` to each registry entry. Decoding failures are
treated as transient and leave existing snapshots in place; non-OK
responses also back off the throttle.
"""

import asyncio
from datetime import UTC, datetime
from decimal import Decimal, InvalidOperation
from http import HTTPStatus
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from coinpulse.config.settings import Settings, settings
from coinpulse.ingestion.base import DataSource
from coinpulse.ingestion.transport import HttpxTransport, Transport
from coinpulse.storage.models import UNSET_TIMESTAMP, Coin, TickerSnapshot
from coinpulse.storage.registry import CoinResolver


class TickerParseError(ValueError):
    """Raised when a ticker lacks a usable symbol, rank or name."""


class CoinMarketCapTicker(BaseModel):
    """One record of the ``v1/ticker`` response."""

    model_config = ConfigDict(
        extra="ignore",
        coerce_numbers_to_str=True,
        populate_by_name=True,
    )

    name: str | None = None
    symbol: str | None = None
    rank: str | None = None
    # Left untyped; _pd and _parse_timestamp degrade bad values to "no value".
    price_usd: Any = None
    price_btc: Any = None
    volume_24h_usd: Any = Field(default=None, alias="24h_volume_usd")
    market_cap_usd: Any = None
    available_supply: Any = None
    total_supply: Any = None
    max_supply: Any = None
    percent_change_1h: Any = None
    percent_change_24h: Any = None
    percent_change_7d: Any = None
    last_updated: Any = None


def _pd(val: Any) -> Decimal | None:
    """Safely parse a value to Decimal."""
    if val is None or val == "" or val == "null":
        return None
    try:
        result = Decimal(str(val).strip())
    except InvalidOperation:
        return None
    return result if result.is_finite() else None


def _parse_timestamp(val: Any) -> datetime:
    """Parse Unix seconds, falling back to ``UNSET_TIMESTAMP``."""
    if val is None or isinstance(val, bool):
        return UNSET_TIMESTAMP
    try:
        return datetime.fromtimestamp(int(val), tz=UTC)
    except (TypeError, ValueError, OverflowError, OSError):
        return UNSET_TIMESTAMP


def _parse_rank(val: str | None) -> int:
    try:
        return int(val)  # type: ignore[arg-type]
    except (TypeError, ValueError) as e:
        raise TickerParseError(f"invalid rank {val!r}") from e


class CoinMarketCapSource(DataSource):
    """Keeps registry coins up to date with CoinMarketCap tickers."""

    source_name = "coinmarketcap"

    def __init__(
        self,
        registry: CoinResolver,
        cancel_event: asyncio.Event,
        transport: Transport | None = None,
        config: Settings | None = None,
    ) -> None:
        config = config or settings
        super().__init__(
            cancel_event,
            min_interval=config.coinmarketcap_min_interval_seconds,
            backoff_interval=config.coinmarketcap_backoff_seconds,
            refresh_period=config.coinmarketcap_refresh_seconds,
        )
        self.registry = registry
        self._owns_transport = transport is None
        self._transport = transport or HttpxTransport(
            config.coinmarketcap_base_url,
            timeout=config.http_timeout_seconds,
        )
        self.ticker_path = config.coinmarketcap_ticker_path
        self.ticker_params = {"limit": config.coinmarketcap_ticker_limit}

        # First symbol seen wins; later duplicates never overwrite.
        self.symbol_index: dict[str, Coin] = {}
        self.last_status: int | None = None
        self.last_refresh: datetime | None = None

    async def stop(self) -> None:
        await super().stop()
        if self._owns_transport and isinstance(self._transport, HttpxTransport):
            await self._transport.aclose()

    def coin_for_symbol(self, symbol: str) -> Coin | None:
        """Look up the coin first seen with ``symbol`` (case-insensitive)."""
        return self.symbol_index.get(symbol.lower())

    async def refresh(self) -> None:
        """Download the ticker list and apply it to the registry."""
        status, payload = await self._transport.get(self.ticker_path, params=self.ticker_params)
        self.last_status = status

        if status != HTTPStatus.OK:
            self.logger.error(f"Ticker request failed with status {status}")
            self.throttle.back_off()
            return

        records = self._decode(payload)
        if records is None:
            # Parsing error, expected to clear up on a later cycle
            self.logger.error("Ticker refresh failed: payload could not be decoded")
            return

        applied = 0
        for position, record in enumerate(records):
            try:
                ticker = CoinMarketCapTicker.model_validate(record)
            except ValidationError as e:
                self.logger.warning(f"Skipping malformed ticker at position {position}: {e}")
                continue
            try:
                if self._apply_ticker(ticker):
                    applied += 1
            except TickerParseError as e:
                self.logger.warning(f"Skipping ticker {ticker.name!r}: {e}")

        self.last_refresh = datetime.now(UTC)
        self.logger.info(f"Applied {applied}/{len(records)} tickers")

    def _decode(self, payload: Any) -> list[Any] | None:
        """Return the raw ticker records, or None if the payload is not a list."""
        if not isinstance(payload, list):
            self.logger.debug(f"Unexpected ticker payload type {type(payload).__name__}")
            return None
        return payload

    def _apply_ticker(self, ticker: CoinMarketCapTicker) -> bool:
        """Attach a snapshot for one ticker. Returns False if skipped."""
        if not ticker.name or not ticker.name.strip():
            raise TickerParseError("missing name")

        coin = self.registry.resolve_or_create(ticker.name)
        if coin is None:
            self.logger.debug(f"Skipping blacklisted coin {ticker.name}")
            return False

        last_updated = _parse_timestamp(ticker.last_updated)

        symbol = (ticker.symbol or "").strip()
        if not symbol:
            raise TickerParseError("missing symbol")
        rank = _parse_rank(ticker.rank)

        key = symbol.lower()
        if key not in self.symbol_index:
            self.symbol_index[key] = coin

        coin.set_market_snapshot(
            TickerSnapshot(
                symbol=symbol,
                rank=rank,
                price_btc=_pd(ticker.price_btc),
                price_usd=_pd(ticker.price_usd),
                volume_24h_usd=_pd(ticker.volume_24h_usd),
                market_cap_usd=_pd(ticker.market_cap_usd),
                available_supply=_pd(ticker.available_supply),
                total_supply=_pd(ticker.total_supply),
                max_supply=_pd(ticker.max_supply),
                percent_change_1h=_pd(ticker.percent_change_1h),
                percent_change_24h=_pd(ticker.percent_change_24h),
                percent_change_7d=_pd(ticker.percent_change_7d),
                last_updated=last_updated,
            )
        )
        return True
