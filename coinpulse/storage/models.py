"""Domain models held in the coin registry."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal

# Stands in for a missing or unparseable last-updated time.
UNSET_TIMESTAMP = datetime.min.replace(tzinfo=UTC)


@dataclass(frozen=True)
class TickerSnapshot:
    """Market metrics for one coin as of one refresh cycle."""

    symbol: str
    rank: int
    price_btc: Decimal | None = None
    price_usd: Decimal | None = None
    volume_24h_usd: Decimal | None = None
    market_cap_usd: Decimal | None = None
    available_supply: Decimal | None = None
    total_supply: Decimal | None = None
    max_supply: Decimal | None = None
    percent_change_1h: Decimal | None = None
    percent_change_24h: Decimal | None = None
    percent_change_7d: Decimal | None = None
    last_updated: datetime = UNSET_TIMESTAMP


@dataclass(eq=False)
class Coin:
    """A tradable asset, identified by its display name."""

    name: str
    market_snapshot: TickerSnapshot | None = field(default=None, repr=False)

    def set_market_snapshot(self, snapshot: TickerSnapshot) -> None:
        """Replace the current market data wholesale."""
        self.market_snapshot = snapshot
