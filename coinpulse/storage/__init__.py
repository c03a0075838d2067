"""In-memory storage for coinpulse."""

from .models import UNSET_TIMESTAMP, Coin, TickerSnapshot
from .registry import CoinRegistry, CoinResolver

__all__ = ["UNSET_TIMESTAMP", "Coin", "TickerSnapshot", "CoinRegistry", "CoinResolver"]
