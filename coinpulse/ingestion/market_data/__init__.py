"""Market data sources."""

from .coinmarketcap_client import CoinMarketCapSource, CoinMarketCapTicker, TickerParseError

__all__ = ["CoinMarketCapSource", "CoinMarketCapTicker", "TickerParseError"]
