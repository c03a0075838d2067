"""coinpulse - scheduled CoinMarketCap ticker poller."""

__version__ = "0.1.0"
