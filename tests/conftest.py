"""Pytest configuration and fixtures."""

from typing import Any

import pytest

from coinpulse.config.settings import Settings
from tests.fakes import FakeClock, make_ticker


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fast_settings() -> Settings:
    """Settings with no minimum spacing and a short refresh period."""
    return Settings(
        _env_file=None,
        coinmarketcap_min_interval_seconds=0,
        coinmarketcap_backoff_seconds=60,
        coinmarketcap_refresh_seconds=0.01,
    )


@pytest.fixture
def bitcoin_ticker() -> dict[str, Any]:
    return make_ticker(
        "Bitcoin",
        "BTC",
        "1",
        price_usd="50000.5",
        last_updated="1700000000",
    )
