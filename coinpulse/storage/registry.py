"""Registry of known coins keyed by display name."""

import logging
import threading
from typing import Iterable, Iterator, Protocol

from coinpulse.storage.models import Coin

logger = logging.getLogger(__name__)


class CoinResolver(Protocol):
    """Capability to turn a display name into a registry entry."""

    def resolve_or_create(self, name: str) -> Coin | None:
        """Return the entry for ``name``, or None if the name is blacklisted."""
        ...


class CoinRegistry:
    """Thread-safe in-memory coin registry with a name blacklist."""

    def __init__(self, blacklist: Iterable[str] = ()) -> None:
        self._coins: dict[str, Coin] = {}
        self._blacklist: set[str] = {self._key(name) for name in blacklist}
        self._lock = threading.Lock()

    @staticmethod
    def _key(name: str) -> str:
        return name.strip().lower()

    def resolve_or_create(self, name: str) -> Coin | None:
        key = self._key(name)
        with self._lock:
            if key in self._blacklist:
                return None
            coin = self._coins.get(key)
            if coin is None:
                coin = Coin(name=name.strip())
                self._coins[key] = coin
                logger.debug(f"Registered coin {coin.name}")
            return coin

    def get(self, name: str) -> Coin | None:
        with self._lock:
            return self._coins.get(self._key(name))

    def __len__(self) -> int:
        with self._lock:
            return len(self._coins)

    def __iter__(self) -> Iterator[Coin]:
        with self._lock:
            return iter(list(self._coins.values()))
