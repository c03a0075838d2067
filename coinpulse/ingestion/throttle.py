"""Minimum-spacing throttle with back-off for API calls."""

import threading
import time
from dataclasses import dataclass, field
from typing import Callable


@dataclass
class Throttle:
    """Gate that permits at most one action per ``min_interval``.

    Attributes:
        min_interval: Minimum seconds between permitted actions
        backoff_interval: Seconds to hold the gate closed after a failure
        next_allowed: Monotonic timestamp at which the next action may fire
        clock: Monotonic time source
    """

    min_interval: float
    backoff_interval: float
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)
    next_allowed: float = field(init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def __post_init__(self) -> None:
        if self.min_interval < 0 or self.backoff_interval < 0:
            raise ValueError("Throttle intervals cannot be negative")
        self.next_allowed = self.clock()

    def try_consume(self) -> bool:
        """Claim the next slot if the gate is open.

        Returns:
            True if the action may proceed, False otherwise
        """
        with self._lock:
            now = self.clock()
            if now < self.next_allowed:
                return False
            self.next_allowed = now + self.min_interval
            return True

    def back_off(self) -> None:
        """Push the next allowed time out by ``backoff_interval``."""
        with self._lock:
            self.next_allowed = max(self.next_allowed, self.clock() + self.backoff_interval)

    def remaining(self) -> float:
        """Seconds until the gate opens (0 if open now)."""
        with self._lock:
            return max(0.0, self.next_allowed - self.clock())
