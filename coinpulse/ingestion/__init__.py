"""Data ingestion module for coinpulse."""

from .base import DataSource
from .scheduler import RefresherState, ScheduledRefresher
from .throttle import Throttle
from .transport import HttpxTransport, Transport

__all__ = [
    "DataSource",
    "RefresherState",
    "ScheduledRefresher",
    "Throttle",
    "HttpxTransport",
    "Transport",
]
