"""
Exchange-rate subsystem: rate storage, conversion and live refresh.
"""

from reptrack.core.fx.rate_store import (
    SettingsBackend,
    InMemorySettingsBackend,
    ExchangeRateStore,
)
from reptrack.core.fx.converter import CurrencyConverter
from reptrack.core.fx.rate_fetcher import RateFetcher

__all__ = [
    "SettingsBackend",
    "InMemorySettingsBackend",
    "ExchangeRateStore",
    "CurrencyConverter",
    "RateFetcher",
]
