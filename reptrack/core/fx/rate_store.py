"""
Exchange rate storage for REPTrack.

Holds the current BASE conversion table. The table is persisted through a
key-value settings backend, loaded when the store is created, and only
changed through the setter methods below.

Classes:
    SettingsBackend: Key-value persistence interface
    InMemorySettingsBackend: Dict-backed settings, used for demo mode and tests
    ExchangeRateStore: The rate table itself
"""

import json
import math
import logging
import threading
from abc import ABC, abstractmethod
from typing import Dict, Mapping, Optional, Union

from reptrack.core.constants import (
    BASE_CURRENCY,
    DEFAULT_RATES,
    ECurrency,
    SETTINGS_KEY_API_KEY,
    SETTINGS_KEY_RATES,
)

logger = logging.getLogger(__name__)

CurrencyInput = Union[ECurrency, str]


def _usable(rate) -> bool:
    """A rate must be a finite number above zero."""
    return rate is not None and math.isfinite(rate) and rate > 0


class SettingsBackend(ABC):
    """Key-value persistence for user settings (rates, API key)."""

    @abstractmethod
    def load(self, key: str) -> Optional[str]:
        """Return the stored value for ``key`` or None when absent."""

    @abstractmethod
    def save(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key``; missing keys are ignored."""


class InMemorySettingsBackend(SettingsBackend):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._values: Dict[str, str] = dict(initial or {})

    def load(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def save(self, key: str, value: str) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)


class ExchangeRateStore:
    """
    Current exchange-rate table.

    Every rate means "1 unit of this currency = X units of BASE". BASE is
    always exactly 1 and cannot be set. Updates replace the whole table under
    a lock, and every read hands out a copy, so readers never see a
    half-applied refresh.

    Usage:
        store = ExchangeRateStore(InMemorySettingsBackend())
        store.set_rate("USD", 3.6)
        store.get_rates()  # {NIS: 1.0, USD: 3.6, EUR: 4.05}
    """

    def __init__(self, settings: Optional[SettingsBackend] = None):
        self._settings = settings or InMemorySettingsBackend()
        self._lock = threading.Lock()
        self._rates: Dict[ECurrency, float] = self._load()

    def _load(self) -> Dict[ECurrency, float]:
        """Defaults merged with the persisted table; absent or corrupt data gives defaults."""
        rates = dict(DEFAULT_RATES)
        try:
            stored = self._settings.load(SETTINGS_KEY_RATES)
        except Exception as e:
            logger.error(f"Failed to load rates: {e}")
            return rates

        if not stored:
            return rates

        try:
            parsed = json.loads(stored)
            if not isinstance(parsed, dict):
                raise ValueError(f"expected an object, got {type(parsed).__name__}")
        except ValueError as e:
            logger.error(f"Failed to load rates, using defaults: {e}")
            return rates

        for code, value in parsed.items():
            try:
                currency = ECurrency(code)
                rate = float(value)
            except (ValueError, TypeError):
                logger.warning(f"Ignoring stored rate {code}={value!r}")
                continue
            if currency != BASE_CURRENCY and _usable(rate):
                rates[currency] = rate
        return rates

    def _persist(self, rates: Dict[ECurrency, float]) -> None:
        payload = json.dumps({currency.value: rate for currency, rate in rates.items()})
        try:
            self._settings.save(SETTINGS_KEY_RATES, payload)
        except Exception as e:
            logger.error(f"Failed to save rates: {e}")

    def get_rates(self) -> Dict[ECurrency, float]:
        """Return a copy of the current table."""
        with self._lock:
            return dict(self._rates)

    def get_rate(self, currency: CurrencyInput) -> float:
        currency = ECurrency(currency)
        with self._lock:
            return self._rates[currency]

    def set_rate(self, currency: CurrencyInput, rate: float) -> None:
        """
        Set one rate and persist the table.

        Non-positive or non-finite rates and attempts to set BASE are ignored silently.
        """
        self.update_rates({currency: rate})

    def update_rates(self, rates: Mapping[CurrencyInput, float]) -> None:
        """Apply several rates as a single replacement and a single persist."""
        accepted = {}
        for code, rate in rates.items():
            currency = ECurrency(code)
            if currency == BASE_CURRENCY or not _usable(rate):
                logger.debug(f"Ignoring rate assignment {currency.value}={rate}")
                continue
            accepted[currency] = float(rate)

        if not accepted:
            return

        with self._lock:
            updated = dict(self._rates)
            updated.update(accepted)
            self._rates = updated
            self._persist(updated)

    def reset_rates(self) -> None:
        """Restore the default table and clear persisted overrides."""
        with self._lock:
            self._rates = dict(DEFAULT_RATES)
            try:
                self._settings.delete(SETTINGS_KEY_RATES)
            except Exception as e:
                logger.error(f"Failed to clear stored rates: {e}")

    def get_api_key(self) -> Optional[str]:
        return self._settings.load(SETTINGS_KEY_API_KEY)

    def set_api_key(self, api_key: str) -> None:
        self._settings.save(SETTINGS_KEY_API_KEY, api_key.strip())
