"""
Live exchange-rate refresh for REPTrack.

Two strategies, tried in order:
1. A keyed provider (CurrencyFreaks-style) queried for the BASE ISO code and
   every foreign currency.
2. A keyless provider (Frankfurter-style) queried with the pivot currency as
   its base.

Both providers quote against the pivot currency (USD), not BASE, so the
fetched figures are turned into BASE rates with a cross-rate:
``rate(X -> BASE) = fetched[BASE] / fetched[X]`` where ``fetched[pivot] = 1``.

Any failure of a single strategy (network error, timeout, non-OK status,
missing or unparseable fields) is logged and the next strategy is tried.
Only when no strategy yields every needed figure does the refresh fail, and
in that case the store is left untouched.
"""

import logging
import threading
from typing import Dict, List, Optional

import requests

from reptrack.core.constants import (
    BASE_CURRENCY,
    ECurrency,
    ISO_CODES,
    PIVOT_CURRENCY,
    RATE_DECIMALS,
)
from reptrack.core.fx.rate_store import ExchangeRateStore
from reptrack.utils.error_utils import LiveRateFetchExhaustedError

logger = logging.getLogger(__name__)

PRIMARY_URL = "https://api.currencyfreaks.com/v2.0/rates/latest"
FALLBACK_URL = "https://api.frankfurter.app/latest"
DEFAULT_TIMEOUT = 10


class RateFetcher:
    """
    Refreshes an ExchangeRateStore from live providers.

    Refreshes are serialized: a second call waits for the one in flight.

    Attributes:
        store: Store receiving the derived rates
        session: requests-compatible session (injectable for tests)
        timeout: Per-request timeout in seconds
        pivot_currency: ISO code both providers quote against
        last_source: Name of the strategy that supplied the last refresh
    """

    def __init__(
        self,
        store: ExchangeRateStore,
        session: Optional[requests.Session] = None,
        primary_url: str = PRIMARY_URL,
        fallback_url: str = FALLBACK_URL,
        timeout: float = DEFAULT_TIMEOUT,
        pivot_currency: str = PIVOT_CURRENCY,
    ):
        self.store = store
        self.session = session or requests.Session()
        self.primary_url = primary_url
        self.fallback_url = fallback_url
        self.timeout = timeout
        self.pivot_currency = pivot_currency
        self.last_source: Optional[str] = None
        self._refresh_lock = threading.Lock()

    @property
    def base_symbol(self) -> str:
        return ISO_CODES[BASE_CURRENCY]

    @property
    def foreign_currencies(self) -> List[ECurrency]:
        return [c for c in ECurrency if c != BASE_CURRENCY]

    def required_symbols(self) -> List[str]:
        """ISO codes whose pivot-relative quote is needed to derive every BASE rate."""
        symbols = [self.base_symbol]
        for currency in self.foreign_currencies:
            symbol = ISO_CODES[currency]
            if symbol != self.pivot_currency and symbol not in symbols:
                symbols.append(symbol)
        return symbols

    def fetch_live_rates(self, api_key: Optional[str] = None) -> None:
        """
        Refresh every foreign rate in the store.

        Args:
            api_key: Key for the primary provider; blank skips that strategy

        Raises:
            LiveRateFetchExhaustedError: If no strategy produced every figure
        """
        with self._refresh_lock:
            quotes, source = self._fetch_quotes((api_key or "").strip())
            if quotes is None:
                raise LiveRateFetchExhaustedError(
                    "All live rate strategies failed. Please check the internet connection.",
                    {"required": self.required_symbols()},
                )

            derived = self.derive_base_rates(quotes)
            self.store.update_rates(derived)
            self.last_source = source

            summary = ", ".join(f"{c.value}={r:.2f}" for c, r in derived.items())
            logger.info(f"Rates updated via {source}: {summary}")

    def _fetch_quotes(self, api_key: str):
        """Run the strategies in order; return (quotes, source) or (None, None)."""
        symbols = self.required_symbols()

        if api_key:
            logger.info("Attempting primary rate provider...")
            quotes = self._request_quotes(
                self.primary_url,
                {"apikey": api_key, "symbols": ",".join(symbols + [self.pivot_currency])},
                symbols,
            )
            if quotes is not None:
                return quotes, "primary"
        else:
            logger.info("No API key configured, skipping primary rate provider")

        logger.info("Attempting fallback rate provider...")
        quotes = self._request_quotes(
            self.fallback_url,
            {"from": self.pivot_currency, "to": ",".join(symbols)},
            symbols,
        )
        if quotes is not None:
            return quotes, "fallback"

        return None, None

    def _request_quotes(self, url: str, params: Dict[str, str], symbols: List[str]) -> Optional[Dict[str, float]]:
        """
        GET ``url`` and extract positive quotes for every symbol.

        Returns None on any failure; failures are logged, never raised.
        """
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.Timeout:
            logger.warning(f"Rate request timed out after {self.timeout}s: {url}")
            return None
        except requests.exceptions.RequestException as e:
            logger.warning(f"Rate request failed: {url} - {e}")
            return None

        if not response.ok:
            logger.warning(f"Rate provider {url} returned {response.status_code}")
            return None

        try:
            payload = response.json()
        except ValueError as e:
            logger.warning(f"Rate provider {url} returned invalid JSON: {e}")
            return None

        rates = payload.get("rates") if isinstance(payload, dict) else None
        if not isinstance(rates, dict):
            logger.warning(f"Rate provider {url} response has no rates object")
            return None

        quotes = {}
        for symbol in symbols:
            try:
                value = float(rates[symbol])
            except (KeyError, TypeError, ValueError):
                logger.warning(f"Rate provider {url} response is missing {symbol}")
                return None
            if not value > 0:
                logger.warning(f"Rate provider {url} returned unusable {symbol}={value}")
                return None
            quotes[symbol] = value
        return quotes

    def derive_base_rates(self, quotes: Dict[str, float]) -> Dict[ECurrency, float]:
        """
        Turn pivot-relative quotes into BASE rates, rounded to 4 decimals.

        Examples:
            >>> fetcher.derive_base_rates({"ILS": 4.5, "EUR": 0.9})
            {<ECurrency.USD: 'USD'>: 4.5, <ECurrency.EUR: 'EUR'>: 5.0}
        """
        quotes = dict(quotes)
        quotes[self.pivot_currency] = 1.0
        base_per_pivot = quotes[self.base_symbol]

        derived = {}
        for currency in self.foreign_currencies:
            derived[currency] = round(base_per_pivot / quotes[ISO_CODES[currency]], RATE_DECIMALS)
        return derived
