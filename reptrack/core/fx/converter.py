"""
Currency conversion and formatting over the exchange-rate table.

BASE acts as the pivot: any currency converts to any other through it.
``convert`` never rounds; rounding happens only when a figure is formatted
for display.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

from reptrack.core.constants import ECurrency, ISO_CODES, SYMBOLS
from reptrack.core.fx.rate_store import ExchangeRateStore

CurrencyInput = Union[ECurrency, str]


class CurrencyConverter:
    """
    Converts and formats amounts using the rates in an ExchangeRateStore.

    Rates are read on every call, so a refresh of the store is visible to
    the next conversion without rebuilding the converter.
    """

    def __init__(self, store: ExchangeRateStore):
        self.store = store

    def convert(self, amount: float, from_currency: CurrencyInput, to_currency: CurrencyInput) -> float:
        """
        Convert ``amount`` between currencies.

        Examples:
            >>> converter.convert(100, "USD", "NIS")   # default rates
            375.0
            >>> converter.convert(405, "NIS", "EUR")
            100.0
        """
        source = ECurrency(from_currency)
        target = ECurrency(to_currency)
        if source == target:
            return amount
        rates = self.store.get_rates()
        return amount * rates[source] / rates[target]

    def format(self, amount: float, currency: CurrencyInput) -> str:
        """
        Format a monetary amount with no fraction digits and a narrow symbol.

        Examples:
            >>> converter.format(1234.56, "USD")
            '$1,235'
            >>> converter.format(-500, "NIS")
            '-₪500'
            >>> converter.format(2.5, "USD")
            '$3'
        """
        symbol = self.get_symbol(currency)
        # Halves round away from zero; small negatives keep their minus sign
        rounded = abs(Decimal(str(amount))).quantize(Decimal(1), rounding=ROUND_HALF_UP)
        sign = "-" if amount < 0 else ""
        return f"{sign}{symbol}{rounded:,.0f}"

    @staticmethod
    def get_symbol(currency: CurrencyInput) -> str:
        return SYMBOLS[ECurrency(currency)]

    @staticmethod
    def iso_code(currency: CurrencyInput) -> str:
        """Real-world ISO code (the synthetic BASE unit maps to ILS)."""
        return ISO_CODES[ECurrency(currency)]
