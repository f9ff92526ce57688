"""
Income aggregation for REPTrack.

Projected rent from leases, and cash flow over time windows from
transactions. Transaction amounts are converted from the owning property's
currency; a transaction whose property is unknown is read in the fallback
currency instead of failing.

Classes:
    IncomeAggregator: Rent projection and cash-flow sums
"""

from typing import Dict, Iterable, Sequence

import pandas as pd

from reptrack.core.constants import (
    CASH_FLOW_WINDOW_DAYS,
    ECurrency,
    FALLBACK_TRANSACTION_CURRENCY,
    MONTHS_PER_YEAR,
    PERFORMANCE_MONTHS,
)
from reptrack.core.fx.converter import CurrencyConverter
from reptrack.core.models import Property, Transaction
from reptrack.utils.date_utils import DateInput, in_window, month_starts, to_utc, trailing_window
from reptrack.utils.error_utils import error_handler


def projected_annual_rent(property: Property) -> float:
    """
    Yearly rent implied by the current leases, in the property's currency.

    Split properties sum their unit leases (units without a lease count as 0);
    simple properties use the main lease. No lease at all gives 0.
    """
    if property.units:
        monthly = sum(unit.lease.monthly_rent for unit in property.units if unit.lease is not None)
        return monthly * MONTHS_PER_YEAR
    if property.lease is not None:
        return property.lease.monthly_rent * MONTHS_PER_YEAR
    return 0.0


class IncomeAggregator:
    def __init__(self, converter: CurrencyConverter):
        self.converter = converter

    @staticmethod
    def currency_index(properties: Iterable[Property]) -> Dict[str, ECurrency]:
        return {p.id: p.currency for p in properties}

    def converted_amount(
        self,
        transaction: Transaction,
        currencies: Dict[str, ECurrency],
        display_currency: ECurrency,
    ) -> float:
        """Signed amount of ``transaction`` in ``display_currency``."""
        source = currencies.get(transaction.property_id, FALLBACK_TRANSACTION_CURRENCY)
        return self.converter.convert(transaction.signed_amount, source, display_currency)

    @error_handler
    def net_cash_flow(
        self,
        transactions: Iterable[Transaction],
        properties: Iterable[Property],
        start: DateInput,
        end: DateInput,
        display_currency: ECurrency,
    ) -> float:
        """
        Income minus expenses dated in ``[start, end)``, in ``display_currency``.

        Total over any transaction list, including ones that reference
        properties missing from ``properties``.
        """
        currencies = self.currency_index(properties)
        return sum(
            self.converted_amount(t, currencies, display_currency)
            for t in transactions
            if in_window(t.date, start, end)
        )

    @error_handler
    def trailing_cash_flow(
        self,
        transactions: Iterable[Transaction],
        properties: Iterable[Property],
        as_of: DateInput,
        display_currency: ECurrency,
        days: int = CASH_FLOW_WINDOW_DAYS,
    ) -> float:
        """Net cash flow over the ``days`` days up to ``as_of`` (the dashboard's monthly figure)."""
        start, end = trailing_window(as_of, days)
        return self.net_cash_flow(transactions, properties, start, end, display_currency)

    @error_handler
    def monthly_performance(
        self,
        transactions: Sequence[Transaction],
        properties: Iterable[Property],
        as_of: DateInput,
        display_currency: ECurrency,
        months: int = PERFORMANCE_MONTHS,
    ) -> pd.DataFrame:
        """
        Income and expense per calendar month for the last ``months`` months.

        Returns:
            DataFrame with columns: month ("YYYY-MM"), income, expense, net;
            oldest month first, months without transactions filled with 0
        """
        frame = pd.DataFrame({"month": [_month_key(d) for d in month_starts(as_of, months)]})

        currencies = self.currency_index(properties)
        rows = []
        for t in transactions:
            amount = abs(self.converted_amount(t, currencies, display_currency))
            rows.append({
                "month": _month_key(t.date),
                "income": amount if t.is_income else 0.0,
                "expense": 0.0 if t.is_income else amount,
            })

        totals = pd.DataFrame(rows, columns=["month", "income", "expense"])
        totals = totals.groupby("month", as_index=False)[["income", "expense"]].sum()

        frame = frame.merge(totals, on="month", how="left")
        frame[["income", "expense"]] = frame[["income", "expense"]].fillna(0.0).astype(float)
        frame["net"] = frame["income"] - frame["expense"]
        return frame


def _month_key(value: DateInput) -> str:
    instant = to_utc(value)
    return f"{instant.year:04d}-{instant.month:02d}"
