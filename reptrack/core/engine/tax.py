"""
Tax estimation for REPTrack.

Estimated annual income tax per property:

    income          = income transactions
    opex            = expense transactions, mortgage excluded
    gross NOI       = income - opex
    property tax    = market value * property tax rate
    mortgage int.   = loan balance * mortgage interest rate
    taxable income  = max(0, gross NOI - property tax - mortgage interest)
    estimated tax   = taxable income * income tax rate

Every figure is converted to the display currency before it is combined.

Classes:
    TaxBreakdown: All intermediate figures for one property
    TaxEstimator: Per-property and portfolio tax estimates
"""

from dataclasses import dataclass, asdict
from typing import Dict, Iterable, List, Sequence

import pandas as pd

from reptrack.core.constants import ECurrency, PERCENTAGE_TO_DECIMAL
from reptrack.core.fx.converter import CurrencyConverter
from reptrack.core.models import Property, Transaction
from reptrack.utils.error_utils import error_handler


@dataclass
class TaxBreakdown:
    property_id: str
    address: str
    country: str
    income: float
    operating_expenses: float
    gross_noi: float
    property_tax: float
    mortgage_interest: float
    taxable_income: float
    estimated_tax: float

    def to_dict(self) -> Dict:
        return asdict(self)


class TaxEstimator:
    def __init__(self, converter: CurrencyConverter):
        self.converter = converter

    def breakdown(
        self,
        property: Property,
        transactions: Iterable[Transaction],
        display_currency: ECurrency,
    ) -> TaxBreakdown:
        def to_display(amount: float) -> float:
            return self.converter.convert(amount, property.currency, display_currency)

        own = [t for t in transactions if t.property_id == property.id]
        income = sum(to_display(t.amount) for t in own if t.is_income)
        opex = sum(to_display(t.amount) for t in own if t.is_operating_expense)
        gross_noi = income - opex

        property_tax = to_display(property.market_value) * property.property_tax_rate / PERCENTAGE_TO_DECIMAL
        mortgage_interest = (
            to_display(property.loan_balance or 0)
            * (property.mortgage_interest_rate or 0)
            / PERCENTAGE_TO_DECIMAL
        )
        taxable_income = max(0.0, gross_noi - property_tax - mortgage_interest)

        return TaxBreakdown(
            property_id=property.id,
            address=property.address,
            country=property.country,
            income=income,
            operating_expenses=opex,
            gross_noi=gross_noi,
            property_tax=property_tax,
            mortgage_interest=mortgage_interest,
            taxable_income=taxable_income,
            estimated_tax=taxable_income * property.income_tax_rate / PERCENTAGE_TO_DECIMAL,
        )

    def estimated_tax(
        self,
        property: Property,
        transactions: Iterable[Transaction],
        display_currency: ECurrency,
    ) -> float:
        return self.breakdown(property, transactions, display_currency).estimated_tax

    @error_handler
    def portfolio_tax(
        self,
        properties: Iterable[Property],
        transactions: Sequence[Transaction],
        display_currency: ECurrency,
    ) -> float:
        transactions = list(transactions)
        return sum(self.estimated_tax(p, transactions, display_currency) for p in properties)

    @error_handler
    def income_by_country(
        self,
        properties: Iterable[Property],
        transactions: Sequence[Transaction],
        display_currency: ECurrency,
    ) -> Dict[str, float]:
        """Income (before expenses) grouped by the property's country."""
        transactions = list(transactions)
        totals: Dict[str, float] = {}
        for p in properties:
            income = self.breakdown(p, transactions, display_currency).income
            totals[p.country] = totals.get(p.country, 0.0) + income
        return totals

    @error_handler
    def tax_report(
        self,
        properties: Iterable[Property],
        transactions: Sequence[Transaction],
        display_currency: ECurrency,
    ) -> pd.DataFrame:
        """
        One row per property with the full breakdown.

        Returns:
            DataFrame with the TaxBreakdown fields as columns, in property order
        """
        transactions = list(transactions)
        rows: List[Dict] = [
            self.breakdown(p, transactions, display_currency).to_dict() for p in properties
        ]
        columns = list(TaxBreakdown.__dataclass_fields__.keys())
        return pd.DataFrame(rows, columns=columns)
