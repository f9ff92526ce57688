"""
Valuation engine for REPTrack.

Per-property and portfolio-level equity, cap rate (ROI) and country
allocation, all expressed in a caller-chosen display currency.

Classes:
    ValuationEngine: Equity, cap-rate and allocation calculations
    PortfolioSummary: Dashboard figures bundled together
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from reptrack.core.constants import (
    BASE_CURRENCY,
    CASH_FLOW_WINDOW_DAYS,
    ECurrency,
    EPropertyType,
    PERCENTAGE_TO_DECIMAL,
)
from reptrack.core.engine.income import IncomeAggregator, projected_annual_rent
from reptrack.core.engine.ownership import resolve_my_share
from reptrack.core.fx.converter import CurrencyConverter
from reptrack.core.models import Company, Property, Transaction
from reptrack.utils.date_utils import DateInput
from reptrack.utils.error_utils import error_handler


@dataclass
class PortfolioSummary:
    """Headline numbers for the dashboard, all in ``currency``."""

    currency: ECurrency
    property_count: int
    total_market_value: float
    total_equity: float
    my_equity: float
    monthly_cash_flow: float
    region_allocation: Dict[str, float] = field(default_factory=dict)


class ValuationEngine:
    """
    Equity and yield calculations over property snapshots.

    Attributes:
        converter: Converter used to express every figure in the display currency
        income: Aggregator supplying rent projections and cash-flow sums
    """

    def __init__(self, converter: CurrencyConverter, income: Optional[IncomeAggregator] = None):
        self.converter = converter
        self.income = income or IncomeAggregator(converter)

    def _to_display(self, amount: float, property: Property, display_currency: ECurrency) -> float:
        return self.converter.convert(amount, property.currency, display_currency)

    def equity(self, property: Property, display_currency: ECurrency) -> float:
        """Market value minus outstanding loan, in ``display_currency``."""
        market_value = self._to_display(property.market_value, property, display_currency)
        loan_balance = self._to_display(property.loan_balance or 0, property, display_currency)
        return market_value - loan_balance

    def my_equity(
        self,
        property: Property,
        companies: Iterable[Company],
        display_currency: ECurrency,
        acting_partner_id: Optional[str] = None,
    ) -> float:
        """The user's share of ``equity``."""
        share = resolve_my_share(property, companies, acting_partner_id)
        return self.equity(property, display_currency) * share / PERCENTAGE_TO_DECIMAL

    @error_handler
    def portfolio_equity(
        self,
        properties: Iterable[Property],
        companies: Iterable[Company],
        display_currency: ECurrency,
        acting_partner_id: Optional[str] = None,
    ) -> float:
        companies = list(companies)
        return sum(
            self.my_equity(p, companies, display_currency, acting_partner_id) for p in properties
        )

    def my_market_value(
        self,
        property: Property,
        companies: Iterable[Company],
        display_currency: ECurrency,
        acting_partner_id: Optional[str] = None,
    ) -> float:
        """The user's share of the market value (before debt)."""
        share = resolve_my_share(property, companies, acting_partner_id)
        return self._to_display(property.market_value, property, display_currency) * share / PERCENTAGE_TO_DECIMAL

    def cap_rate_pct(
        self,
        property: Property,
        transactions: Iterable[Transaction],
        display_currency: ECurrency = BASE_CURRENCY,
    ) -> float:
        """
        Unclamped cap rate, as a percentage.

        Income is the projected rent from leases, or, when no lease produces
        rent, the sum of the property's income transactions taken as the annual
        figure. Operating expenses exclude mortgage payments. A property with
        no market value has a cap rate of 0.
        """
        if property.market_value == 0:
            return 0.0

        own = [t for t in transactions if t.property_id == property.id]

        annual_income = projected_annual_rent(property)
        if annual_income == 0:
            annual_income = sum(t.amount for t in own if t.is_income)
        annual_expense = sum(t.amount for t in own if t.is_operating_expense)

        noi = self._to_display(annual_income - annual_expense, property, display_currency)
        market_value = self._to_display(property.market_value, property, display_currency)
        return noi / market_value * PERCENTAGE_TO_DECIMAL

    def cap_rate(
        self,
        property: Property,
        transactions: Iterable[Transaction],
        display_currency: ECurrency = BASE_CURRENCY,
    ) -> str:
        """
        Cap rate for display: floored at 0 and shown with one decimal.

        Examples:
            NOI 12,000 on a 200,000 property -> "6.0"
            NOI -500 on a 200,000 property   -> "0.0"
        """
        return f"{max(0.0, self.cap_rate_pct(property, transactions, display_currency)):.1f}"

    @error_handler
    def region_allocation(self, properties: Iterable[Property], display_currency: ECurrency) -> Dict[str, float]:
        """Total market value per country, in ``display_currency``."""
        allocation: Dict[str, float] = {}
        for p in properties:
            value = self._to_display(p.market_value, p, display_currency)
            allocation[p.country] = allocation.get(p.country, 0.0) + value
        return allocation

    def fx_gain(self, property: Property, display_currency: ECurrency) -> float:
        """
        Gain measured in BASE, expressed in ``display_currency``.

        Compares today's market value in BASE with the cost basis in BASE, so a
        property whose own-currency value is flat still gains when its currency
        strengthens against BASE. Without a recorded cost basis the purchase
        price is converted at today's rate.
        """
        current_base = self.converter.convert(property.market_value, property.currency, BASE_CURRENCY)
        if property.purchase_price_base is not None:
            cost_basis = property.purchase_price_base
        else:
            cost_basis = self.converter.convert(property.purchase_price, property.currency, BASE_CURRENCY)
        return self.converter.convert(current_base - cost_basis, BASE_CURRENCY, display_currency)

    @staticmethod
    def filter_by_type(properties: Iterable[Property], property_type: Optional[EPropertyType] = None) -> List[Property]:
        if property_type is None:
            return list(properties)
        property_type = EPropertyType(property_type)
        return [p for p in properties if p.type == property_type]

    @error_handler
    def portfolio_summary(
        self,
        properties: Sequence[Property],
        transactions: Sequence[Transaction],
        companies: Sequence[Company],
        display_currency: ECurrency,
        as_of: DateInput,
        cash_flow_days: int = CASH_FLOW_WINDOW_DAYS,
    ) -> PortfolioSummary:
        allocation = self.region_allocation(properties, display_currency)
        return PortfolioSummary(
            currency=ECurrency(display_currency),
            property_count=len(properties),
            total_market_value=sum(allocation.values()),
            total_equity=sum(self.equity(p, display_currency) for p in properties),
            my_equity=self.portfolio_equity(properties, companies, display_currency),
            monthly_cash_flow=self.income.trailing_cash_flow(
                transactions, properties, as_of, display_currency, cash_flow_days
            ),
            region_allocation=allocation,
        )
