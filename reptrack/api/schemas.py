"""
Pydantic schemas for API request/response validation.

Responses are flat views over the engine results; every monetary figure is
already expressed in the ``currency`` the response names.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from reptrack.core.constants import ECurrency, EPropertyType


# ======================
# Base Schemas
# ======================


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        from_attributes=True,
        use_enum_values=True,
    )


# ======================
# Exchange Rates
# ======================


class RatesResponse(BaseSchema):
    base: ECurrency
    rates: Dict[str, float]
    symbols: Dict[str, str]


class RateUpdate(BaseSchema):
    rate: float = Field(..., gt=0, description="Units of BASE per 1 unit of the currency")


class RateRefreshResponse(RatesResponse):
    source: str


class ConversionResponse(BaseSchema):
    amount: float
    from_currency: ECurrency
    to_currency: ECurrency
    converted: float
    formatted: str


# ======================
# Portfolio
# ======================


class PortfolioSummaryResponse(BaseSchema):
    currency: ECurrency
    property_count: int
    total_market_value: float
    total_equity: float
    my_equity: float
    monthly_cash_flow: float
    region_allocation: Dict[str, float]
    formatted_my_equity: str
    formatted_monthly_cash_flow: str


class PropertyValuationResponse(BaseSchema):
    id: str
    address: str
    country: str
    type: EPropertyType
    currency: ECurrency
    holding_company: Optional[str] = None
    is_split: bool
    market_value: float
    equity: float
    my_share: float
    my_market_value: float
    my_equity: float
    cap_rate: str
    projected_annual_rent: float
    fx_gain: float


class PerformancePoint(BaseSchema):
    month: str
    income: float
    expense: float
    net: float


class PerformanceResponse(BaseSchema):
    currency: ECurrency
    months: List[PerformancePoint]


# ======================
# Tax
# ======================


class TaxBreakdownResponse(BaseSchema):
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


class TaxReportResponse(BaseSchema):
    currency: ECurrency
    total_estimated_tax: float
    income_by_country: Dict[str, float]
    properties: List[TaxBreakdownResponse]


# ======================
# Leases
# ======================


class ExpiringLeaseResponse(BaseSchema):
    property_id: str
    address: str
    unit_name: Optional[str] = None
    tenant_name: str
    expiry_date: datetime
    days_remaining: int
    monthly_rent: float
    currency: ECurrency
