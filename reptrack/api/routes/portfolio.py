"""
Portfolio API endpoints.

Dashboard headline figures, per-property valuations and the monthly
performance series, all in a caller-chosen currency.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from reptrack.api.dependencies import get_app_config, get_as_of, get_repository, get_valuation_engine
from reptrack.api.schemas import (
    PerformanceResponse,
    PortfolioSummaryResponse,
    PropertyValuationResponse,
)
from reptrack.config import AppConfig
from reptrack.core.constants import ECurrency, EPropertyType, PERFORMANCE_MONTHS
from reptrack.core.engine import ValuationEngine, projected_annual_rent, resolve_my_share
from reptrack.db.repositories import PortfolioRepository


router = APIRouter()


@router.get("/summary", response_model=PortfolioSummaryResponse)
def get_summary(
    currency: Optional[ECurrency] = None,
    repo: PortfolioRepository = Depends(get_repository),
    engine: ValuationEngine = Depends(get_valuation_engine),
    config: AppConfig = Depends(get_app_config),
    as_of: datetime = Depends(get_as_of),
):
    currency = currency or config.display_currency
    summary = engine.portfolio_summary(
        repo.list_properties(),
        repo.list_transactions(),
        repo.list_companies(),
        currency,
        as_of,
    )
    formatter = engine.converter
    return PortfolioSummaryResponse(
        currency=summary.currency,
        property_count=summary.property_count,
        total_market_value=summary.total_market_value,
        total_equity=summary.total_equity,
        my_equity=summary.my_equity,
        monthly_cash_flow=summary.monthly_cash_flow,
        region_allocation=summary.region_allocation,
        formatted_my_equity=formatter.format(summary.my_equity, currency),
        formatted_monthly_cash_flow=formatter.format(summary.monthly_cash_flow, currency),
    )


@router.get("/properties", response_model=List[PropertyValuationResponse])
def list_property_valuations(
    currency: Optional[ECurrency] = None,
    property_type: Optional[EPropertyType] = None,
    repo: PortfolioRepository = Depends(get_repository),
    engine: ValuationEngine = Depends(get_valuation_engine),
    config: AppConfig = Depends(get_app_config),
):
    currency = currency or config.display_currency
    companies = repo.list_companies()
    transactions = repo.list_transactions()

    results = []
    for p in engine.filter_by_type(repo.list_properties(), property_type):
        results.append(PropertyValuationResponse(
            id=p.id,
            address=p.address,
            country=p.country,
            type=p.type,
            currency=p.currency,
            holding_company=p.holding_company,
            is_split=p.is_split,
            market_value=engine.converter.convert(p.market_value, p.currency, currency),
            equity=engine.equity(p, currency),
            my_share=resolve_my_share(p, companies),
            my_market_value=engine.my_market_value(p, companies, currency),
            my_equity=engine.my_equity(p, companies, currency),
            cap_rate=engine.cap_rate(p, transactions, currency),
            projected_annual_rent=engine.converter.convert(projected_annual_rent(p), p.currency, currency),
            fx_gain=engine.fx_gain(p, currency),
        ))
    return results


@router.get("/performance", response_model=PerformanceResponse)
def get_performance(
    currency: Optional[ECurrency] = None,
    months: int = Query(PERFORMANCE_MONTHS, ge=1, le=60),
    repo: PortfolioRepository = Depends(get_repository),
    engine: ValuationEngine = Depends(get_valuation_engine),
    config: AppConfig = Depends(get_app_config),
    as_of: datetime = Depends(get_as_of),
):
    currency = currency or config.display_currency
    frame = engine.income.monthly_performance(
        repo.list_transactions(),
        repo.list_properties(),
        as_of,
        currency,
        months,
    )
    return PerformanceResponse(currency=currency, months=frame.to_dict(orient="records"))
