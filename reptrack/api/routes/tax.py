"""
Tax report API endpoint.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from reptrack.api.dependencies import get_app_config, get_repository, get_tax_estimator
from reptrack.api.schemas import TaxReportResponse
from reptrack.config import AppConfig
from reptrack.core.constants import ECurrency
from reptrack.core.engine import TaxEstimator
from reptrack.db.repositories import PortfolioRepository


router = APIRouter()


@router.get("/report", response_model=TaxReportResponse)
def get_tax_report(
    currency: Optional[ECurrency] = None,
    repo: PortfolioRepository = Depends(get_repository),
    estimator: TaxEstimator = Depends(get_tax_estimator),
    config: AppConfig = Depends(get_app_config),
):
    currency = currency or config.display_currency
    properties = repo.list_properties()
    transactions = repo.list_transactions()

    report = estimator.tax_report(properties, transactions, currency)
    return TaxReportResponse(
        currency=currency,
        total_estimated_tax=float(report["estimated_tax"].sum()),
        income_by_country=estimator.income_by_country(properties, transactions, currency),
        properties=report.to_dict(orient="records"),
    )
