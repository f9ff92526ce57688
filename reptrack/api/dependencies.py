"""
FastAPI dependencies for REPTrack.

The process-wide rate store and fetcher are built once and shared by every
request; converters and engines are cheap views over the store. The data
source (demo data or database) comes from ``AppConfig``. Tests replace any
of these through ``app.dependency_overrides``.
"""

import logging
from datetime import datetime
from functools import lru_cache

from fastapi import Depends

from reptrack.config import AppConfig, get_config
from reptrack.core.engine import IncomeAggregator, TaxEstimator, ValuationEngine
from reptrack.core.fx import CurrencyConverter, ExchangeRateStore, InMemorySettingsBackend, RateFetcher
from reptrack.db.connection import get_db_manager
from reptrack.db.repositories import (
    InMemoryPortfolioRepository,
    PortfolioRepository,
    SqlPortfolioRepository,
    SqlSettingsBackend,
)
from reptrack.utils.date_utils import utc_now

logger = logging.getLogger(__name__)


@lru_cache()
def get_app_config() -> AppConfig:
    return get_config()


@lru_cache()
def get_rate_store() -> ExchangeRateStore:
    config = get_app_config()
    if config.uses_database:
        backend = SqlSettingsBackend(get_db_manager().session_factory)
    else:
        backend = InMemorySettingsBackend()
    return ExchangeRateStore(backend)


def get_converter(store: ExchangeRateStore = Depends(get_rate_store)) -> CurrencyConverter:
    return CurrencyConverter(store)


@lru_cache()
def get_rate_fetcher() -> RateFetcher:
    # One fetcher per process so concurrent refreshes share its lock
    config = get_app_config()
    return RateFetcher(
        get_rate_store(),
        primary_url=config.fx_primary_url,
        fallback_url=config.fx_fallback_url,
        timeout=config.fx_request_timeout,
    )


@lru_cache()
def _demo_repository() -> InMemoryPortfolioRepository:
    logger.info("Using in-memory demo portfolio")
    return InMemoryPortfolioRepository.with_demo_data()


def get_repository(config: AppConfig = Depends(get_app_config)) -> PortfolioRepository:
    if config.uses_database:
        return SqlPortfolioRepository(get_db_manager().session_factory)
    return _demo_repository()


def get_valuation_engine(converter: CurrencyConverter = Depends(get_converter)) -> ValuationEngine:
    return ValuationEngine(converter, IncomeAggregator(converter))


def get_tax_estimator(converter: CurrencyConverter = Depends(get_converter)) -> TaxEstimator:
    return TaxEstimator(converter)


def get_as_of() -> datetime:
    """The instant every time-windowed figure is computed against."""
    return utc_now()
