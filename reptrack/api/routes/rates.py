"""
Exchange-rate API endpoints.

Read and override the rate table, refresh it from the live providers, and
convert single amounts.
"""

from fastapi import APIRouter, Depends

from reptrack.api.dependencies import get_app_config, get_converter, get_rate_fetcher, get_rate_store
from reptrack.api.schemas import ConversionResponse, RatesResponse, RateRefreshResponse, RateUpdate
from reptrack.config import AppConfig
from reptrack.core.constants import BASE_CURRENCY, ECurrency, SYMBOLS
from reptrack.core.fx import CurrencyConverter, ExchangeRateStore, RateFetcher


router = APIRouter()


def _rates_payload(store: ExchangeRateStore) -> dict:
    rates = store.get_rates()
    return {
        "base": BASE_CURRENCY,
        "rates": {currency.value: rate for currency, rate in rates.items()},
        "symbols": {currency.value: SYMBOLS[currency] for currency in rates},
    }


@router.get("", response_model=RatesResponse)
def get_rates(store: ExchangeRateStore = Depends(get_rate_store)):
    return _rates_payload(store)


@router.get("/convert", response_model=ConversionResponse)
def convert_amount(
    amount: float,
    from_currency: ECurrency,
    to_currency: ECurrency,
    converter: CurrencyConverter = Depends(get_converter),
):
    converted = converter.convert(amount, from_currency, to_currency)
    return ConversionResponse(
        amount=amount,
        from_currency=from_currency,
        to_currency=to_currency,
        converted=converted,
        formatted=converter.format(converted, to_currency),
    )


@router.put("/{currency}", response_model=RatesResponse)
def set_rate(
    currency: ECurrency,
    update: RateUpdate,
    store: ExchangeRateStore = Depends(get_rate_store),
):
    """Override one rate. BASE is fixed at 1 and is left unchanged."""
    store.set_rate(currency, update.rate)
    return _rates_payload(store)


@router.post("/reset", response_model=RatesResponse)
def reset_rates(store: ExchangeRateStore = Depends(get_rate_store)):
    store.reset_rates()
    return _rates_payload(store)


@router.post("/refresh", response_model=RateRefreshResponse)
def refresh_rates(
    store: ExchangeRateStore = Depends(get_rate_store),
    fetcher: RateFetcher = Depends(get_rate_fetcher),
    config: AppConfig = Depends(get_app_config),
):
    """Pull live rates; answers 502 when every provider fails and keeps the old table."""
    api_key = config.currency_api_key or store.get_api_key()
    fetcher.fetch_live_rates(api_key)
    return {**_rates_payload(store), "source": fetcher.last_source}
