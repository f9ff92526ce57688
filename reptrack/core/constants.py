"""
Core constants and enumerations for REPTrack.

This module defines the currency set, default exchange rates, record
enumerations and calculation parameters used throughout the portfolio engine.
"""

from enum import Enum


class ECurrency(str, Enum):
    """
    Supported currencies.

    NIS is the synthetic BASE unit every stored rate is expressed in.
    """
    NIS = "NIS"
    USD = "USD"
    EUR = "EUR"


BASE_CURRENCY = ECurrency.NIS

# 1 unit of currency = X units of BASE
DEFAULT_RATES = {
    ECurrency.NIS: 1.0,
    ECurrency.USD: 3.75,
    ECurrency.EUR: 4.05,
}

SYMBOLS = {
    ECurrency.NIS: "₪",
    ECurrency.USD: "$",
    ECurrency.EUR: "€",
}

# Real-world ISO 4217 codes, used for formatting and provider queries
ISO_CODES = {
    ECurrency.NIS: "ILS",
    ECurrency.USD: "USD",
    ECurrency.EUR: "EUR",
}

# Currency assumed for a transaction whose owning property cannot be found
FALLBACK_TRANSACTION_CURRENCY = ECurrency.USD


class ETransactionType(str, Enum):
    """Cash transaction direction"""
    INCOME = "income"
    EXPENSE = "expense"


class EPropertyType(str, Enum):
    """Property classes"""
    RESIDENTIAL = "Residential"
    COMMERCIAL = "Commercial"
    LOGISTICS = "Logistics"
    SHOP = "Shop"


# Debt service sits below the NOI line
MORTGAGE_CATEGORY = "Mortgage"

MONTHS_PER_YEAR = 12
PERCENTAGE_TO_DECIMAL = 100.0

# Exchange-rate settings
RATE_DECIMALS = 4
PIVOT_CURRENCY = "USD"
SETTINGS_KEY_RATES = "exchange_rates"
SETTINGS_KEY_API_KEY = "currency_api_key"

# Dashboard defaults
LEASE_ALERT_THRESHOLD_DAYS = 60
CASH_FLOW_WINDOW_DAYS = 30
PERFORMANCE_MONTHS = 6
