"""
Core modules for REPTrack.

This package contains the record models, constants, the exchange-rate
subsystem and the valuation and tax engines.
"""

from reptrack.core.constants import (
    ECurrency,
    ETransactionType,
    EPropertyType,
    BASE_CURRENCY,
    DEFAULT_RATES,
    MORTGAGE_CATEGORY,
    LEASE_ALERT_THRESHOLD_DAYS,
)

__all__ = [
    "ECurrency",
    "ETransactionType",
    "EPropertyType",
    "BASE_CURRENCY",
    "DEFAULT_RATES",
    "MORTGAGE_CATEGORY",
    "LEASE_ALERT_THRESHOLD_DAYS",
]
