"""
Calculation engines for REPTrack.

Pure functions and stateless classes over property, transaction and company
snapshots. None of them mutate their inputs.
"""

from reptrack.core.engine.ownership import find_my_partner, resolve_my_share, validate_ownership
from reptrack.core.engine.income import IncomeAggregator, projected_annual_rent
from reptrack.core.engine.valuation import PortfolioSummary, ValuationEngine
from reptrack.core.engine.tax import TaxBreakdown, TaxEstimator
from reptrack.core.engine.lease_monitor import ExpiringLease, expiring_leases

__all__ = [
    "find_my_partner",
    "resolve_my_share",
    "validate_ownership",
    "IncomeAggregator",
    "projected_annual_rent",
    "PortfolioSummary",
    "ValuationEngine",
    "TaxBreakdown",
    "TaxEstimator",
    "ExpiringLease",
    "expiring_leases",
]
