"""
Utility modules for REPTrack.

This package contains reusable utility functions for date handling and
error handling throughout the application.
"""

from reptrack.utils.date_utils import (
    to_utc,
    utc_now,
    days_until,
    in_window,
    trailing_window,
    month_starts,
)

from reptrack.utils.error_utils import (
    PortfolioTrackerError,
    LiveRateFetchExhaustedError,
    OwnershipValidationError,
    RecordNotFoundError,
    error_handler,
    logger,
)

__all__ = [
    # Date utilities
    "to_utc",
    "utc_now",
    "days_until",
    "in_window",
    "trailing_window",
    "month_starts",
    # Error handling
    "PortfolioTrackerError",
    "LiveRateFetchExhaustedError",
    "OwnershipValidationError",
    "RecordNotFoundError",
    "error_handler",
    "logger",
]
