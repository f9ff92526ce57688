"""
Error handling utilities for REPTrack.

This module provides centralized error handling and logging for the portfolio
tracker. It includes the exception hierarchy raised by the valuation engine and
the exchange-rate subsystem, and a decorator for consistent error reporting.
"""

import os
import traceback
import logging
from functools import wraps
import sys
from datetime import datetime

# Configure logging; file handler only when a log path is configured
_handlers = [logging.StreamHandler(sys.stdout)]
if os.getenv("REPTRACK_LOG_FILE"):
    _handlers.append(logging.FileHandler(os.getenv("REPTRACK_LOG_FILE")))

logging.basicConfig(
    level=os.getenv("REPTRACK_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=_handlers,
)

logger = logging.getLogger(__name__)


class PortfolioTrackerError(Exception):
    """Base exception class for portfolio tracker errors"""

    def __init__(self, message, details=None):
        self.message = message
        self.details = details
        self.timestamp = datetime.now()
        super().__init__(self.message)


class LiveRateFetchExhaustedError(PortfolioTrackerError):
    """Raised when every live exchange-rate strategy failed to yield usable rates"""


class OwnershipValidationError(PortfolioTrackerError):
    """Raised when partner percentages on a property are out of range or exceed 100%"""


class RecordNotFoundError(PortfolioTrackerError):
    """Raised when a repository lookup does not find the requested record"""


def error_handler(func):
    """Decorator for handling errors and providing detailed information.

    Domain errors (subclasses of PortfolioTrackerError) propagate unchanged;
    anything else is logged and wrapped in a PortfolioTrackerError.
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except PortfolioTrackerError:
            raise
        except Exception as e:
            exc_type, exc_value, exc_tb = sys.exc_info()
            tb = traceback.extract_tb(exc_tb)

            # Get the most relevant parts of the traceback
            error_location = f"{tb[-1].filename}:{tb[-1].lineno}"
            error_function = tb[-1].name

            error_details = {
                "error_type": exc_type.__name__,
                "location": error_location,
                "function": error_function,
                "arguments": {"args": str(args), "kwargs": str(kwargs)},
                "traceback": traceback.format_exc(),
            }

            logger.error(f"Error in {error_location} - {error_function}: {str(e)}")
            logger.debug(f"Detailed error information: {error_details}")

            raise PortfolioTrackerError(
                f"Error in {error_function} at {error_location}: {str(e)}",
                error_details,
            ) from e

    return wrapper
