"""
Application configuration for REPTrack.

All settings come from environment variables (optionally from a .env file).
"""

import os

from dotenv import load_dotenv

from reptrack.core.constants import ECurrency, LEASE_ALERT_THRESHOLD_DAYS
from reptrack.core.fx.rate_fetcher import DEFAULT_TIMEOUT, FALLBACK_URL, PRIMARY_URL

# Load environment variables from .env file
load_dotenv()

DATA_SOURCE_MOCK = "mock"
DATA_SOURCE_DATABASE = "database"


class AppConfig:
    """Settings read from the environment at construction time."""

    def __init__(self):
        self.data_source = os.getenv("REPTRACK_DATA_SOURCE", DATA_SOURCE_MOCK).lower()
        if self.data_source not in (DATA_SOURCE_MOCK, DATA_SOURCE_DATABASE):
            raise ValueError(
                f"Unknown REPTRACK_DATA_SOURCE '{self.data_source}'. "
                f"Use '{DATA_SOURCE_MOCK}' or '{DATA_SOURCE_DATABASE}'."
            )

        # Live rate providers
        self.currency_api_key = os.getenv("CURRENCY_API_KEY", "")
        self.fx_primary_url = os.getenv("FX_PRIMARY_URL", PRIMARY_URL)
        self.fx_fallback_url = os.getenv("FX_FALLBACK_URL", FALLBACK_URL)
        self.fx_request_timeout = float(os.getenv("FX_REQUEST_TIMEOUT", str(DEFAULT_TIMEOUT)))

        # Display defaults
        self.display_currency = ECurrency(os.getenv("DISPLAY_CURRENCY", ECurrency.NIS.value).upper())
        self.lease_alert_days = int(os.getenv("LEASE_ALERT_DAYS", str(LEASE_ALERT_THRESHOLD_DAYS)))

        _default_origins = "http://localhost:3000,http://localhost:5173"
        self.cors_origins = [o.strip() for o in os.getenv("CORS_ORIGINS", _default_origins).split(",")]

    @property
    def uses_database(self) -> bool:
        return self.data_source == DATA_SOURCE_DATABASE


def get_config() -> AppConfig:
    return AppConfig()
