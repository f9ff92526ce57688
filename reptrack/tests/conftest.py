"""
Shared fixtures for the REPTrack test suite.
"""

from datetime import datetime, timezone

import pytest

from reptrack.core.fx import CurrencyConverter, ExchangeRateStore, InMemorySettingsBackend
from reptrack.core.models import Property, Transaction


AS_OF = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def as_of():
    return AS_OF


@pytest.fixture
def store():
    """Rate store with the default table and nothing persisted."""
    return ExchangeRateStore(InMemorySettingsBackend())


@pytest.fixture
def converter(store):
    return CurrencyConverter(store)


def make_property(**overrides) -> Property:
    """Build a NIS property with sensible defaults."""
    data = {
        "id": "p1",
        "address": "1 Test St",
        "country": "Israel",
        "currency": "NIS",
        "market_value": 200000,
    }
    data.update(overrides)
    return Property.model_validate(data)


def make_transaction(**overrides) -> Transaction:
    data = {
        "id": "t1",
        "property_id": "p1",
        "date": AS_OF,
        "amount": 100,
        "type": "income",
        "category": "Rent",
    }
    data.update(overrides)
    return Transaction.model_validate(data)
