"""
API integration tests against the in-memory demo portfolio.

Dependencies are overridden so every request sees the same fixed instant, a
fresh rate table and a rate fetcher wired to fake providers.

Run: python -m pytest reptrack/tests/test_api.py -v
"""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from reptrack.api.dependencies import get_as_of, get_rate_fetcher, get_rate_store, get_repository
from reptrack.api.main import app
from reptrack.core.fx import ExchangeRateStore, InMemorySettingsBackend, RateFetcher
from reptrack.db.demo_data import demo_portfolio
from reptrack.db.repositories import InMemoryPortfolioRepository

from test_rate_fetcher import FakeResponse, FakeSession

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)
FALLBACK = "https://fallback.test/latest"

client = TestClient(app)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def rate_store():
    return ExchangeRateStore(InMemorySettingsBackend())


@pytest.fixture
def provider_responses():
    """Mutable url -> response table read by the fake rate providers."""
    return {FALLBACK: FakeResponse(payload={"rates": {"ILS": 4.5, "EUR": 0.9}})}


@pytest.fixture(autouse=True)
def overrides(rate_store, provider_responses):
    repo = InMemoryPortfolioRepository(*demo_portfolio(NOW))
    fetcher = RateFetcher(
        rate_store,
        session=FakeSession(provider_responses),
        primary_url="https://primary.test/rates",
        fallback_url=FALLBACK,
    )

    app.dependency_overrides[get_repository] = lambda: repo
    app.dependency_overrides[get_as_of] = lambda: NOW
    app.dependency_overrides[get_rate_store] = lambda: rate_store
    app.dependency_overrides[get_rate_fetcher] = lambda: fetcher
    yield
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_database_health_skipped_for_demo_data():
    assert client.get("/health/db").json()["status"] == "skipped"


def test_root():
    body = client.get("/").json()
    assert body["docs"] == "/api/docs"


# ---------------------------------------------------------------------------
# Exchange rates
# ---------------------------------------------------------------------------


def test_get_rates():
    body = client.get("/api/rates").json()

    assert body["base"] == "NIS"
    assert body["rates"] == {"NIS": 1.0, "USD": 3.75, "EUR": 4.05}
    assert body["symbols"]["EUR"] == "€"


def test_set_and_reset_rate():
    response = client.put("/api/rates/USD", json={"rate": 3.6})
    assert response.status_code == 200
    assert response.json()["rates"]["USD"] == 3.6

    body = client.post("/api/rates/reset").json()
    assert body["rates"]["USD"] == 3.75


def test_base_rate_is_not_overridden():
    body = client.put("/api/rates/NIS", json={"rate": 2}).json()
    assert body["rates"]["NIS"] == 1.0


@pytest.mark.parametrize("path, payload", [
    ("/api/rates/USD", {"rate": 0}),
    ("/api/rates/USD", {"rate": -3}),
    ("/api/rates/GBP", {"rate": 4.7}),
])
def test_invalid_rate_updates_rejected(path, payload):
    assert client.put(path, json=payload).status_code == 422


def test_convert():
    response = client.get("/api/rates/convert", params={"amount": 100, "from_currency": "USD", "to_currency": "NIS"})

    assert response.status_code == 200
    body = response.json()
    assert body["converted"] == pytest.approx(375)
    assert body["formatted"] == "₪375"


def test_refresh_uses_fallback_provider(rate_store):
    response = client.post("/api/rates/refresh")

    assert response.status_code == 200
    body = response.json()
    assert body["source"] == "fallback"
    assert body["rates"] == {"NIS": 1.0, "USD": 4.5, "EUR": 5.0}
    assert rate_store.get_rate("EUR") == 5.0


def test_refresh_failure_is_bad_gateway(rate_store, provider_responses):
    provider_responses[FALLBACK] = FakeResponse(503)

    response = client.post("/api/rates/refresh")

    assert response.status_code == 502
    assert response.json()["type"] == "LiveRateFetchExhaustedError"
    assert rate_store.get_rate("USD") == 3.75


# ---------------------------------------------------------------------------
# Portfolio
# ---------------------------------------------------------------------------


def test_portfolio_summary():
    body = client.get("/api/portfolio/summary", params={"currency": "NIS"}).json()

    assert body["property_count"] == 3
    assert body["total_market_value"] == pytest.approx(1200000 + 850500 + 1950000)
    # 50% of p1, all of p2, 60% of p3 through the holding company
    assert body["my_equity"] == pytest.approx(225000 + 283500 + 450000)
    assert body["monthly_cash_flow"] == pytest.approx(7500 - 562.5 + 5670 + 9000 - 3500)
    assert body["formatted_my_equity"] == "₪958,500"
    assert body["region_allocation"]["UK"] == pytest.approx(850500)


def test_summary_defaults_to_configured_currency():
    assert client.get("/api/portfolio/summary").json()["currency"] == "NIS"


def test_unknown_currency_rejected():
    assert client.get("/api/portfolio/summary", params={"currency": "GBP"}).status_code == 422


def test_property_valuations():
    body = client.get("/api/portfolio/properties", params={"currency": "USD"}).json()
    by_id = {p["id"]: p for p in body}

    assert set(by_id) == {"p1", "p2", "p3"}
    assert by_id["p1"]["my_share"] == 50
    assert by_id["p1"]["equity"] == pytest.approx(120000)
    assert by_id["p1"]["cap_rate"] == "7.5"
    assert by_id["p3"]["my_share"] == 60
    assert by_id["p3"]["is_split"] is True


def test_property_type_filter():
    body = client.get("/api/portfolio/properties", params={"property_type": "Shop"}).json()
    assert [p["id"] for p in body] == ["p2"]


def test_performance_series():
    body = client.get("/api/portfolio/performance", params={"currency": "NIS", "months": 3}).json()

    assert [m["month"] for m in body["months"]] == ["2024-04", "2024-05", "2024-06"]
    assert body["months"][-1]["income"] == pytest.approx(7500 + 5670 + 9000)


# ---------------------------------------------------------------------------
# Tax and leases
# ---------------------------------------------------------------------------


def test_tax_report():
    body = client.get("/api/tax/report", params={"currency": "NIS"}).json()

    assert [row["property_id"] for row in body["properties"]] == ["p1", "p2", "p3"]
    assert body["income_by_country"] == pytest.approx({"USA": 15000, "UK": 5670, "Israel": 9000})
    # Deductions outweigh income for every demo property
    assert body["total_estimated_tax"] == 0


def test_expiring_leases():
    body = client.get("/api/leases/expiring").json()

    assert [(lease["property_id"], lease["days_remaining"]) for lease in body] == [("p3", 30), ("p1", 45)]
    assert body[0]["unit_name"] == "Floor 1"


def test_expiring_leases_custom_threshold():
    body = client.get("/api/leases/expiring", params={"threshold_days": 365}).json()
    assert len(body) == 3
