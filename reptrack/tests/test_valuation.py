"""
Tests for equity, cap rate, country allocation and the dashboard summary.
"""

from datetime import timedelta

import pytest

from conftest import AS_OF, make_property, make_transaction
from reptrack.core.constants import ECurrency, EPropertyType
from reptrack.core.engine import ValuationEngine
from reptrack.core.models import Company

LEASE = {"expiration_date": "2025-01-01", "tenant_name": "Tenant", "monthly_rent": 1000}


@pytest.fixture
def engine(converter):
    return ValuationEngine(converter)


@pytest.fixture
def us_house():
    return make_property(
        id="us",
        country="USA",
        currency="USD",
        market_value=320000,
        purchase_price=250000,
        purchase_price_base=850000,
        loan_balance=200000,
        partners=[
            {"id": "me", "name": "Me", "percentage": 50, "has_access": True},
            {"id": "john", "name": "John", "percentage": 50},
        ],
    )


class TestCapRate:
    def test_negative_noi_is_floored(self, engine):
        p = make_property(market_value=200000)
        transactions = [
            make_transaction(id="in", amount=2000),
            make_transaction(id="out", amount=2500, type="expense", category="Repairs"),
        ]
        assert engine.cap_rate(p, transactions) == "0.0"
        assert engine.cap_rate_pct(p, transactions) == pytest.approx(-0.25)

    def test_lease_rent_drives_cap_rate(self, engine):
        p = make_property(market_value=200000, lease=LEASE)
        assert engine.cap_rate(p, []) == "6.0"

    def test_lease_rent_takes_precedence_over_income_transactions(self, engine):
        p = make_property(market_value=200000, lease=LEASE)
        transactions = [make_transaction(amount=50000)]
        assert engine.cap_rate(p, transactions) == "6.0"

    def test_mortgage_payments_are_not_operating_expenses(self, engine):
        p = make_property(market_value=200000, lease=LEASE)
        transactions = [
            make_transaction(id="m", amount=5000, type="expense", category="Mortgage"),
            make_transaction(id="r", amount=2000, type="expense", category="Repairs"),
        ]
        assert engine.cap_rate(p, transactions) == "5.0"

    def test_other_property_transactions_ignored(self, engine):
        p = make_property(market_value=200000, lease=LEASE)
        transactions = [make_transaction(property_id="elsewhere", amount=9000, type="expense")]
        assert engine.cap_rate(p, transactions) == "6.0"

    def test_zero_market_value(self, engine):
        p = make_property(market_value=0, lease=LEASE)
        assert engine.cap_rate(p, []) == "0.0"

    def test_display_currency_does_not_change_ratio(self, engine):
        p = make_property(currency="USD", market_value=200000, lease=LEASE)
        assert engine.cap_rate(p, [], ECurrency.EUR) == "6.0"


def test_equity_in_display_currency(engine, us_house):
    assert engine.equity(us_house, "NIS") == pytest.approx(120000 * 3.75)
    assert engine.equity(us_house, "USD") == pytest.approx(120000)


def test_my_equity_uses_partner_share(engine, us_house):
    assert engine.my_equity(us_house, [], "USD") == pytest.approx(60000)
    assert engine.my_market_value(us_house, [], "USD") == pytest.approx(160000)


def test_my_equity_through_holding_company(engine):
    p = make_property(market_value=1000000, loan_balance=400000, holding_company="Acme")
    companies = [Company(id="c", name="Acme", user_ownership=60)]
    assert engine.my_equity(p, companies, "NIS") == pytest.approx(360000)


def test_portfolio_equity_sums_my_share(engine, us_house):
    il = make_property(id="il", market_value=500000)
    assert engine.portfolio_equity([us_house, il], [], "NIS") == pytest.approx(60000 * 3.75 + 500000)


def test_region_allocation(engine, us_house):
    properties = [
        us_house,
        make_property(id="il1", market_value=300000),
        make_property(id="il2", market_value=200000),
    ]
    allocation = engine.region_allocation(properties, "NIS")
    assert allocation == pytest.approx({"USA": 1200000, "Israel": 500000})


def test_fx_gain_against_recorded_cost_basis(store, engine):
    p = make_property(currency="USD", market_value=100000, purchase_price=100000, purchase_price_base=350000)
    store.set_rate("USD", 4.5)
    assert engine.fx_gain(p, "NIS") == pytest.approx(100000)


def test_fx_gain_without_cost_basis(engine, us_house):
    p = us_house.model_copy(update={"purchase_price_base": None})
    assert engine.fx_gain(p, "USD") == pytest.approx(70000)


def test_filter_by_type(us_house):
    shop = make_property(id="shop", type="Shop")
    assert ValuationEngine.filter_by_type([us_house, shop], EPropertyType.SHOP) == [shop]
    assert ValuationEngine.filter_by_type([us_house, shop]) == [us_house, shop]


def test_portfolio_summary(engine, us_house):
    il = make_property(id="il", market_value=500000)
    transactions = [
        make_transaction(id="t1", property_id="us", date=AS_OF - timedelta(days=2), amount=2000),
        make_transaction(id="t2", property_id="il", date=AS_OF - timedelta(days=5), amount=150, type="expense"),
        make_transaction(id="t3", property_id="us", date=AS_OF - timedelta(days=45), amount=2000),
    ]

    summary = engine.portfolio_summary([us_house, il], transactions, [], "NIS", AS_OF)

    assert summary.property_count == 2
    assert summary.total_market_value == pytest.approx(1700000)
    assert summary.total_equity == pytest.approx(450000 + 500000)
    assert summary.my_equity == pytest.approx(225000 + 500000)
    assert summary.monthly_cash_flow == pytest.approx(7500 - 150)
    assert summary.region_allocation == pytest.approx({"USA": 1200000, "Israel": 500000})
