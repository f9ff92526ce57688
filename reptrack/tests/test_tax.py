"""
Tests for the per-property tax estimate and portfolio tax reporting.
"""

import pytest

from conftest import make_property, make_transaction
from reptrack.core.engine import TaxEstimator


@pytest.fixture
def estimator(converter):
    return TaxEstimator(converter)


@pytest.fixture
def rental():
    return make_property(
        id="p1",
        country="Israel",
        market_value=100000,
        property_tax_rate=1,
        loan_balance=0,
        income_tax_rate=25,
    )


@pytest.fixture
def rental_transactions():
    return [
        make_transaction(id="r1", amount=6000),
        make_transaction(id="r2", amount=4000),
        make_transaction(id="e1", amount=2000, type="expense", category="Maintenance"),
        make_transaction(id="m1", amount=3000, type="expense", category="Mortgage"),
    ]


def test_estimated_tax_scenario(estimator, rental, rental_transactions):
    breakdown = estimator.breakdown(rental, rental_transactions, "NIS")

    assert breakdown.income == 10000
    assert breakdown.operating_expenses == 2000
    assert breakdown.gross_noi == 8000
    assert breakdown.property_tax == pytest.approx(1000)
    assert breakdown.mortgage_interest == 0
    assert breakdown.taxable_income == pytest.approx(7000)
    assert breakdown.estimated_tax == pytest.approx(1750)


def test_mortgage_interest_is_deducted(estimator, rental, rental_transactions):
    leveraged = rental.model_copy(update={"loan_balance": 50000, "mortgage_interest_rate": 4})
    assert estimator.estimated_tax(leveraged, rental_transactions, "NIS") == pytest.approx(5000 * 0.25)


def test_taxable_income_never_negative(estimator, rental):
    transactions = [make_transaction(amount=500)]
    breakdown = estimator.breakdown(rental, transactions, "NIS")
    assert breakdown.taxable_income == 0
    assert breakdown.estimated_tax == 0


def test_figures_converted_to_display_currency(estimator, rental, rental_transactions):
    usd_rental = rental.model_copy(update={"currency": "USD"})
    assert estimator.estimated_tax(usd_rental, rental_transactions, "NIS") == pytest.approx(1750 * 3.75)


def test_portfolio_tax_and_income_by_country(estimator, rental, rental_transactions):
    uk = make_property(id="p2", country="UK", currency="EUR", market_value=0, income_tax_rate=40)
    transactions = rental_transactions + [make_transaction(id="u1", property_id="p2", amount=1000)]

    assert estimator.portfolio_tax([rental, uk], transactions, "NIS") == pytest.approx(1750 + 4050 * 0.4)
    assert estimator.income_by_country([rental, uk], transactions, "NIS") == pytest.approx(
        {"Israel": 10000, "UK": 4050}
    )


def test_tax_report_frame(estimator, rental, rental_transactions):
    frame = estimator.tax_report([rental], rental_transactions, "NIS")

    assert list(frame["property_id"]) == ["p1"]
    assert frame.loc[0, "estimated_tax"] == pytest.approx(1750)
    assert "mortgage_interest" in frame.columns


def test_tax_report_empty_portfolio(estimator):
    frame = estimator.tax_report([], [], "NIS")
    assert frame.empty
    assert "estimated_tax" in frame.columns
