"""
Tests for currency conversion and display formatting.
"""

import pytest

from reptrack.core.constants import ECurrency


def test_usd_to_base(converter):
    assert converter.convert(100, "USD", "NIS") == pytest.approx(375)


def test_base_to_eur(converter):
    assert converter.convert(405, "NIS", "EUR") == pytest.approx(100)


def test_cross_rate_goes_through_base(converter):
    # 100 USD = 375 NIS = 92.59 EUR
    assert converter.convert(100, "USD", "EUR") == pytest.approx(375 / 4.05)


def test_same_currency_is_identity(converter):
    assert converter.convert(123.45, ECurrency.EUR, ECurrency.EUR) == 123.45


@pytest.mark.parametrize("source, target", [("USD", "EUR"), ("EUR", "NIS"), ("NIS", "USD")])
def test_round_trip(converter, source, target):
    there = converter.convert(1000, source, target)
    assert converter.convert(there, target, source) == pytest.approx(1000)


def test_conversion_sees_updated_rates(store, converter):
    store.set_rate("USD", 4.0)
    assert converter.convert(10, "USD", "NIS") == pytest.approx(40)


def test_format_rounds_and_groups(converter):
    assert converter.format(1234.56, "USD") == "$1,235"
    assert converter.format(1234567, "EUR") == "€1,234,567"


def test_format_negative_and_zero(converter):
    assert converter.format(-500, "NIS") == "-₪500"
    assert converter.format(-0.3, "NIS") == "-₪0"
    assert converter.format(-0.4, "NIS") == "-₪0"
    assert converter.format(0, "NIS") == "₪0"


@pytest.mark.parametrize(
    "amount, currency, expected",
    [(2.5, "USD", "$3"), (1234.5, "USD", "$1,235"), (0.5, "EUR", "€1"), (-2.5, "USD", "-$3")],
)
def test_format_rounds_halves_away_from_zero(converter, amount, currency, expected):
    assert converter.format(amount, currency) == expected


def test_symbols_and_iso_codes(converter):
    assert converter.get_symbol("NIS") == "₪"
    assert converter.iso_code("NIS") == "ILS"
    assert converter.iso_code(ECurrency.EUR) == "EUR"
