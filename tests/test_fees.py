from decimal import Decimal

import pytest

from vya_settlement.modules.settlement.fees import (
    DEFAULT_PLATFORM_FEE_PERCENT,
    parse_fee_percent,
    traveler_amount,
)


@pytest.mark.parametrize(
    ("price", "fee", "expected"),
    [
        ("50.00", "20", "40.00"),
        ("100.00", "0", "100.00"),
        ("100.00", "100", "0.00"),
        ("33.33", "15", "28.33"),
        ("12.35", "50", "6.18"),
        ("0.01", "50", "0.01"),
    ],
)
def test_traveler_amount_rounds_half_up_to_cents(price, fee, expected):
    assert traveler_amount(Decimal(price), Decimal(fee)) == Decimal(expected)


def test_traveler_amount_has_two_decimal_places():
    amount = traveler_amount(Decimal("99.99"), Decimal("12.5"))
    assert amount.as_tuple().exponent == -2


@pytest.mark.parametrize("raw", [None, "", "   ", "abc", "NaN", "Infinity"])
def test_parse_fee_percent_falls_back_to_default(raw):
    assert parse_fee_percent(raw) == DEFAULT_PLATFORM_FEE_PERCENT


def test_parse_fee_percent_reads_configured_value():
    assert parse_fee_percent("15") == Decimal("15")
    assert parse_fee_percent(" 7.5 ") == Decimal("7.5")
