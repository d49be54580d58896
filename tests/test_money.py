import pytest
from decimal import Decimal

from bucketbook.core.exceptions import InvalidAmountError
from bucketbook.core.money import (
    format_money,
    money_sum,
    parse_amount,
    parse_positive_amount,
    to_money,
    try_parse_money
)

def test_to_money_quantizes_to_cents():
    assert to_money("45.234") == Decimal("45.23")
    assert to_money("0.005") == Decimal("0.01")
    assert to_money(10) == Decimal("10.00")

def test_floats_go_through_str():
    assert to_money(0.1) + to_money(0.2) == Decimal("0.30")

def test_try_parse_rejects_non_numbers():
    assert try_parse_money("abc") is None
    assert try_parse_money("") is None
    assert try_parse_money(None) is None
    assert try_parse_money("NaN") is None
    assert try_parse_money("Infinity") is None
    assert try_parse_money(True) is None

def test_parse_positive_amount():
    assert parse_positive_amount("30") == Decimal("30.00")
    with pytest.raises(InvalidAmountError):
        parse_positive_amount("0")
    with pytest.raises(InvalidAmountError):
        parse_positive_amount("-1")
    with pytest.raises(InvalidAmountError):
        parse_positive_amount("ten")

def test_money_sum_and_format():
    assert money_sum(["1.10", Decimal("2.20"), 3]) == Decimal("6.30")
    assert money_sum([]) == Decimal("0.00")
    assert format_money(Decimal("45.2")) == "45.20"

def test_amounts_beyond_the_column_are_rejected():
    assert try_parse_money("1e30") is None
    assert try_parse_money("100000000") is None
    assert try_parse_money("-100000000") is None
    assert try_parse_money("99999999.99") == Decimal("99999999.99")
    with pytest.raises(InvalidAmountError):
        parse_positive_amount("1e30")
    with pytest.raises(InvalidAmountError):
        parse_amount("-1e30")

def test_stored_totals_are_not_bounded():
    assert to_money("250000000") == Decimal("250000000.00")
