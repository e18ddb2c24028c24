"""Unit tests for currency amount parsing"""

import pytest
from decimal import Decimal
from broke_gateway.domain.exceptions import InvalidAmountError
from broke_gateway.utils.amounts import parse_amount, require_amount


@pytest.mark.parametrize(
    "text, expected",
    [
        ("12", Decimal("12")),
        ("19.99", Decimal("19.99")),
        ("$1,234.50", Decimal("1234.50")),
        ("  £ 7.25 ", Decimal("7.25")),
        ("-5", Decimal("-5")),
    ],
)
def test_parse_amount(text: str, expected: Decimal):
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "abc", "1.2.3", "$", "-"])
def test_parse_amount_rejects(text: str):
    assert parse_amount(text) is None


def test_require_amount_accepts_numbers():
    assert require_amount(10) == Decimal("10")
    assert require_amount(4.5) == Decimal("4.5")
    assert require_amount(Decimal("3.10")) == Decimal("3.10")
    assert require_amount("$2.00") == Decimal("2.00")


@pytest.mark.parametrize("raw", ["abc", True, None, float("nan")])
def test_require_amount_rejects(raw):
    with pytest.raises(InvalidAmountError):
        require_amount(raw)
