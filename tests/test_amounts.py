from decimal import Decimal

import pytest

from financeflow.amounts import ParsedAmount, normalize_amount, parse_amount


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("$1,234.56", 1234.56),
        ("abc", 0.0),
        (42, 42.0),
        (19.99, 19.99),
        ("-99.00", -99.0),
        ("1 250,00 EUR", 125000.0),
        ("12.5.3", 12.5),
        ("", 0.0),
        (None, 0.0),
    ],
)
def test_normalize_amount(raw, expected) -> None:
    """Numbers pass through, currency strings are cleaned, garbage gives 0."""
    assert normalize_amount(raw) == pytest.approx(expected)


def test_normalize_amount_rejects_non_finite_and_booleans() -> None:
    """NaN, infinity and booleans are not amounts."""
    assert normalize_amount(float("nan")) == 0.0
    assert normalize_amount(float("inf")) == 0.0
    assert normalize_amount(True) == 0.0
    assert parse_amount(10**400) == ParsedAmount(value=0.0, ok=False)
    assert normalize_amount(Decimal("sNaN")) == 0.0


def test_normalize_amount_accepts_decimal() -> None:
    assert normalize_amount(Decimal("1E+3")) == pytest.approx(1000.0)
    assert normalize_amount(Decimal("12.50")) == pytest.approx(12.5)


def test_parse_amount_separates_zero_from_failure() -> None:
    """A parsed zero is ok, an unparseable value is not."""
    assert parse_amount("0.00") == ParsedAmount(value=0.0, ok=True)
    assert parse_amount("n/a") == ParsedAmount(value=0.0, ok=False)
    assert parse_amount("-") == ParsedAmount(value=0.0, ok=False)
    assert parse_amount("$75") == ParsedAmount(value=75.0, ok=True)
