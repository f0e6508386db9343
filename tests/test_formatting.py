import pytest

from phresh.formatting import format_amount_label, format_currency, format_percent_label, group_digits


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, "0"),
        (999, "999"),
        (1000, "1,000"),
        (100000, "1,00,000"),
        (1234567, "12,34,567"),
        (-1234567, "-12,34,567"),
        (1234.5, "1,234.5"),
        (1234.56789, "1,234.568"),
        (1234.0, "1,234"),
    ],
)
def test_indian_grouping(value, expected):
    assert group_digits(value) == expected


@pytest.mark.parametrize("value, expected", [(1234567, "1,234,567"), (100000, "100,000"), (12.25, "12.25")])
def test_western_grouping(value, expected):
    assert group_digits(value, "western") == expected


def test_unknown_grouping_falls_back_to_indian():
    assert group_digits(100000, "roman") == "1,00,000"


def test_non_finite_values():
    assert group_digits(float("inf")) == "∞"
    assert format_amount_label(float("inf")) == "-Rs ∞"


def test_format_currency_rounds_to_whole_units():
    assert format_currency(1499.5) == "Rs 1,500"
    assert format_currency(123456.4, "PKR") == "PKR 1,23,456"


def test_amount_label_never_negative():
    assert format_amount_label(-20) == "-Rs 0"
    assert format_amount_label(1500) == "-Rs 1,500"


def test_percent_label():
    assert format_percent_label(10) == "-10%"
    assert format_percent_label(12.5) == "-12.5%"
