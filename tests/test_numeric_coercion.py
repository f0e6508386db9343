import math
from decimal import Decimal

import pytest

from phresh.numeric import is_finite_number, js_number_str, round_half_up, to_number


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, 0),
        (True, 1),
        (False, 0),
        (42, 42),
        (12.5, 12.5),
        (float("nan"), 0),
        (Decimal("7.25"), 7.25),
        (Decimal("NaN"), 0),
        ("  15 ", 15),
        ("", 0),
        ("   ", 0),
        ("1e3", 1000),
        (".5", 0.5),
        ("0x1A", 26),
        ("0b101", 5),
        ("Infinity", math.inf),
        ("-Infinity", -math.inf),
        ("inf", 0),
        ("nan", 0),
        ("1_000", 0),
        ("12abc", 0),
        ([], 0),
        ({"price": 1}, 0),
    ],
)
def test_to_number_matches_storefront_coercion(value, expected):
    assert to_number(value) == expected


def test_negative_zero_collapses_to_zero():
    assert math.copysign(1, to_number(-0.0)) == 1


@pytest.mark.parametrize(
    "value, expected",
    [
        (5, True),
        (5.5, True),
        (Decimal("3"), True),
        (float("inf"), False),
        (float("nan"), False),
        (Decimal("Infinity"), False),
        ("5", False),
        (True, False),
        (None, False),
    ],
)
def test_is_finite_number(value, expected):
    assert is_finite_number(value) is expected


@pytest.mark.parametrize(
    "value, expected",
    [(0.5, 1), (1.5, 2), (2.5, 3), (2.4999, 2), (849.99, 850), (-2.5, -3), (7, 7)],
)
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [(10, "10"), (10.0, "10"), (12.5, "12.5"), (0.1 + 0.2, "0.30000000000000004"), (math.inf, "Infinity")],
)
def test_js_number_str(value, expected):
    assert js_number_str(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (10**400, math.inf),
        (-(10**400), -math.inf),
        (2**53 - 1, 2**53 - 1),
        (2**60, float(2**60)),
        ("0x" + "f" * 400, math.inf),
    ],
)
def test_oversized_integers_become_doubles(value, expected):
    assert to_number(value) == expected


def test_oversized_integer_is_not_finite():
    assert is_finite_number(10**400) is False
    assert is_finite_number(2**60) is True


@pytest.mark.parametrize("value", ["١٠٠", "٣", "１２"])
def test_non_ascii_digits_are_not_numbers(value):
    assert to_number(value) == 0


@pytest.mark.parametrize("value, expected", [(1e30, 10**30), (2.0**52 + 1, 2**52 + 1), (1e300, int(1e300))])
def test_round_half_up_large_doubles(value, expected):
    assert round_half_up(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (1e-7, "1e-7"),
        (1.5e-7, "1.5e-7"),
        (0.00001, "0.00001"),
        (1.5e-6, "0.0000015"),
        (1e21, "1e+21"),
        (1.5e300, "1.5e+300"),
        (1e16, "10000000000000000"),
    ],
)
def test_js_number_str_exponents(value, expected):
    assert js_number_str(value) == expected
