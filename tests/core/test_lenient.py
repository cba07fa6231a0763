"""Lenient number parsing — the single coercion used by totals and statistics."""

import math

from quotedesk.core.lenient import is_finite_number, to_number


def test_numbers_pass_through_as_floats():
    assert to_number(3) == 3.0
    assert to_number(2.5) == 2.5


def test_numeric_strings_are_parsed_after_trimming():
    assert to_number(" 15.5 ") == 15.5
    assert to_number("-2") == -2.0


def test_unusable_values_become_zero():
    for value in (None, "", "abc", [], {}, object()):
        assert to_number(value) == 0.0


def test_booleans_are_not_numbers():
    assert to_number(True) == 0.0
    assert is_finite_number(False) is False


def test_non_finite_values_become_zero():
    assert to_number(math.inf) == 0.0
    assert to_number("nan") == 0.0
    assert is_finite_number("inf") is False


def test_is_finite_number_accepts_numeric_strings():
    assert is_finite_number("12.00") is True
    assert is_finite_number(0) is True
    assert is_finite_number("12a") is False
