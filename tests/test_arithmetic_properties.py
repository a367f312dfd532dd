"""Hypothesis property-based tests for the arithmetic module."""

from fractions import Fraction
import math
import os
import sys

from hypothesis import assume, given, strategies as st

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from calc_core.arithmetic import add, divide, multiply, subtract


ints = st.integers(min_value=-(2 ** 63), max_value=2 ** 63 - 1)


@given(ints, ints)
def test_add_is_commutative(a: int, b: int) -> None:
    assert add(a, b) == add(b, a)


@given(ints)
def test_subtract_self_is_zero(a: int) -> None:
    assert subtract(a, a) == 0


@given(ints, ints)
def test_multiply_is_commutative(a: int, b: int) -> None:
    assert multiply(a, b) == multiply(b, a)


@given(ints)
def test_multiply_by_zero(a: int) -> None:
    assert multiply(a, 0) == 0


@given(ints, ints)
def test_divide_truncates_toward_zero(a: int, b: int) -> None:
    assume(b != 0)
    assert divide(a, b) == math.trunc(Fraction(a, b))


@given(ints, ints)
def test_divide_remainder_has_dividend_sign(a: int, b: int) -> None:
    assume(b != 0)
    remainder = a - divide(a, b) * b
    assert abs(remainder) < abs(b)
    assert remainder == 0 or (remainder > 0) == (a > 0)


@given(ints)
def test_divide_by_zero_is_sentinel(a: int) -> None:
    assert divide(a, 0) == 0
