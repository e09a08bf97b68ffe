"""Decimal and binary text forms of floats, integers and semantics."""

from __future__ import annotations

import dataclasses

from .float import Float
from .semantics import FP32, Category, LossFraction, RoundingMode, Semantics

# log10(2) is approximated by the continued-fraction convergent 59/196.
_LOG10_2_NUM = 59
_LOG10_2_DEN = 196

# Types with a shorter mantissa than this are widened before printing.
_MIN_PRINT_MANTISSA = 16


def decimal_accuracy(value: Float) -> int:
    """Highest number of decimal digits needed to represent ``value``'s type."""
    return 2 + (value.sem.mantissa_len() * _LOG10_2_NUM) // _LOG10_2_DEN


def _widen_for_printing(value: Float) -> Float:
    """Convert ``value`` exactly into a type with a 24-bit significand."""
    sem = value.sem
    if sem.exponent <= FP32.exponent:
        target = FP32
    else:
        target = Semantics(sem.exponent, FP32.precision, sem.mode)
    if not value.is_normal():
        return dataclasses.replace(value, sem=target)
    shift = target.mantissa_len() - sem.mantissa_len()
    widened = Float.from_parts(target, value.sign, value.exp, value.mantissa << shift)
    return widened.normalize(RoundingMode.NEAREST_TIES_TO_EVEN, LossFraction.EXACTLY_ZERO)


def _to_integer(value: Float) -> tuple[int, int]:
    """Return (digits, e) such that the magnitude equals digits * 10**-e."""
    exp = value.exp - value.sem.mantissa_len()
    mantissa = value.mantissa
    if exp < 0:
        # m * 2**exp == m * 5**-exp * 10**exp
        return mantissa * 5 ** (-exp), -exp
    return mantissa << exp, 0


def _reduce_length(value: Float, integer: int, exp: int) -> tuple[int, int]:
    """Drop decimal digits that the mantissa cannot carry."""
    bits = integer.bit_length()
    mlen = value.sem.mantissa_len()
    if bits <= mlen:
        return integer, exp
    to_remove = ((bits - mlen) * _LOG10_2_NUM) // _LOG10_2_DEN
    # Only digits after the decimal point may go.
    to_remove = min(to_remove, exp)
    return integer // 10**to_remove, exp - to_remove


def _normal_to_string(value: Float) -> str:
    integer, exp = _to_integer(value)
    integer, exp = _reduce_length(value, integer, exp)
    digits = str(integer).rjust(exp, "0")
    point = len(digits) - exp
    text = f"{digits[:point]}.{digits[point:]}"
    return text.rstrip("0")


def to_string(value: Float) -> str:
    """Render ``value`` in plain decimal notation, such as ``-.5`` or ``256.``.

    The output does not aim for the shortest round-tripping representation.
    """
    if value.sem.mantissa_len() < _MIN_PRINT_MANTISSA:
        return to_string(_widen_for_printing(value))

    sign = "-" if value.sign else ""
    if value.category is Category.INFINITY:
        body = "Inf"
    elif value.category is Category.NAN:
        body = "NaN"
    elif value.category is Category.ZERO:
        body = "0.0"
    else:
        body = _normal_to_string(value)
    return sign + body


def format_binary(n: int) -> str:
    """Render a non-negative integer as a string of bits."""
    if n < 0:
        raise ValueError("only non-negative integers can be formatted")
    return format(n, "b")


def format_decimal(n: int) -> str:
    """Render a non-negative integer in base 10."""
    if n < 0:
        raise ValueError("only non-negative integers can be formatted")
    return str(n)


def format_rounding_mode(rm: RoundingMode) -> str:
    """The name of a rounding mode."""
    return rm.value


def format_semantics(sem: Semantics) -> str:
    """Describe semantics as ``(exponent:E precision:P rm:MODE)``."""
    return (
        f"(exponent:{sem.exponent} precision:{sem.precision} "
        f"rm:{format_rounding_mode(sem.mode)})"
    )