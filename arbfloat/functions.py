"""Sign, magnitude and power-of-two scaling operations on floats."""

from __future__ import annotations

from .float import Float
from .semantics import LossFraction, RoundingMode


def scale(value: Float, amount: int, rm: RoundingMode) -> Float:
    """Multiply ``value`` by ``2**amount``, rounding with ``rm`` (like scalbln)."""
    if not value.is_normal():
        return value
    scaled = Float.from_parts(value.sem, value.sign, value.exp + amount, value.mantissa)
    return scaled.normalize(rm, LossFraction.EXACTLY_ZERO)


def fabs(value: Float) -> Float:
    """Return the absolute value of ``value``."""
    return value.with_sign(False)


def fmax(a: Float, b: Float) -> Float:
    """Return the greater of ``a`` and ``b``; a NaN operand is ignored."""
    if a.is_nan():
        return b
    if b.is_nan():
        return a
    if a.sign != b.sign:
        # Also orders +0 above -0.
        return b if a.sign else a
    return a if a > b else b


def fmin(a: Float, b: Float) -> Float:
    """Return the smaller of ``a`` and ``b``; a NaN operand is ignored."""
    if a.is_nan():
        return b
    if b.is_nan():
        return a
    if a.sign != b.sign:
        # Also orders -0 below +0.
        return a if a.sign else b
    return b if a > b else a