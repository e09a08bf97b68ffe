"""Floating point semantics, rounding modes and loss tracking."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RoundingMode(Enum):
    """Rounding-direction attributes (IEEE 754-2019, section 4.3)."""

    NONE = "None"
    NEAREST_TIES_TO_EVEN = "NearestTiesToEven"
    NEAREST_TIES_TO_AWAY = "NearestTiesToAway"
    ZERO = "Zero"
    POSITIVE = "Positive"
    NEGATIVE = "Negative"

    @classmethod
    def from_string(cls, s: str) -> RoundingMode:
        """Parse a rounding mode name; raise ValueError for unknown names."""
        if s == cls.NONE.value:
            raise ValueError(f"invalid rounding mode: {s!r}")
        try:
            return cls(s)
        except ValueError:
            raise ValueError(f"invalid rounding mode: {s!r}") from None


@dataclass(frozen=True)
class Semantics:
    """Precision, exponent range and rounding mode of a float type.

    ``exponent`` is the number of exponent bits, ``precision`` the number of
    significand bits (mantissa plus the implicit bit).
    """

    exponent: int
    precision: int
    mode: RoundingMode

    def __post_init__(self) -> None:
        if self.exponent < 1:
            raise ValueError("exponent length must be at least 1 bit")
        if self.precision < 1:
            raise ValueError("precision must be at least 1 bit")

    def mantissa_len(self) -> int:
        """Length of the mantissa in bits (precision - 1)."""
        return self.precision - 1

    def increase_precision(self, more: int) -> Semantics:
        """Return semantics with ``more`` additional bits of precision."""
        return Semantics(self.exponent, self.precision + more, self.mode)

    def grow_log(self, more: int) -> Semantics:
        """Add ``more`` bits of precision plus roughly log2 of the precision."""
        return Semantics(
            self.exponent, self.precision + more + self.log_precision(), self.mode
        )

    def log_precision(self) -> int:
        """Approximate log2 of the precision (its bit length)."""
        return self.precision.bit_length()

    def increase_exponent(self, more: int) -> Semantics:
        """Return semantics with ``more`` additional exponent bits."""
        return Semantics(self.exponent + more, self.precision, self.mode)

    def with_rm(self, rm: RoundingMode) -> Semantics:
        """Return the same semantics with rounding mode ``rm``."""
        return Semantics(self.exponent, self.precision, rm)

    def bias(self) -> int:
        """The exponent bias, as a positive number."""
        return (1 << (self.exponent - 1)) - 1

    def exp_bounds(self) -> tuple[int, int]:
        """The lowest and highest legal exponent values."""
        bias = self.bias()
        exp_min = -bias + 1
        # The all-ones exponent is reserved for Inf and NaN.
        exp_max = (1 << self.exponent) - bias - 2
        return exp_min, exp_max


_NTE = RoundingMode.NEAREST_TIES_TO_EVEN

BF16 = Semantics(8, 8, _NTE)
FP16 = Semantics(5, 11, _NTE)
FP32 = Semantics(8, 24, _NTE)
FP64 = Semantics(11, 53, _NTE)
FP128 = Semantics(15, 113, _NTE)
FP256 = Semantics(19, 237, _NTE)


class Category(Enum):
    """Kind of value a float holds."""

    INFINITY = "Infinity"
    NAN = "NaN"
    NORMAL = "Normal"
    ZERO = "Zero"


class LossFraction(Enum):
    """How much was lost, relative to half an ulp, when bits were dropped."""

    EXACTLY_ZERO = "ExactlyZero"
    LESS_THAN_HALF = "LessThanHalf"
    EXACTLY_HALF = "ExactlyHalf"
    MORE_THAN_HALF = "MoreThanHalf"

    @classmethod
    def from_shift(cls, value: int, bits: int) -> LossFraction:
        """Classify the low ``bits`` bits of ``value`` that a right shift drops."""
        if bits < 0:
            raise ValueError("shift amount must be non-negative")
        if bits == 0:
            return cls.EXACTLY_ZERO
        dropped = value & ((1 << bits) - 1)
        half = 1 << (bits - 1)
        if dropped == 0:
            return cls.EXACTLY_ZERO
        if dropped == half:
            return cls.EXACTLY_HALF
        if dropped > half:
            return cls.MORE_THAN_HALF
        return cls.LESS_THAN_HALF

    @classmethod
    def combine(cls, msb: LossFraction, lsb: LossFraction) -> LossFraction:
        """Merge a more significant loss ``msb`` with a less significant ``lsb``."""
        if lsb is not cls.EXACTLY_ZERO:
            if msb is cls.EXACTLY_ZERO:
                return cls.LESS_THAN_HALF
            if msb is cls.EXACTLY_HALF:
                return cls.MORE_THAN_HALF
        return msb

    def is_gte_half(self) -> bool:
        """True if the loss is at least half an ulp."""
        return self in (LossFraction.EXACTLY_HALF, LossFraction.MORE_THAN_HALF)


def shift_right_with_loss(value: int, bits: int) -> tuple[int, LossFraction]:
    """Shift ``value`` right by ``bits`` and report what was lost."""
    loss = LossFraction.from_shift(value, bits)
    return value >> bits, loss