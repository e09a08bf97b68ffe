"""The arbitrary-precision Float value: construction, rounding and ordering."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from .semantics import Category, LossFraction, RoundingMode, Semantics, shift_right_with_loss


@dataclass(frozen=True, eq=False, slots=True)
class Float:
    """An arbitrary-precision binary floating point number.

    ``mantissa`` holds the significand including the implicit bit, aligned to
    the right, so a normalized value is ``mantissa * 2**(exp - mantissa_len)``.
    """

    sem: Semantics
    sign: bool
    exp: int
    mantissa: int
    category: Category

    @classmethod
    def from_parts(cls, sem: Semantics, sign: bool, exp: int, mantissa: int) -> Float:
        """Build a normal number; a zero mantissa yields a zero."""
        if mantissa < 0:
            raise ValueError("mantissa must be non-negative")
        if mantissa == 0:
            return cls.zero(sem, sign)
        return cls(sem, sign, exp, mantissa, Category.NORMAL)

    @classmethod
    def zero(cls, sem: Semantics, sign: bool) -> Float:
        """Return a signed zero."""
        return cls(sem, sign, 0, 0, Category.ZERO)

    @classmethod
    def one(cls, sem: Semantics, sign: bool) -> Float:
        """Return a signed one."""
        return cls(sem, sign, 0, 1 << sem.mantissa_len(), Category.NORMAL)

    @classmethod
    def inf(cls, sem: Semantics, sign: bool) -> Float:
        """Return a signed infinity."""
        return cls(sem, sign, 0, 0, Category.INFINITY)

    @classmethod
    def nan(cls, sem: Semantics, sign: bool) -> Float:
        """Return a signed NaN."""
        return cls(sem, sign, 0, 0, Category.NAN)

    def is_negative(self) -> bool:
        return self.sign

    def is_inf(self) -> bool:
        return self.category is Category.INFINITY

    def is_nan(self) -> bool:
        return self.category is Category.NAN

    def is_zero(self) -> bool:
        return self.category is Category.ZERO

    def is_normal(self) -> bool:
        """True unless the value is zero, NaN or infinity."""
        return self.category is Category.NORMAL

    def with_sign(self, sign: bool) -> Float:
        """Return a copy with the given sign (True means negative)."""
        return dataclasses.replace(self, sign=sign)

    def exp_bounds(self) -> tuple[int, int]:
        """The lowest and highest legal exponents of this number's type."""
        return self.sem.exp_bounds()

    def __neg__(self) -> Float:
        return self.with_sign(not self.sign)

    def _overflow(self, rm: RoundingMode) -> Float:
        bounds = self.exp_bounds()
        inf = Float.inf(self.sem, self.sign)
        largest = Float.from_parts(
            self.sem, self.sign, bounds[1], (1 << self.sem.mantissa_len()) - 1
        )
        if rm is RoundingMode.ZERO:
            return largest
        if rm is RoundingMode.POSITIVE:
            return largest if self.sign else inf
        if rm is RoundingMode.NEGATIVE:
            return inf if self.sign else largest
        return inf

    def need_round_away_from_zero(self, rm: RoundingMode, loss: LossFraction) -> bool:
        """True if rounding must increment the mantissa."""
        if not (self.is_normal() or self.is_zero()):
            raise ValueError("rounding applies only to normal numbers and zeros")
        if rm is RoundingMode.POSITIVE:
            return not self.sign
        if rm is RoundingMode.NEGATIVE:
            return self.sign
        if rm in (RoundingMode.ZERO, RoundingMode.NONE):
            return False
        if rm is RoundingMode.NEAREST_TIES_TO_AWAY:
            return loss.is_gte_half()
        if loss is LossFraction.MORE_THAN_HALF:
            return True
        return loss is LossFraction.EXACTLY_HALF and self.mantissa & 1 == 1

    def same_absolute_value(self, other: Float) -> bool:
        """True if both numbers have the same magnitude and category."""
        if self.category is not other.category:
            return False
        if self.category is Category.NORMAL:
            return self.exp == other.exp and self.mantissa == other.mantissa
        return True

    def normalize(self, rm: RoundingMode, loss: LossFraction) -> Float:
        """Bring the exponent into range, align the mantissa and round.

        ``loss`` describes bits already dropped below the current mantissa.
        """
        if not self.is_normal():
            return self
        sem = self.sem
        exp_min, exp_max = self.exp_bounds()
        exp = self.exp
        mantissa = self.mantissa

        nmsb = mantissa.bit_length()
        if nmsb > 0:
            exp_change = nmsb - sem.precision
            if exp + exp_change > exp_max:
                return self._overflow(rm)
            if exp + exp_change < exp_min:
                exp_change = exp_min - exp
            if exp_change < 0:
                if loss is not LossFraction.EXACTLY_ZERO:
                    raise ValueError("cannot shift left a value that lost bits")
                return Float(sem, self.sign, exp + exp_change, mantissa << -exp_change,
                             Category.NORMAL)
            if exp_change > 0:
                mantissa, shifted_loss = shift_right_with_loss(mantissa, exp_change)
                exp += exp_change
                loss = LossFraction.combine(shifted_loss, loss)

        if loss is LossFraction.EXACTLY_ZERO:
            if mantissa == 0:
                return Float.zero(sem, self.sign)
            return Float(sem, self.sign, exp, mantissa, Category.NORMAL)

        current = Float(sem, self.sign, exp, mantissa, Category.NORMAL)
        if current.need_round_away_from_zero(rm, loss):
            if mantissa == 0:
                exp = exp_min
            mantissa += 1
            if mantissa >> sem.precision:
                if exp < exp_max:
                    mantissa >>= 1
                    exp += 1
                else:
                    return Float.inf(sem, self.sign)

        if mantissa == 0:
            return Float.zero(sem, self.sign)
        return Float(sem, self.sign, exp, mantissa, Category.NORMAL)

    def dump(self) -> None:
        """Print the internal representation of the number."""
        sign = "-" if self.sign else "+"
        if self.category is Category.NAN:
            print(f"[{sign}NaN]")
        elif self.category is Category.INFINITY:
            print(f"[{sign}Inf]")
        elif self.category is Category.ZERO:
            print(f"[{sign}0.0]")
        else:
            print(f"FP[{sign} E={self.exp:4} M = {self.mantissa:b}]")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Float):
            return NotImplemented
        if self.category is Category.NAN:
            return False
        if self.category is Category.ZERO:
            return other.is_zero()
        return (
            self.sign == other.sign
            and self.exp == other.exp
            and self.mantissa == other.mantissa
            and self.category is other.category
        )

    def __hash__(self) -> int:
        if self.category is Category.ZERO:
            return hash(Category.ZERO)
        return hash((self.category, self.sign, self.exp, self.mantissa))

    def compare(self, other: Float) -> int | None:
        """Return -1, 0 or 1 for less, equal or greater; None if unordered."""
        if self.sem != other.sem:
            raise ValueError("cannot compare numbers of different semantics")
        a, b = self.category, other.category
        if a is Category.NAN or b is Category.NAN:
            return None
        if a is Category.ZERO and b is Category.ZERO:
            return 0
        # Result when self has the larger magnitude, and when other has.
        self_larger = -1 if self.sign else 1
        other_larger = 1 if other.sign else -1
        if a is Category.INFINITY and b is Category.INFINITY:
            return 0 if self.sign == other.sign else self_larger
        if a is Category.INFINITY or (a is Category.NORMAL and b is Category.ZERO):
            return self_larger
        if b is Category.INFINITY or (a is Category.ZERO and b is Category.NORMAL):
            return other_larger
        if self.sign != other.sign:
            return self_larger
        if (self.exp, self.mantissa) < (other.exp, other.mantissa):
            return -self_larger
        if (self.exp, self.mantissa) > (other.exp, other.mantissa):
            return self_larger
        return 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Float):
            return NotImplemented
        return self.compare(other) == -1

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Float):
            return NotImplemented
        return self.compare(other) in (-1, 0)

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Float):
            return NotImplemented
        return self.compare(other) == 1

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Float):
            return NotImplemented
        return self.compare(other) in (1, 0)


def max_positive_value(sem: Semantics) -> Float:
    """The largest finite positive value of ``sem``."""
    return Float.from_parts(sem, False, sem.exp_bounds()[1], (1 << sem.precision) - 1)


def min_positive_value(sem: Semantics) -> Float:
    """The smallest positive (subnormal) value of ``sem``."""
    return Float.from_parts(sem, False, sem.exp_bounds()[0], 1)


def can_represent_exactly(sem: Semantics, val: Float) -> bool:
    """True if ``val`` converts to ``sem`` without losing accuracy."""
    if not val.is_normal():
        return True
    other = val.sem
    if other.precision <= sem.precision and other.exponent <= sem.exponent:
        return True
    exp_min, exp_max = sem.exp_bounds()
    if val.exp < exp_min or val.exp > exp_max:
        return False
    mantissa = val.mantissa
    if mantissa == 0:
        return True
    trailing = (mantissa & -mantissa).bit_length() - 1
    used_bits = mantissa.bit_length() - trailing
    return used_bits <= sem.precision