import math
import sys
from fractions import Fraction

import pytest

from arbfloat.float import Float, can_represent_exactly, max_positive_value, min_positive_value
from arbfloat.semantics import (
    FP16,
    FP32,
    FP64,
    Category,
    LossFraction,
    RoundingMode,
    Semantics,
)

NTE = RoundingMode.NEAREST_TIES_TO_EVEN

SPECIAL_VALUES = [
    -math.nan,
    math.nan,
    math.inf,
    -math.inf,
    sys.float_info.epsilon,
    -sys.float_info.epsilon,
    0.000000000000000000000000000000000000001,
    -sys.float_info.max,
    sys.float_info.max,
    math.pi,
    math.log(2),
    math.sqrt(2),
    math.e,
    0.0,
    -0.0,
    10.0,
    -10.0,
    -0.00001,
    0.1,
    355.0 / 113.0,
    -1.0,
    -1.1,
]


def f64(x):
    negative = math.copysign(1.0, x) < 0
    if math.isnan(x):
        return Float.nan(FP64, negative)
    if math.isinf(x):
        return Float.inf(FP64, negative)
    if x == 0:
        return Float.zero(FP64, negative)
    m, e = math.frexp(abs(x))
    return Float.from_parts(FP64, negative, e - 1, int(m * 2**53))


def value(f):
    return Fraction(f.mantissa) * Fraction(2) ** (f.exp - f.sem.mantissa_len())


def test_comparisons_match_python_floats():
    for first in SPECIAL_VALUES:
        for second in SPECIAL_VALUES:
            a, b = f64(first), f64(second)
            assert (first < second) == (a < b)
            assert (first == second) == (a == b)
            assert (first > second) == (a > b)
            assert (first <= second) == (a <= b)
            assert (first >= second) == (a >= b)


def test_one_value():
    x = Float.one(Semantics(10, 12, NTE), False)
    assert value(x) == 1
    assert x.is_normal()


def test_constructors_categories():
    assert Float.zero(FP32, True).category is Category.ZERO
    assert Float.inf(FP32, False).is_inf()
    assert Float.nan(FP32, False).is_nan()
    assert Float.from_parts(FP32, False, 3, 0).is_zero()
    with pytest.raises(ValueError):
        Float.from_parts(FP32, False, 0, -1)


def test_neg_and_with_sign():
    x = Float.one(FP32, False)
    assert (-x).is_negative()
    assert not (-(-x)).is_negative()
    assert x.with_sign(True) == -x


def test_equality_rules():
    assert Float.zero(FP64, True) == Float.zero(FP64, False)
    assert hash(Float.zero(FP64, True)) == hash(Float.zero(FP64, False))
    nan = Float.nan(FP64, False)
    assert not (nan == nan)
    assert nan != nan
    assert Float.inf(FP64, True) != Float.inf(FP64, False)


def test_compare_values():
    one = Float.one(FP64, False)
    assert one.compare(-one) == 1
    assert (-one).compare(one) == -1
    assert one.compare(Float.nan(FP64, False)) is None
    assert Float.inf(FP64, True).compare(Float.inf(FP64, True)) == 0


def test_compare_different_semantics_raises():
    with pytest.raises(ValueError):
        Float.one(FP32, False).compare(Float.one(FP64, False))


def test_normalize_fp16_border():
    x = Float.from_parts(FP16, False, 10, 65519).normalize(NTE, LossFraction.EXACTLY_ZERO)
    assert value(x) == 65504


def test_normalize_large_integer():
    sem = Semantics(40, 10, NTE)
    x = Float.from_parts(sem, False, 9, 1 << 14).normalize(NTE, LossFraction.EXACTLY_ZERO)
    assert value(x) == 1 << 14
    assert x.mantissa.bit_length() == sem.precision


def test_normalize_rounds_to_infinity():
    x = Float.from_parts(FP16, False, 10, 65520)
    assert x.normalize(NTE, LossFraction.EXACTLY_ZERO).is_inf()
    truncated = x.normalize(RoundingMode.ZERO, LossFraction.EXACTLY_ZERO)
    assert value(truncated) == 65504


def test_normalize_exponent_overflow():
    x = Float.from_parts(FP16, True, 20, 1 << 10)
    assert x.normalize(NTE, LossFraction.EXACTLY_ZERO).is_inf()
    clamped = x.normalize(RoundingMode.POSITIVE, LossFraction.EXACTLY_ZERO)
    assert clamped.is_normal()
    assert clamped.is_negative()
    assert clamped.exp == 15
    assert clamped.mantissa == 1023
    assert x.normalize(RoundingMode.NEGATIVE, LossFraction.EXACTLY_ZERO).is_inf()


def test_normalize_subnormal_rounding():
    x = Float.from_parts(FP16, False, -15, 3)
    even = x.normalize(NTE, LossFraction.EXACTLY_ZERO)
    assert (even.exp, even.mantissa) == (-14, 2)
    down = x.normalize(RoundingMode.ZERO, LossFraction.EXACTLY_ZERO)
    assert (down.exp, down.mantissa) == (-14, 1)


def test_normalize_keeps_subnormal():
    x = Float.from_parts(FP16, False, -14, 1)
    assert x.normalize(NTE, LossFraction.EXACTLY_ZERO) == x


def test_normalize_left_shift_with_loss_raises():
    x = Float.from_parts(FP16, False, 0, 1)
    with pytest.raises(ValueError):
        x.normalize(NTE, LossFraction.LESS_THAN_HALF)


def test_need_round_away_from_zero():
    odd = Float.from_parts(FP32, False, 0, (1 << 23) | 1)
    even = Float.from_parts(FP32, False, 0, 1 << 23)
    half = LossFraction.EXACTLY_HALF
    assert odd.need_round_away_from_zero(NTE, half)
    assert not even.need_round_away_from_zero(NTE, half)
    assert even.need_round_away_from_zero(NTE, LossFraction.MORE_THAN_HALF)
    assert even.need_round_away_from_zero(RoundingMode.NEAREST_TIES_TO_AWAY, half)
    assert not even.need_round_away_from_zero(RoundingMode.ZERO, half)
    assert even.need_round_away_from_zero(RoundingMode.POSITIVE, LossFraction.LESS_THAN_HALF)
    assert not (-even).need_round_away_from_zero(RoundingMode.POSITIVE, half)
    with pytest.raises(ValueError):
        Float.inf(FP32, False).need_round_away_from_zero(NTE, half)


def test_same_absolute_value():
    x = f64(2.5)
    assert x.same_absolute_value(-x)
    assert not x.same_absolute_value(f64(3.5))
    assert Float.nan(FP64, False).same_absolute_value(Float.nan(FP64, True))
    assert not x.same_absolute_value(Float.zero(FP64, False))


def test_exp_bounds():
    assert Float.one(FP16, False).exp_bounds() == (-14, 15)


def test_min_max_val():
    assert value(max_positive_value(FP16)) == 65504
    assert value(max_positive_value(FP32)) == Fraction(3.4028234663852886e38)
    assert value(max_positive_value(FP64)) == Fraction(sys.float_info.max)
    assert value(min_positive_value(FP32)) == Fraction(1, 2**149)
    assert value(min_positive_value(FP64)) == Fraction(5e-324)


def test_can_represent_exactly():
    assert can_represent_exactly(FP16, f64(1.0))
    assert can_represent_exactly(FP16, f64(65504.0))
    assert not can_represent_exactly(FP16, f64(65504.1))
    assert not can_represent_exactly(FP16, f64(0.0001))

    val10 = Float.from_parts(FP32, False, 0, 0b1000000001)
    val11 = Float.from_parts(FP32, False, 0, 0b10000000001)
    val12 = Float.from_parts(FP32, False, 0, 0b100000000001)
    assert can_represent_exactly(FP16, val10)
    assert can_represent_exactly(FP16, val11)
    assert not can_represent_exactly(FP16, val12)

    assert can_represent_exactly(FP64, Float.from_parts(FP32, False, 1, 0xC90FDB))
    assert can_represent_exactly(FP16, Float.nan(FP64, False))


def test_dump(capsys):
    Float.one(FP16, False).dump()
    Float.zero(FP16, True).dump()
    Float.nan(FP16, True).dump()
    Float.inf(FP16, False).dump()
    out = capsys.readouterr().out.splitlines()
    assert out == ["FP[+ E=   0 M = 10000000000]", "[-0.0]", "[-NaN]", "[+Inf]"]