# arbfloat

Binary floating point numbers with a chosen exponent width, precision and
rounding mode, in pure Python.

`arbfloat` models IEEE 754 style values: a sign, an exponent, a significand
and a category (normal, zero, infinity or NaN). Formats such as FP16, FP32 or
FP64 are predefined, and any other width can be described. The rounding mode
belongs to the number's semantics rather than to a global flag.

## Installation

```console
pip install arbfloat
```

To run the test suite:

```console
pip install "arbfloat[test]"
pytest
```

## Modules

- `arbfloat.semantics`
  - `RoundingMode`: `NONE`, `NEAREST_TIES_TO_EVEN`, `NEAREST_TIES_TO_AWAY`,
    `ZERO`, `POSITIVE`, `NEGATIVE`. `RoundingMode.from_string("Zero")` parses
    a name and raises `ValueError` for unknown names (and for `"None"`).
  - `Semantics(exponent, precision, mode)`: a frozen dataclass. `precision`
    counts significand bits including the implicit bit. Methods:
    `mantissa_len()`, `increase_precision(more)`, `grow_log(more)`,
    `log_precision()`, `increase_exponent(more)`, `with_rm(rm)`, `bias()` and
    `exp_bounds()`.
  - Predefined semantics: `BF16`, `FP16`, `FP32`, `FP64`, `FP128`, `FP256`,
    all rounding to nearest, ties to even.
  - `Category` and `LossFraction` (how much was lost when bits were shifted
    out), plus `shift_right_with_loss(value, bits)`.
- `arbfloat.float`
  - `Float`: construct with `Float.from_parts`, `Float.zero`, `Float.one`,
    `Float.inf` and `Float.nan`. Query with `is_negative`, `is_inf`,
    `is_nan`, `is_zero`, `is_normal`. `with_sign` and unary `-` return copies
    with a new sign. `normalize(rm, loss)` brings the exponent into range and
    rounds; `dump()` prints the internal representation.
  - Comparison follows IEEE 754: NaN is unequal to everything and `+0 == -0`.
    `compare(other)` returns `-1`, `0`, `1`, or `None` when unordered, and
    raises `ValueError` for numbers of different semantics.
  - `max_positive_value(sem)`, `min_positive_value(sem)` and
    `can_represent_exactly(sem, val)`.
- `arbfloat.formatting`: `to_string(value)` prints plain decimal text such as
  `2.`, `.5` or `-Inf`; `decimal_accuracy(value)`, `format_binary(n)`,
  `format_decimal(n)`, `format_rounding_mode(rm)` and `format_semantics(sem)`.
- `arbfloat.functions`: `scale(value, amount, rm)` multiplies by a power of
  two, `fabs`, and `fmax` / `fmin`, which ignore a NaN operand and order
  `-0` below `+0`.
- `arbfloat.utils`: `mask(b)`, `special_test_values()` and `Lfsr`, a small
  deterministic generator that yields 64-bit integers when iterated.

## Example

```python
from arbfloat.semantics import FP16, RoundingMode
from arbfloat.float import Float, max_positive_value, can_represent_exactly
from arbfloat.formatting import to_string, format_semantics
from arbfloat.functions import scale, fabs, fmax

print(format_semantics(FP16))   # (exponent:5 precision:11 rm:NearestTiesToEven)

one = Float.one(FP16, False)
two = scale(one, 1, RoundingMode.NEAREST_TIES_TO_EVEN)
print(to_string(two))           # 2.

neg = -two
print(to_string(fabs(neg)))     # 2.
print(fmax(one, neg) == one)    # True

print(to_string(max_positive_value(FP16)))
print(can_represent_exactly(FP16, one))  # True
```

## What this package does not do

There is no arithmetic between floats (addition, subtraction, multiplication,
division, remainder or powers), no conversion from Python `float` or `int`
values, no casting between semantics, no parsing of decimal strings, and no
mathematical functions or constants such as square root, `exp`, `log`, the
trigonometric functions, pi or e. Values are built from their parts and
inspected, compared, rescaled by powers of two, rounded and printed.