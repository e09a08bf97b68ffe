"""Small helpers: bit masks, edge-case test values and a deterministic bit generator."""

from __future__ import annotations

import math
import sys
from collections.abc import Iterator

_STATE_MASK = 0xFFFFFFFF
_INITIAL_STATE = 0x13371337


def mask(b: int) -> int:
    """Return an integer with the low ``b`` bits set."""
    if b < 0:
        raise ValueError("mask width must be non-negative")
    return (1 << b) - 1


def special_test_values() -> list[float]:
    """Values that exercise edge cases: NaNs, infinities, zeros, extremes."""
    eps = sys.float_info.epsilon
    return [
        -math.nan,
        math.nan,
        math.inf,
        -math.inf,
        eps,
        -eps,
        0.000000000000000000000000000000000000001,
        -sys.float_info.max,
        sys.float_info.max,
        math.pi,
        math.log(2.0),
        math.sqrt(2.0),
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


class Lfsr:
    """A 32-bit linear-feedback shift register used as a reproducible bit source.

    Iterating yields an endless stream of 64-bit values.
    """

    def __init__(self, seed: int = 0) -> None:
        if not 0 <= seed <= _STATE_MASK:
            raise ValueError("seed must fit in 32 bits")
        self.state = _INITIAL_STATE ^ seed

    def step(self) -> None:
        """Advance the register by one bit."""
        s = self.state
        bit = ((s >> 24) ^ (s >> 23) ^ (s >> 22) ^ (s >> 17) ^ 1) & 1
        self.state = ((s << 1) | bit) & _STATE_MASK

    def get32(self) -> int:
        """Return the next 32 generated bits as an integer."""
        res = 0
        for _ in range(32):
            self.step()
            res = (res << 1) ^ (self.state & 1)
        return res

    def get64(self) -> int:
        """Return the next 64 generated bits; the first 32 form the high half."""
        high = self.get32()
        low = self.get32()
        return (high << 32) | low

    def __iter__(self) -> Iterator[int]:
        return self

    def __next__(self) -> int:
        return self.get64()