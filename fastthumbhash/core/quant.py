from __future__ import annotations

from typing import Final

import numpy as np

L_DC_BITS: Final[int] = 6
PQ_DC_BITS: Final[int] = 6
L_SCALE_BITS: Final[int] = 5
PQ_SCALE_BITS: Final[int] = 6
A_DC_BITS: Final[int] = 4
A_SCALE_BITS: Final[int] = 4
AC_BITS: Final[int] = 4


def max_int(bits: int) -> int:
    return (1 << int(bits)) - 1


def round_half_up(x: float) -> int:
    return int(np.floor(float(x) + 0.5))


def quantize(value: float, bits: int) -> int:
    m = max_int(bits)
    q = round_half_up(float(value) * m)
    return int(np.clip(q, 0, m))


def dequantize(q: int, bits: int) -> float:
    return float(q) / float(max_int(bits))


def quantize_signed(value: float, bits: int) -> int:
    """Maps [-1, 1] onto [0, 2**bits - 1]."""
    m = max_int(bits)
    half = m / 2.0
    q = round_half_up(half + half * float(value))
    return int(np.clip(q, 0, m))


def dequantize_signed(q: int, bits: int) -> float:
    return float(q) / (max_int(bits) / 2.0) - 1.0


def quantize_ac(value: float) -> int:
    return quantize(value, AC_BITS)


def dequantize_ac(raw: int, scale: float) -> float:
    half = max_int(AC_BITS) / 2.0
    return (float(raw) / half - 1.0) * float(scale)
