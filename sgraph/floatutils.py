"""Floating point and bit manipulation helpers."""

from __future__ import annotations

import math
import struct
from fractions import Fraction

__all__ = [
    "float_bits",
    "floats_difference_ulps",
    "almost_equal_floats",
    "difference_of_products",
    "clamp",
    "lerp",
    "pop_count",
    "log2",
    "to_byte_array",
]

_MASK32 = 0xFFFFFFFF
_INT_MIN = -(1 << 31)
_MAX_ULPS = 4 * 1024 * 1024


def _exact_fma(x: float, y: float, z: float) -> float:
    """Return x * y + z rounded once."""
    if math.isfinite(x) and math.isfinite(y) and math.isfinite(z):
        return float(Fraction(x) * Fraction(y) + Fraction(z))
    return x * y + z


_fma = getattr(math, "fma", None) or _exact_fma


def float_bits(value: float) -> int:
    """Return the bits of ``value`` as a single precision float, as a signed 32-bit int."""
    (bits,) = struct.unpack("<i", struct.pack("<f", value))
    return bits


def _ordered_bits(value: float) -> int:
    bits = float_bits(value)
    if bits < 0:
        bits = _INT_MIN - bits
    return bits


def floats_difference_ulps(a: float, b: float) -> int:
    """Return how many single precision units in the last place lie between ``a`` and ``b``."""
    return abs(_ordered_bits(a) - _ordered_bits(b))


def almost_equal_floats(a: float, b: float, ulps: int) -> bool:
    """Tell whether ``a`` and ``b`` are at most ``ulps`` units in the last place apart."""
    if not 0 < ulps < _MAX_ULPS:
        raise ValueError(f"ulps must be in (0, {_MAX_ULPS}), got {ulps}")
    return floats_difference_ulps(a, b) <= ulps


def difference_of_products(a: float, b: float, c: float, d: float) -> float:
    """Return ``a * b - c * d`` with the rounding error of ``c * d`` compensated."""
    cd = c * d
    err = _fma(-c, d, cd)
    dop = _fma(a, b, -cd)
    return dop + err


def clamp(value: float, low: float, high: float) -> float:
    """Limit ``value`` to the range ``[low, high]``."""
    if not low < high:
        raise ValueError(f"low ({low}) must be less than high ({high})")
    if value < low:
        return low
    if value > high:
        return high
    return value


def lerp(a: float, b: float, s: float) -> float:
    """Interpolate linearly from ``a`` to ``b`` by ``s`` in ``[0, 1]``."""
    if not 0 <= s <= 1:
        raise ValueError(f"interpolation factor must be in [0, 1], got {s}")
    return difference_of_products(b, s, a, s - 1.0)


def pop_count(x: int) -> int:
    """Count the set bits of a 32-bit unsigned value."""
    x &= _MASK32
    a = (x - ((x >> 1) & 0x55555555)) & _MASK32
    b = ((a >> 2) & 0x33333333) + (a & 0x33333333)
    c = ((b >> 4) + b) & 0x0F0F0F0F
    d = (c + (c >> 8)) & _MASK32
    e = (d + (d >> 16)) & _MASK32
    return e & 0x3F


def log2(x: int) -> int:
    """Return the index of the highest set bit of a 32-bit value, 0 for 0."""
    x &= _MASK32
    a = x | (x >> 1)
    b = a | (a >> 2)
    c = b | (b >> 4)
    d = c | (c >> 8)
    e = d | (d >> 16)
    return pop_count(e >> 1)


def to_byte_array(first: int, second: int, width: int) -> bytes:
    """Pack two unsigned integers of ``width`` bytes each, most significant byte first."""
    if width <= 0:
        raise ValueError(f"width must be positive, got {width}")
    if first < 0 or second < 0:
        raise ValueError("values must be unsigned")
    mask = (1 << (8 * width)) - 1
    return (first & mask).to_bytes(width, "big") + (second & mask).to_bytes(width, "big")