"""Quaternions."""

from __future__ import annotations

import math
from dataclasses import dataclass

from sgraph.floatutils import almost_equal_floats

__all__ = ["Quaternion"]

_FLOAT_EPSILON = 2.0 ** -23


@dataclass(frozen=True)
class Quaternion:
    """A quaternion with vector part (x, y, z) and scalar part w."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 0.0

    @staticmethod
    def zero() -> "Quaternion":
        return Quaternion(0.0, 0.0, 0.0, 0.0)

    @staticmethod
    def identity() -> "Quaternion":
        return Quaternion(0.0, 0.0, 0.0, 1.0)

    def length_sq(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z + self.w * self.w

    def length(self) -> float:
        return math.sqrt(self.length_sq())

    def scale(self, s: float) -> "Quaternion":
        return Quaternion(self.x * s, self.y * s, self.z * s, self.w * s)

    def normalized(self) -> "Quaternion":
        """Return the quaternion scaled to unit length; tiny and unit ones come back as they are."""
        magnitude_sq = self.length_sq()
        if magnitude_sq > _FLOAT_EPSILON and not almost_equal_floats(magnitude_sq, 1.0, 4):
            return self.scale(1.0 / math.sqrt(magnitude_sq))
        return self

    def conjugate(self) -> "Quaternion":
        return Quaternion(-self.x, -self.y, -self.z, self.w)

    def inverted(self) -> "Quaternion":
        """Return the multiplicative inverse."""
        magnitude_sq = self.length_sq()
        if magnitude_sq == 0.0:
            raise ValueError("the zero quaternion has no inverse")
        return self.conjugate().scale(1.0 / magnitude_sq)

    def __add__(self, other: "Quaternion") -> "Quaternion":
        return Quaternion(self.x + other.x, self.y + other.y, self.z + other.z, self.w + other.w)

    def __sub__(self, other: "Quaternion") -> "Quaternion":
        return Quaternion(self.x - other.x, self.y - other.y, self.z - other.z, self.w - other.w)