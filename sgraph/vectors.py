"""Two, three and four component vectors."""

from __future__ import annotations

import math
from dataclasses import dataclass

from sgraph.floatutils import almost_equal_floats, difference_of_products, lerp

__all__ = ["Vector2", "Vector3", "Vector4"]

# Machine epsilon of single precision floats.
_FLOAT_EPSILON = 2.0 ** -23


def _needs_normalizing(magnitude_sq: float) -> bool:
    return magnitude_sq > _FLOAT_EPSILON and not almost_equal_floats(magnitude_sq, 1.0, 4)


@dataclass(frozen=True)
class Vector2:
    """A two-dimensional vector."""

    x: float = 0.0
    y: float = 0.0

    @staticmethod
    def zero() -> "Vector2":
        return Vector2(0.0, 0.0)

    @staticmethod
    def one() -> "Vector2":
        return Vector2(1.0, 1.0)

    @staticmethod
    def unit_x() -> "Vector2":
        return Vector2(1.0, 0.0)

    @staticmethod
    def unit_y() -> "Vector2":
        return Vector2(0.0, 1.0)

    def length_sq(self) -> float:
        return self.x * self.x + self.y * self.y

    def length(self) -> float:
        return math.sqrt(self.length_sq())

    def scale(self, s: float) -> "Vector2":
        return Vector2(self.x * s, self.y * s)

    def negate(self) -> "Vector2":
        return Vector2(-self.x, -self.y)

    def normalized(self) -> "Vector2":
        """Return the vector scaled to unit length; tiny and unit vectors come back as they are."""
        magnitude_sq = self.length_sq()
        if _needs_normalizing(magnitude_sq):
            return self.scale(1.0 / math.sqrt(magnitude_sq))
        return self

    def maximum(self, other: "Vector2") -> "Vector2":
        return Vector2(max(self.x, other.x), max(self.y, other.y))

    def minimum(self, other: "Vector2") -> "Vector2":
        return Vector2(min(self.x, other.x), min(self.y, other.y))

    def lerp(self, other: "Vector2", s: float) -> "Vector2":
        return Vector2(lerp(self.x, other.x, s), lerp(self.y, other.y, s))

    def cross(self, other: "Vector2") -> float:
        return difference_of_products(self.x, other.y, self.y, other.x)

    def dot(self, other: "Vector2") -> float:
        return self.x * other.x + self.y * other.y

    def __add__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, s: float) -> "Vector2":
        return self.scale(s)


@dataclass(frozen=True)
class Vector3:
    """A three-dimensional vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @staticmethod
    def zero() -> "Vector3":
        return Vector3(0.0, 0.0, 0.0)

    @staticmethod
    def one() -> "Vector3":
        return Vector3(1.0, 1.0, 1.0)

    @staticmethod
    def unit_x() -> "Vector3":
        return Vector3(1.0, 0.0, 0.0)

    @staticmethod
    def unit_y() -> "Vector3":
        return Vector3(0.0, 1.0, 0.0)

    @staticmethod
    def unit_z() -> "Vector3":
        return Vector3(0.0, 0.0, 1.0)

    def length_sq(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def length(self) -> float:
        return math.sqrt(self.length_sq())

    def scale(self, s: float) -> "Vector3":
        return Vector3(self.x * s, self.y * s, self.z * s)

    def negate(self) -> "Vector3":
        return Vector3(-self.x, -self.y, -self.z)

    def normalized(self) -> "Vector3":
        """Return the vector scaled to unit length; tiny and unit vectors come back as they are."""
        magnitude_sq = self.length_sq()
        if _needs_normalizing(magnitude_sq):
            return self.scale(1.0 / math.sqrt(magnitude_sq))
        return self

    def maximum(self, other: "Vector3") -> "Vector3":
        return Vector3(max(self.x, other.x), max(self.y, other.y), max(self.z, other.z))

    def minimum(self, other: "Vector3") -> "Vector3":
        return Vector3(min(self.x, other.x), min(self.y, other.y), min(self.z, other.z))

    def lerp(self, other: "Vector3", s: float) -> "Vector3":
        return Vector3(
            lerp(self.x, other.x, s),
            lerp(self.y, other.y, s),
            lerp(self.z, other.z, s),
        )

    def cross(self, other: "Vector3") -> "Vector3":
        return Vector3(
            difference_of_products(self.y, other.z, self.z, other.y),
            difference_of_products(self.z, other.x, self.x, other.z),
            difference_of_products(self.x, other.y, self.y, other.x),
        )

    def dot(self, other: "Vector3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def distance(self, other: "Vector3") -> float:
        return (self - other).length()

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, s: float) -> "Vector3":
        return self.scale(s)


@dataclass(frozen=True)
class Vector4:
    """A four-dimensional vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 0.0