"""Byte and floating point RGBA colours."""

from __future__ import annotations

from dataclasses import dataclass

from sgraph.floatutils import clamp
from sgraph.vectors import Vector4

__all__ = ["Color", "FloatColor"]


def _check_byte(name: str, value: int) -> None:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{name} must be in [0, 255], got {value}")


@dataclass(frozen=True)
class Color:
    """An RGBA colour with one byte per channel."""

    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 0

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            _check_byte(name, getattr(self, name))

    @staticmethod
    def zero() -> "Color":
        return Color(0, 0, 0, 0)

    @staticmethod
    def black() -> "Color":
        return Color(0x00, 0x00, 0x00, 0xFF)

    @staticmethod
    def white() -> "Color":
        return Color(0xFF, 0xFF, 0xFF, 0xFF)

    @staticmethod
    def white_transparent() -> "Color":
        return Color(0xFF, 0xFF, 0xFF, 0x00)

    @staticmethod
    def from_value(value: int) -> "Color":
        """Unpack a 32-bit value whose lowest byte is red and highest is alpha."""
        if not 0 <= value <= 0xFFFFFFFF:
            raise ValueError(f"value must fit in 32 bits, got {value}")
        r, g, b, a = value.to_bytes(4, "little")
        return Color(r, g, b, a)

    @staticmethod
    def from_vector4(v: Vector4) -> "Color":
        """Convert channels in [0, 1] to bytes, clamping and rounding."""
        def to_byte(x: float) -> int:
            return int(clamp(x, 0.0, 1.0) * 255.0 + 0.5)

        return Color(to_byte(v.x), to_byte(v.y), to_byte(v.z), to_byte(v.w))

    def value(self) -> int:
        """Pack the colour into 32 bits, red in the lowest byte and alpha in the highest."""
        return int.from_bytes(bytes((self.r, self.g, self.b, self.a)), "little")

    def to_vector4(self) -> Vector4:
        s = 1.0 / 255.0
        return Vector4(self.r * s, self.g * s, self.b * s, self.a * s)

    def multiply(self, other: "Color") -> "Color":
        return Color(
            (self.r * other.r) >> 8,
            (self.g * other.g) >> 8,
            (self.b * other.b) >> 8,
            (self.a * other.a) >> 8,
        )

    def scale(self, s: int) -> "Color":
        _check_byte("scale", s)
        return Color(
            (self.r * s) >> 8,
            (self.g * s) >> 8,
            (self.b * s) >> 8,
            (self.a * s) >> 8,
        )


@dataclass(frozen=True)
class FloatColor:
    """An RGBA colour with floating point channels."""

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 0.0

    @staticmethod
    def zero() -> "FloatColor":
        return FloatColor(0.0, 0.0, 0.0, 0.0)

    @staticmethod
    def black() -> "FloatColor":
        return FloatColor(0.0, 0.0, 0.0, 1.0)

    @staticmethod
    def white() -> "FloatColor":
        return FloatColor(1.0, 1.0, 1.0, 1.0)

    @staticmethod
    def white_transparent() -> "FloatColor":
        return FloatColor(1.0, 1.0, 1.0, 0.0)

    @staticmethod
    def from_vector4(v: Vector4) -> "FloatColor":
        return FloatColor(
            clamp(v.x, 0.0, 1.0),
            clamp(v.y, 0.0, 1.0),
            clamp(v.z, 0.0, 1.0),
            clamp(v.w, 0.0, 1.0),
        )

    @staticmethod
    def from_color(c: Color) -> "FloatColor":
        v = c.to_vector4()
        return FloatColor(v.x, v.y, v.z, v.w)

    def to_vector4(self) -> Vector4:
        return Vector4(self.r, self.g, self.b, self.a)

    def multiply(self, other: "FloatColor") -> "FloatColor":
        return FloatColor(self.r * other.r, self.g * other.g, self.b * other.b, self.a * other.a)

    def scale(self, s: float) -> "FloatColor":
        """Scale every channel by ``s`` clamped to [0, 1]."""
        s = clamp(s, 0.0, 1.0)
        return FloatColor(self.r * s, self.g * s, self.b * s, self.a * s)