"""Affine 2D matrices, 4x4 matrices and transform descriptions."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["Matrix32", "Matrix4", "Transform2D", "Transform"]


@dataclass(frozen=True)
class Matrix32:
    """A 2D affine matrix: linear part (a, b, c, d) and translation (tx, ty)."""

    a: float = 0.0
    b: float = 0.0
    c: float = 0.0
    d: float = 0.0
    tx: float = 0.0
    ty: float = 0.0

    @staticmethod
    def zero() -> "Matrix32":
        return Matrix32(0.0, 0.0, 0.0, 0.0, 0.0, 0.0)

    @staticmethod
    def identity() -> "Matrix32":
        return Matrix32(1.0, 0.0, 0.0, 1.0, 0.0, 0.0)

    @staticmethod
    def scaling(sx: float, sy: float) -> "Matrix32":
        return Matrix32(sx, 0.0, 0.0, sy, 0.0, 0.0)

    @staticmethod
    def x_shear(shear: float) -> "Matrix32":
        return Matrix32(1.0, -shear, 0.0, 1.0, 0.0, 0.0)

    @staticmethod
    def y_shear(shear: float) -> "Matrix32":
        return Matrix32(1.0, 0.0, -shear, 1.0, 0.0, 0.0)

    @staticmethod
    def translation(tx: float, ty: float) -> "Matrix32":
        return Matrix32(1.0, 0.0, 0.0, 1.0, tx, ty)


@dataclass(frozen=True)
class Matrix4:
    """A row-major 4x4 matrix; translation lives in the fourth row."""

    m11: float = 0.0
    m12: float = 0.0
    m13: float = 0.0
    m14: float = 0.0
    m21: float = 0.0
    m22: float = 0.0
    m23: float = 0.0
    m24: float = 0.0
    m31: float = 0.0
    m32: float = 0.0
    m33: float = 0.0
    m34: float = 0.0
    m41: float = 0.0
    m42: float = 0.0
    m43: float = 0.0
    m44: float = 0.0

    @staticmethod
    def zero() -> "Matrix4":
        return Matrix4()

    @staticmethod
    def identity() -> "Matrix4":
        return Matrix4(m11=1.0, m22=1.0, m33=1.0, m44=1.0)

    @staticmethod
    def from_transposed(*args: float) -> "Matrix4":
        """Build the transpose of the matrix whose 16 elements are given row by row."""
        if len(args) != 16:
            raise TypeError(f"expected 16 elements, got {len(args)}")
        return Matrix4(*args).transposed()

    @staticmethod
    def scaling(sx: float, sy: float, sz: float) -> "Matrix4":
        return Matrix4(m11=sx, m22=sy, m33=sz, m44=1.0)

    @staticmethod
    def translation(tx: float, ty: float, tz: float) -> "Matrix4":
        return Matrix4(m11=1.0, m22=1.0, m33=1.0, m41=tx, m42=ty, m43=tz, m44=1.0)

    def transposed(self) -> "Matrix4":
        return Matrix4(
            self.m11, self.m21, self.m31, self.m41,
            self.m12, self.m22, self.m32, self.m42,
            self.m13, self.m23, self.m33, self.m43,
            self.m14, self.m24, self.m34, self.m44,
        )


@dataclass(frozen=True)
class Transform2D:
    """Scale, shear, rotation in radians and translation in the plane."""

    sx: float = 0.0
    sy: float = 0.0
    shear_x: float = 0.0
    shear_y: float = 0.0
    rad: float = 0.0
    tx: float = 0.0
    ty: float = 0.0

    @staticmethod
    def zero() -> "Transform2D":
        return Transform2D()

    @staticmethod
    def identity() -> "Transform2D":
        return Transform2D(sx=1.0, sy=1.0)


@dataclass(frozen=True)
class Transform:
    """Scale, rotation about each axis in radians and translation in space."""

    sx: float = 0.0
    sy: float = 0.0
    sz: float = 0.0
    rad_x: float = 0.0
    rad_y: float = 0.0
    rad_z: float = 0.0
    tx: float = 0.0
    ty: float = 0.0
    tz: float = 0.0

    @staticmethod
    def zero() -> "Transform":
        return Transform()

    @staticmethod
    def identity() -> "Transform":
        return Transform(sx=1.0, sy=1.0, sz=1.0)