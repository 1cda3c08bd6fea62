"""Spheres and planes."""

from __future__ import annotations

from dataclasses import dataclass

from sgraph.vectors import Vector3

__all__ = ["Sphere", "Plane"]


@dataclass(frozen=True)
class Sphere:
    """A sphere given by its centre and radius."""

    origin: Vector3
    radius: float

    def distance(self, other: "Sphere") -> float:
        """Gap between the surfaces; negative when the spheres overlap."""
        return self.origin.distance(other.origin) - (self.radius + other.radius)

    def intersects(self, other: "Sphere") -> bool:
        return self.distance(other) < 0


@dataclass(frozen=True)
class Plane:
    """A plane given by its normal and its distance from the origin."""

    normal: Vector3
    distance: float