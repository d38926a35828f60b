"""Axis-aligned bounding boxes and rays."""

from __future__ import annotations

from dataclasses import dataclass

from weekendtracer.vec import FLT_MAX, Vec3


@dataclass(frozen=True, slots=True)
class AABB:
    """An axis-aligned box given by its lower and upper corners."""

    minimum: Vec3
    maximum: Vec3

    @classmethod
    def empty(cls) -> AABB:
        """A box that any union replaces with the other operand."""
        return cls(Vec3(FLT_MAX, FLT_MAX, FLT_MAX), Vec3(-FLT_MAX, -FLT_MAX, -FLT_MAX))

    @classmethod
    def from_points(cls, a: Vec3, b: Vec3) -> AABB:
        """The box spanned by two opposite corners in any order."""
        return cls(a.min(b), a.max(b))

    def union(self, other: AABB) -> AABB:
        """The smallest box containing both boxes."""
        return AABB(self.minimum.min(other.minimum), self.maximum.max(other.maximum))

    def surface_area(self) -> float:
        dx, dy, dz = self.maximum - self.minimum
        return 2.0 * (dx * dy + dy * dz + dz * dx)

    def center(self) -> Vec3:
        return (self.minimum + self.maximum) * 0.5


@dataclass(frozen=True, slots=True)
class Ray:
    """A half-line from ``origin`` along ``direction``."""

    origin: Vec3
    direction: Vec3

    def point_at(self, t: float) -> Vec3:
        return self.origin + self.direction * t