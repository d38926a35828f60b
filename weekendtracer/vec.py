"""Three-component float vectors and the optics helpers built on them."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Union

FLT_MAX = 3.4028234663852886e38

Scalar = Union[int, float]
Operand = Union["Vec3", int, float]


def _div(a: float, b: float) -> float:
    """Divide with IEEE semantics: a non-zero value over zero is a signed infinity."""
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


@dataclass(frozen=True, slots=True)
class Vec3:
    """An immutable 3D vector with component-wise arithmetic.

    Scalars mix with vectors the usual way: they apply to every component.
    """

    x: float
    y: float
    z: float

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __getitem__(self, axis: int) -> float:
        if axis == 0:
            return self.x
        if axis == 1:
            return self.y
        if axis == 2:
            return self.z
        raise IndexError(f"axis must be 0, 1 or 2, not {axis!r}")

    @staticmethod
    def _parts(other: Operand) -> tuple[float, float, float]:
        if isinstance(other, Vec3):
            return other.x, other.y, other.z
        if isinstance(other, (int, float)):
            value = float(other)
            return value, value, value
        raise TypeError(f"unsupported operand type: {type(other).__name__}")

    def __add__(self, other: Operand) -> Vec3:
        ox, oy, oz = self._parts(other)
        return Vec3(self.x + ox, self.y + oy, self.z + oz)

    __radd__ = __add__

    def __sub__(self, other: Operand) -> Vec3:
        ox, oy, oz = self._parts(other)
        return Vec3(self.x - ox, self.y - oy, self.z - oz)

    def __rsub__(self, other: Operand) -> Vec3:
        ox, oy, oz = self._parts(other)
        return Vec3(ox - self.x, oy - self.y, oz - self.z)

    def __mul__(self, other: Operand) -> Vec3:
        ox, oy, oz = self._parts(other)
        return Vec3(self.x * ox, self.y * oy, self.z * oz)

    __rmul__ = __mul__

    def __truediv__(self, other: Operand) -> Vec3:
        ox, oy, oz = self._parts(other)
        return Vec3(_div(self.x, ox), _div(self.y, oy), _div(self.z, oz))

    def __rtruediv__(self, other: Operand) -> Vec3:
        ox, oy, oz = self._parts(other)
        return Vec3(_div(ox, self.x), _div(oy, self.y), _div(oz, self.z))

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def dot(self, other: Vec3) -> float:
        """Scalar product."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        """Vector product, right-handed."""
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.dot(self))

    def normalized(self) -> Vec3:
        """Unit vector in the same direction; a zero vector yields NaNs."""
        return self / self.length()

    def min(self, other: Operand) -> Vec3:
        """Component-wise minimum."""
        ox, oy, oz = self._parts(other)
        return Vec3(min(self.x, ox), min(self.y, oy), min(self.z, oz))

    def max(self, other: Operand) -> Vec3:
        """Component-wise maximum."""
        ox, oy, oz = self._parts(other)
        return Vec3(max(self.x, ox), max(self.y, oy), max(self.z, oz))

    def sqrt(self) -> Vec3:
        """Component-wise square root."""
        return Vec3(math.sqrt(self.x), math.sqrt(self.y), math.sqrt(self.z))


def reflect(v: Vec3, n: Vec3) -> Vec3:
    """Mirror ``v`` about the plane whose normal is ``n``."""
    return v - n * (2.0 * v.dot(n))


def schlick(cos_theta: float, ref_idx: float) -> float:
    """Schlick's approximation of Fresnel reflectance."""
    r0 = (1.0 - ref_idx) / (1.0 + ref_idx)
    r0 = r0 * r0
    inv = 1.0 - cos_theta
    return (1.0 - r0) * inv**5 + r0


def refract_branchless(v: Vec3, n: Vec3, eta_ratio: float) -> Vec3:
    """Refract ``v`` through a surface with normal ``n``.

    Under total internal reflection the normal component is dropped instead
    of failing.
    """
    dt = v.dot(n)
    k = 1.0 - eta_ratio * eta_ratio * (1.0 - dt * dt)
    sqrt_k = math.sqrt(max(k, 0.0))
    return (v - n * dt) * eta_ratio - n * sqrt_k