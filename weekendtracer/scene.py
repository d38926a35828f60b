"""Spheres, their materials, and ray/sphere hit and scatter logic."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass

from weekendtracer.geometry import AABB, Ray
from weekendtracer.rng import Rng
from weekendtracer.vec import Vec3, reflect, refract_branchless, schlick

_WEIGHT_EPSILON = 1e-6


class MaterialType(enum.Enum):
    """The kinds of surface a sphere can have."""

    LAMBERT = 0
    METAL = 1
    DIELECTRIC = 2

    @property
    def weights(self) -> Vec3:
        """Blend weights for the Lambert, metal and dielectric lobes."""
        if self is MaterialType.LAMBERT:
            return Vec3(1.0, 0.0, 0.0)
        if self is MaterialType.METAL:
            return Vec3(0.0, 1.0, 0.0)
        return Vec3(0.0, 0.0, 1.0)


@dataclass(frozen=True, slots=True)
class _Material:
    albedo: Vec3
    ior: float
    weights: Vec3
    fuzz: float


@dataclass(frozen=True, slots=True)
class HitRecord:
    """Where a ray met a sphere, the outward normal there, and which sphere."""

    location: Vec3
    normal: Vec3
    primitive_index: int
    t: float


@dataclass(frozen=True, slots=True)
class ScatterResult:
    """The bounced ray, the factor to multiply the path throughput by, and
    whether the path continues."""

    ray: Ray
    attenuation: Vec3
    scattered: bool


class Scene:
    """Spheres and their materials; the material at index i belongs to sphere i."""

    def __init__(self) -> None:
        self.centers: list[Vec3] = []
        self.radii: list[float] = []
        self.aabbs: list[AABB] = []
        self.materials: list[_Material] = []

    def __len__(self) -> int:
        return len(self.centers)

    def add_sphere(self, center: Vec3, radius: float) -> int:
        """Append a sphere and its bounding box; return its index."""
        self.centers.append(center)
        self.radii.append(float(radius))
        self.aabbs.append(AABB.from_points(center - radius, center + radius))
        return len(self.centers) - 1

    def add_material(
        self,
        kind: MaterialType,
        albedo: Vec3,
        fuzz: float = 0.0,
        ior: float = 1.0,
    ) -> int:
        """Append a material; return its index."""
        self.materials.append(_Material(albedo, float(ior), kind.weights, float(fuzz)))
        return len(self.materials) - 1

    def intersect_primitive(
        self, ray: Ray, t_min: float, t_max: float, index: int
    ) -> HitRecord | None:
        """The nearest hit with sphere ``index`` strictly inside (t_min, t_max), if any."""
        center = self.centers[index]
        radius = self.radii[index]
        oc = ray.origin - center
        a = ray.direction.dot(ray.direction)
        b = oc.dot(ray.direction)
        c = oc.dot(oc) - radius * radius
        discriminant = b * b - a * c
        if discriminant <= 0.0:
            return None

        sqrt_d = math.sqrt(discriminant)
        t0 = (-b - sqrt_d) / a
        t1 = (-b + sqrt_d) / a
        if t_min < t0 < t_max:
            t = t0
        elif t_min < t1 < t_max:
            t = t1
        else:
            return None
        if t < 0.0:
            return None

        location = ray.point_at(t)
        normal = (location - center) * (1.0 / radius)
        return HitRecord(location, normal, index, t)

    def scatter(self, ray: Ray, record: HitRecord, rng: Rng) -> ScatterResult:
        """Bounce ``ray`` off the surface in ``record`` by its blended material.

        Three random floats are drawn from ``rng``.
        """
        material = self.materials[record.primitive_index]
        weights = material.weights
        sum_w = weights.x + weights.y + weights.z + _WEIGHT_EPSILON
        norm_w = weights / sum_w

        rand3 = rng.next_vec3()
        normal = record.normal
        unit_dir = ray.direction

        lambert_dir = (normal + rand3).normalized()
        metal_dir = (reflect(unit_dir, normal) + rand3 * material.fuzz).normalized()

        front_face = 1.0 if unit_dir.dot(normal) < 0.0 else 0.0
        face_normal = normal * front_face + (-normal) * (1.0 - front_face)
        cos_theta = min((-unit_dir).dot(face_normal), 1.0)
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))
        eta_ratio = front_face * (1.0 / material.ior) + (1.0 - front_face) * material.ior
        cannot_refract = 1.0 if eta_ratio * sin_theta > 1.0 else 0.0
        reflect_prob = cannot_refract + (1.0 - cannot_refract) * schlick(
            cos_theta, material.ior
        )
        is_reflect = 1.0 if rand3.x < reflect_prob else 0.0

        refracted = refract_branchless(unit_dir, face_normal, eta_ratio)
        dielectric_dir = (
            reflect(unit_dir, face_normal) * is_reflect + refracted * (1.0 - is_reflect)
        )

        direction = lambert_dir * norm_w.x + metal_dir * norm_w.y + dielectric_dir * norm_w.z
        new_ray = Ray(record.location, direction.normalized())

        att = material.albedo * (norm_w.x + norm_w.y) + Vec3(1.0, 1.0, 1.0) * norm_w.z
        attenuation = att * sum_w

        scattered = direction.dot(normal) > 0.0 or weights.z > 0.0
        return ScatterResult(new_ray, attenuation, scattered)