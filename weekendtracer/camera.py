"""A pinhole camera that produces primary rays."""

from __future__ import annotations

import math

from weekendtracer.geometry import Ray
from weekendtracer.vec import Vec3


class Camera:
    """A pinhole camera looking from ``origin`` towards ``look_at``."""

    def __init__(
        self,
        look_from: Vec3,
        look_at: Vec3,
        up: Vec3,
        vfov: float,
        aspect_ratio: float,
    ) -> None:
        theta = vfov * math.pi / 180.0
        viewport_height = 2.0 * math.tan(theta / 2.0)
        viewport_width = aspect_ratio * viewport_height

        w = (look_from - look_at).normalized()
        u = up.cross(w).normalized()
        v = w.cross(u)

        self.look_at = look_at
        self.current_offset = look_from.x
        self.original_offset = look_from.x
        self.origin = look_from
        self.horizontal = u * viewport_width
        self.vertical = v * viewport_height
        self._update_corner()

    def _update_corner(self) -> None:
        w = (self.origin - self.look_at).normalized()
        self.lower_left_corner = self.origin - self.horizontal / 2.0 - self.vertical / 2.0 - w

    def resize_viewport(self, aspect_ratio: float) -> None:
        """Rescale the viewport width to a new aspect ratio, keeping its height."""
        width = aspect_ratio * self.vertical.length()
        self.horizontal = self.horizontal.normalized() * width
        self._update_corner()

    def move_and_look_at_same_point(self, offset: Vec3, reset_point: float) -> None:
        """Step the camera back and forth along x while keeping it aimed at ``look_at``.

        The step is added to every component of the origin.
        """
        if self.origin.x > reset_point + self.original_offset:
            self.current_offset = -offset.x
        elif self.origin.x < self.original_offset:
            self.current_offset = offset.x
        self.origin = self.origin + self.current_offset
        self._update_corner()

    def get_ray(self, u: float, v: float) -> Ray:
        """The ray through viewport coordinates (u, v), both in [0, 1]."""
        target = self.lower_left_corner + self.horizontal * u + self.vertical * v
        return Ray(self.origin, target - self.origin)