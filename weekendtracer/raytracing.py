"""The demo scene and the path-tracing estimator for a single ray."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from weekendtracer.bvh import BVH
from weekendtracer.geometry import Ray
from weekendtracer.rng import Rng, pcg_hash
from weekendtracer.scene import MaterialType, Scene
from weekendtracer.vec import FLT_MAX, Vec3

logger = logging.getLogger(__name__)

_WORLD_SEED = 134537
_GRID_RANGE = range(-11, 11)
_SMALL_RADIUS = 0.2
_T_MIN = 0.001
_SKY_TOP = Vec3(0.5, 0.7, 1.0)
_BLACK = Vec3(0.0, 0.0, 0.0)


@dataclass(slots=True)
class World:
    """A scene together with the hierarchy used to trace it."""

    scene: Scene
    bvh: BVH


def create_world() -> World:
    """Build the classic random-spheres scene and its BVH.

    The layout is fixed: the same seed always yields the same spheres.
    """
    scene = Scene()
    rng = Rng(pcg_hash(_WORLD_SEED))

    scene.add_material(MaterialType.LAMBERT, Vec3(0.5, 0.5, 0.5), 0.0, 1.0)
    scene.add_sphere(Vec3(0.0, -1000.0, -1.0), 1000.0)

    for a in _GRID_RANGE:
        for b in _GRID_RANGE:
            choose_mat = rng.next_float()
            off_x = rng.next_float()
            off_z = rng.next_float()
            center = Vec3(a + off_x, 0.2, b + off_z)

            if choose_mat < 0.8:
                r = rng.next_float()
                g = rng.next_float()
                bl = rng.next_float()
                albedo = Vec3(r * r, g * g, bl * bl)
                scene.add_material(MaterialType.LAMBERT, albedo, 0.0, 1.0)
            elif choose_mat < 0.95:
                mr = rng.next_float()
                mg = rng.next_float()
                mb = rng.next_float()
                metal_col = Vec3(0.5 * (1.0 + mr), 0.5 * (1.0 + mg), 0.5 * (1.0 + mb))
                fuzz = 0.5 * rng.next_float()
                scene.add_material(MaterialType.METAL, metal_col, fuzz, 1.0)
            else:
                scene.add_material(MaterialType.DIELECTRIC, Vec3(1.0, 1.0, 1.0), 0.0, 1.5)

            scene.add_sphere(center, _SMALL_RADIUS)

    scene.add_material(MaterialType.DIELECTRIC, Vec3(1.0, 1.0, 1.0), 0.0, 1.5)
    scene.add_sphere(Vec3(0.0, 1.0, 0.0), 1.0)

    scene.add_material(MaterialType.LAMBERT, Vec3(0.4, 0.2, 0.1), 0.0, 1.0)
    scene.add_sphere(Vec3(-4.0, 1.0, 0.0), 1.0)

    scene.add_material(MaterialType.METAL, Vec3(0.7, 0.6, 0.5), 0.0, 1.0)
    scene.add_sphere(Vec3(4.0, 1.0, 0.0), 1.0)

    bvh = BVH.build(scene)
    logger.info("CPU BVH constructed with %d nodes.", len(bvh))
    logger.info("CPU BVH Root: %d", bvh.root)
    return World(scene, bvh)


def ray_color(world: World, ray: Ray, rng: Rng, max_depth: int = 50) -> Vec3:
    """Estimate the radiance arriving along ``ray``.

    Paths are cut short by Russian roulette; a path that runs past
    ``max_depth`` bounces returns its remaining throughput.
    """
    attenuation = Vec3(1.0, 1.0, 1.0)
    current = ray

    for _ in range(max_depth):
        hit = world.bvh.traverse(current, _T_MIN, FLT_MAX)
        if hit is None:
            t = 0.5 * (current.direction.y + 1.0)
            return attenuation * ((1.0 - t) + _SKY_TOP * t)

        rr_prob = max(attenuation.x, attenuation.y, attenuation.z)
        if rng.next_float() > rr_prob:
            return _BLACK
        attenuation = attenuation / rr_prob

        result = world.scene.scatter(current, hit, rng)
        attenuation = attenuation * result.attenuation
        current = result.ray
        if not result.scattered:
            return _BLACK

    return attenuation