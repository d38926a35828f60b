"""A tiled multi-threaded CPU renderer producing RGBA images."""

from __future__ import annotations

import math
import os
import time
from concurrent.futures import ThreadPoolExecutor

from PIL import Image

from weekendtracer.camera import Camera
from weekendtracer.raytracing import World, create_world, ray_color
from weekendtracer.rng import Rng, pcg_hash
from weekendtracer.vec import Vec3

_TILE = 16
_MOVE_STEP = Vec3(0.1, 0.0, 0.0)
_MOVE_RESET = 10.0

Pixel = tuple[tuple[int, int], tuple[int, int, int, int]]


def _to_byte(channel: float) -> int:
    scaled = channel * 255.0
    if not scaled >= 0.0:
        return 0
    return int(min(scaled, 255.0))


def _default_camera(aspect_ratio: float) -> Camera:
    return Camera(Vec3(13.0, 2.0, 3.0), Vec3(0.0, 0.0, 0.0), Vec3(0.0, 1.0, 0.0), 20.0, aspect_ratio)


class CpuRenderer:
    """Renders ``world`` through ``camera`` into ``image``, one 16x16 tile per task.

    Every pixel keeps its own random state across frames.
    """

    def __init__(
        self,
        width: int,
        height: int,
        samples_per_pixel: int = 30,
        max_depth: int = 50,
        color_mul: float | None = None,
        world: World | None = None,
        camera: Camera | None = None,
        workers: int | None = None,
    ) -> None:
        if samples_per_pixel < 1:
            raise ValueError("samples_per_pixel must be at least 1")
        if max_depth < 0:
            raise ValueError("max_depth must not be negative")
        self.samples_per_pixel = samples_per_pixel
        self.max_depth = max_depth
        self.color_mul = 1.0 / samples_per_pixel if color_mul is None else color_mul
        self._workers = workers or os.cpu_count() or 1
        self._allocate(width, height)
        self.world = world if world is not None else create_world()
        self.camera = camera if camera is not None else _default_camera(width / height)

    def _allocate(self, width: int, height: int) -> None:
        if width < 1 or height < 1:
            raise ValueError(f"image size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._seeds = [pcg_hash(i) for i in range(width * height)]
        self.image = Image.new("RGBA", (width, height), (0, 0, 0, 255))

    def resize(self, width: int, height: int) -> None:
        """Reallocate the image and per-pixel state and fit the camera to the new shape."""
        self._allocate(width, height)
        self.camera.resize_viewport(width / height)

    def _render_tile(self, tile_x: int, tile_y: int) -> list[Pixel]:
        x_end = min(tile_x + _TILE, self.width)
        y_end = min(tile_y + _TILE, self.height)
        pixel_w = 1.0 / self.width
        pixel_h = 1.0 / self.height
        pixels: list[Pixel] = []
        for y in range(tile_y, y_end):
            for x in range(tile_x, x_end):
                index = y * self.width + x
                rng = Rng(self._seeds[index])
                color = Vec3(0.0, 0.0, 0.0)
                for _ in range(self.samples_per_pixel):
                    u = (x + rng.next_float()) * pixel_w
                    v = 1.0 - (y + rng.next_float()) * pixel_h
                    ray = self.camera.get_ray(u, v)
                    color = color + ray_color(self.world, ray, rng, self.max_depth)
                self._seeds[index] = rng.seed
                color = Vec3(*(math.sqrt(max(c, 0.0)) if not math.isnan(c) else c
                               for c in color * self.color_mul))
                pixels.append(
                    ((x, y), (_to_byte(color.x), _to_byte(color.y), _to_byte(color.z), 255))
                )
        return pixels

    def render(self, move_camera: bool = False) -> float:
        """Render one frame into ``image`` and return the time it took in milliseconds."""
        if move_camera:
            self.camera.move_and_look_at_same_point(_MOVE_STEP, _MOVE_RESET)

        start = time.perf_counter()
        with ThreadPoolExecutor(max_workers=self._workers) as pool:
            futures = [
                pool.submit(self._render_tile, tile_x, tile_y)
                for tile_y in range(0, self.height, _TILE)
                for tile_x in range(0, self.width, _TILE)
            ]
            for future in futures:
                for position, rgba in future.result():
                    self.image.putpixel(position, rgba)
        return (time.perf_counter() - start) * 1000.0