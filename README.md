# weekendtracer

A small path tracer that renders the "random spheres" scene on the CPU.
The scene has a large ground sphere, a 22 x 22 grid of small spheres placed
at random, and three large feature spheres. The materials are Lambertian,
metal (with fuzz) and dielectric (glass).

Rays are sped up by a bounding volume hierarchy built with the surface area
heuristic. Each frame is rendered in 16 x 16 pixel tiles across a pool of
worker threads. Every pixel keeps its own random state from frame to frame.
The scene layout is fixed: the same seed gives the same spheres every time.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Command line

```
weekendtracer
```

This renders the scene at 1280x720 with 30 samples per pixel and at most 50
bounces, and saves the result as `image.png`. After each frame it logs the
render time to standard output. It then logs whether the save worked. The
exit status is 0 if the image was saved and 1 if it was not.

Options:

- `--width N`, `--height N`: image size in pixels (defaults 1280 and 720)
- `--samples N`: samples per pixel (default 30)
- `--max-depth N`: maximum bounces per path (default 50)
- `--frames N`: number of frames to render (default 1). Every frame keeps
  refining with fresh random samples. Only the last frame is saved.
- `--move-camera`: step the camera along the x axis before each frame, while
  it stays aimed at the same point
- `--output PATH`: where to save the image (default `image.png`). The format
  follows the file extension, as Pillow decides.

Every numeric option must be a positive integer.

## Library use

- `weekendtracer.raytracing.create_world()` returns a `World` that holds the
  `Scene` and its `BVH`.
- `weekendtracer.raytracing.ray_color(world, ray, rng, max_depth=50)` traces
  one path and returns its colour as a `Vec3`. Paths end on the sky, by
  Russian roulette, or when a surface does not scatter.
- `weekendtracer.render.CpuRenderer(width, height, samples_per_pixel=30,
  max_depth=50, color_mul=None, world=None, camera=None, workers=None)`:
  - `render(move_camera=False)` draws one frame into `image`, a Pillow RGBA
    image, and returns the time it took in milliseconds.
  - `resize(width, height)` reallocates the image and the per-pixel state,
    and fits the camera to the new aspect ratio.
  - By default it builds the demo world and a camera looking from
    (13, 2, 3) at the origin with a 20 degree vertical field of view.
- `weekendtracer.bvh.BVH`:
  - `BVH.build(scene)` builds the tree.
  - `traverse(ray, t_min, t_max)` returns the closest `HitRecord` or `None`.
  - `reorder_veb()` lays the nodes out top-down, with each parent before its
    left and then its right subtree, and returns the new root index.
  - `debug_lines(node_index, depth)` returns an indented text description of
    a subtree.
- `weekendtracer.scene.Scene`:
  - `add_sphere`, `add_material`, `intersect_primitive` and `scatter`.
  - Materials are chosen with `MaterialType`.
  - The material at index i belongs to sphere i.
- `weekendtracer.camera.Camera`:
  - `get_ray(u, v)`, `resize_viewport(aspect_ratio)` and
    `move_and_look_at_same_point(offset, reset_point)`.
- `weekendtracer.geometry`:
  - `Ray` and `AABB`.
- `weekendtracer.vec`:
  - `Vec3`, together with `reflect`, `schlick` and `refract_branchless`.
- `weekendtracer.rng`:
  - `Rng`, a 32-bit linear congruential generator.
  - `pcg_hash`.

## What it does not do

- Rendering happens only on the CPU and only in batch mode.
- There is no window and no live preview.
- Keys do nothing: there is no way to switch modes or move the camera
  interactively.
- The scene is always the built-in random-spheres scene. No other scene file
  can be loaded.