[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "weekendtracer"
version = "0.1.0"
description = "A CPU path tracer that renders the classic random-spheres scene with a surface-area-heuristic BVH."
requires-python = ">=3.10"
keywords = ["ray tracing", "path tracing", "bvh", "rendering", "graphics"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]
dependencies = [
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
weekendtracer = "weekendtracer.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["weekendtracer"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
