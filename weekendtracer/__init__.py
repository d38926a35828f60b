"""CPU path tracer for the random-spheres scene, accelerated by a SAH-built BVH."""

__version__ = "0.1.0"
__all__ = ["__version__"]