"""Deterministic 32-bit random numbers shared by scene setup and sampling."""

from __future__ import annotations

from weekendtracer.vec import Vec3

_MASK32 = 0xFFFFFFFF


def pcg_hash(value: int) -> int:
    """Hash a 32-bit integer to a well-mixed 32-bit integer."""
    state = (value * 747796405 + 2891336453) & _MASK32
    word = (((state >> ((state >> 28) + 4)) ^ state) * 277803737) & _MASK32
    return (word >> 22) ^ word


class Rng:
    """A linear congruential generator over 32-bit unsigned state.

    ``seed`` holds the current state and may be read or stored back.
    """

    __slots__ = ("seed",)

    def __init__(self, seed: int) -> None:
        self.seed = seed & _MASK32

    def next_int(self) -> int:
        """Advance the state and return it."""
        self.seed = (1664525 * self.seed + 1013904223) & _MASK32
        return self.seed

    def next_float(self) -> float:
        """A float in [0, 1) from the low 24 bits of the next state."""
        return (self.next_int() & 0x00FFFFFF) / float(0x01000000)

    def next_vec2(self) -> tuple[float, float]:
        first = self.next_float()
        second = self.next_float()
        return first, second

    def next_vec3(self) -> Vec3:
        x = self.next_float()
        y = self.next_float()
        z = self.next_float()
        return Vec3(x, y, z)