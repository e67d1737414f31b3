"""
3D vector algebra.

``Vec3`` components may be plain floats or equally-shaped float64 arrays,
so the same code evaluates one point or a whole row of points at once.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np


@dataclass(frozen=True)
class Vec3:
    """Immutable 3-component vector."""

    x: Any
    y: Any
    z: Any

    def dot(self, other: "Vec3") -> Any:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def scale(self, s: Any) -> "Vec3":
        return Vec3(self.x * s, self.y * s, self.z * s)

    def add(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def sub(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def norm(self) -> Any:
        return np.sqrt(self.dot(self))

    def normalized(self, length: float = 1.0) -> "Vec3":
        """
        Rescale to the given length.

        A zero vector gives non-finite components; callers never pass one.
        """
        return self.scale(length / self.norm())

    def __add__(self, other: "Vec3") -> "Vec3":
        return self.add(other)

    def __sub__(self, other: "Vec3") -> "Vec3":
        return self.sub(other)

    def __mul__(self, s: Any) -> "Vec3":
        return self.scale(s)

    def __rmul__(self, s: Any) -> "Vec3":
        return self.scale(s)

    def __iter__(self):
        return iter((self.x, self.y, self.z))


def dot(a: Vec3, b: Vec3) -> Any:
    return a.dot(b)


def scale(v: Vec3, s: Any) -> Vec3:
    return v.scale(s)


def add(a: Vec3, b: Vec3) -> Vec3:
    return a.add(b)


def sub(a: Vec3, b: Vec3) -> Vec3:
    return a.sub(b)


def norm(v: Vec3) -> Any:
    return v.norm()


def normalize_to_length(v: Vec3, length: float) -> Vec3:
    return v.normalized(length)
