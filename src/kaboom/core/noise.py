"""
Value noise and layered fractal noise.

Vectorized with numpy: every function accepts scalars or arrays and
returns values in [0, 1).
"""

from typing import Any

import numpy as np

from kaboom.core.vector import Vec3

# Cell-to-seed weights; the eight corners of a small-integer cell map to
# distinct hash inputs.
CELL_WEIGHTS = Vec3(1.0, 57.0, 113.0)

# Offsets of the eight cell corners in seed space, ordered (x, y, z) bits.
_CORNER_OFFSETS = (0.0, 1.0, 57.0, 58.0, 113.0, 114.0, 170.0, 171.0)

# Rows of the basis change applied before layering octaves.
ROTATION = (
    Vec3(0.00, 0.80, 0.60),
    Vec3(-0.80, 0.36, -0.48),
    Vec3(-0.60, -0.48, 0.64),
)

# (weight, frequency multiplier) per octave. Multipliers are cumulative and
# deliberately not powers of two.
OCTAVES = (
    (0.5000, 1.00),
    (0.2500, 2.32),
    (0.1250, 3.03),
    (0.0625, 2.61),
)
OCTAVE_WEIGHT_SUM = sum(weight for weight, _ in OCTAVES)


def hash_noise(n: Any) -> Any:
    """Cheap deterministic scramble of a scalar into [0, 1)."""
    x = np.sin(n) * 43758.5453
    return x - np.floor(x)


def _lerp(v0: Any, v1: Any, t: Any) -> Any:
    return v0 + (v1 - v0) * t


def value_noise(p: Vec3) -> Any:
    """
    Trilinearly interpolated 3D value noise.

    The fractional cell offset is eased with f^2 (3 - 2f) per component,
    so the field is continuous with a continuous first derivative across
    cell faces.
    """
    cell = Vec3(np.floor(p.x), np.floor(p.y), np.floor(p.z))
    fx, fy, fz = (
        f * f * (3.0 - 2.0 * f)
        for f in (p.x - cell.x, p.y - cell.y, p.z - cell.z)
    )
    n = cell.dot(CELL_WEIGHTS)

    c000, c100, c010, c110, c001, c101, c011, c111 = (
        hash_noise(n + offset) for offset in _CORNER_OFFSETS
    )
    return _lerp(
        _lerp(_lerp(c000, c100, fx), _lerp(c010, c110, fx), fy),
        _lerp(_lerp(c001, c101, fx), _lerp(c011, c111, fx), fy),
        fz,
    )


def rotate(p: Vec3) -> Vec3:
    """Move the sample point off the lattice axes."""
    return Vec3(*(row.dot(p) for row in ROTATION))


def fractal_noise(p: Vec3) -> Any:
    """Four octaves of value noise, normalized back into [0, 1)."""
    p = rotate(p)
    total = 0.0
    for weight, frequency in OCTAVES:
        p = p * frequency
        total = total + weight * value_noise(p)
    return total / OCTAVE_WEIGHT_SUM
