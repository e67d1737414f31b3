"""
Signed distance field of the explosion and its surface normal.
"""

from typing import Any

from kaboom.core.noise import fractal_noise
from kaboom.core.vector import Vec3

SPHERE_RADIUS = 1.5  # the whole explosion fits in this origin-centered sphere
NOISE_AMPLITUDE = 1.0  # how deep the noise carves towards the center
NOISE_FREQUENCY = 3.4

# Forward-difference step; smaller picks up the noise's own detail,
# larger blurs the surface.
NORMAL_EPS = 0.1


def signed_distance(
    p: Vec3,
    radius: float = SPHERE_RADIUS,
    amplitude: float = NOISE_AMPLITUDE,
) -> Any:
    """
    Signed distance from ``p`` to the explosion surface.

    Noise is non-negative, so the displacement only ever carves inward and
    the surface stays inside ``radius``.
    """
    displacement = -fractal_noise(p * NOISE_FREQUENCY) * amplitude
    return p.norm() - (radius + displacement)


def estimate_normal(
    p: Vec3,
    radius: float = SPHERE_RADIUS,
    amplitude: float = NOISE_AMPLITUDE,
) -> Vec3:
    """Unit surface normal from forward differences of the distance field."""
    d = signed_distance(p, radius, amplitude)
    nx = signed_distance(p + Vec3(NORMAL_EPS, 0.0, 0.0), radius, amplitude) - d
    ny = signed_distance(p + Vec3(0.0, NORMAL_EPS, 0.0), radius, amplitude) - d
    nz = signed_distance(p + Vec3(0.0, 0.0, NORMAL_EPS), radius, amplitude) - d
    return Vec3(nx, ny, nz).normalized(1.0)
