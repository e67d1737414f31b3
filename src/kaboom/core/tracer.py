"""
Sphere tracing against the explosion's distance field.

Rays are marched as a batch: each iteration evaluates the field only for
the rays still marching, so the per-ray arithmetic is the same whether a
ray is traced alone or together with thousands of others.
"""

from typing import Tuple

import numpy as np

from kaboom.core.field import NOISE_AMPLITUDE, SPHERE_RADIUS, signed_distance
from kaboom.core.vector import Vec3

MAX_STEPS = 128
STEP_SCALE = 0.1  # fraction of the distance estimate taken per step
MIN_STEP = 0.01  # guarantees progress where the estimate collapses


def sphere_trace(
    origin: Vec3,
    direction: Vec3,
    radius: float = SPHERE_RADIUS,
    amplitude: float = NOISE_AMPLITUDE,
    reject: bool = True,
) -> Tuple[np.ndarray, Vec3]:
    """
    March rays until they cross the surface.

    Args:
        origin: Ray origin, shared or per ray.
        direction: Unit ray directions (floats or arrays).
        radius: Bounding sphere radius of the surface.
        amplitude: Noise amplitude of the surface.
        reject: Skip rays whose line never comes within ``radius`` of the
            center. The surface lies inside that sphere, so this only saves
            work.

    Returns:
        (hit_mask, positions). A hit position is the first sample found
        inside the surface; it can overshoot the true crossing by up to one
        step. Missed rays keep the position where marching stopped.
    """
    shape = np.broadcast_shapes(*(np.shape(c) for c in (*origin, *direction))) or (1,)
    dx, dy, dz, px, py, pz = (
        np.broadcast_to(np.asarray(c, dtype=np.float64), shape).ravel().copy()
        for c in (*direction, *origin)
    )

    hit = np.zeros(dx.shape, dtype=bool)
    active = np.ones(dx.shape, dtype=bool)

    if reject:
        start = Vec3(px, py, pz)
        along = start.dot(Vec3(dx, dy, dz))
        active &= ~(start.dot(start) - along * along > radius * radius)

    for _ in range(MAX_STEPS):
        marching = np.flatnonzero(active)
        if marching.size == 0:
            break

        d = signed_distance(
            Vec3(px[marching], py[marching], pz[marching]), radius, amplitude
        )
        crossed = d < 0
        hit[marching[crossed]] = True
        active[marching[crossed]] = False

        moving = marching[~crossed]
        step = np.maximum(d[~crossed] * STEP_SCALE, MIN_STEP)
        px[moving] += dx[moving] * step
        py[moving] += dy[moving] * step
        pz[moving] += dz[moving] * step

    return hit.reshape(shape), Vec3(
        px.reshape(shape), py.reshape(shape), pz.reshape(shape)
    )


def trace(
    origin: Vec3,
    direction: Vec3,
    radius: float = SPHERE_RADIUS,
    amplitude: float = NOISE_AMPLITUDE,
    reject: bool = True,
) -> Tuple[bool, Vec3]:
    """Trace a single ray; returns (hit, position)."""
    hit, pos = sphere_trace(origin, direction, radius, amplitude, reject)
    return bool(hit.flat[0]), Vec3(
        float(pos.x.flat[0]), float(pos.y.flat[0]), float(pos.z.flat[0])
    )
