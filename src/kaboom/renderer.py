"""
Frame orchestrator for the explosion renderer.

Splits the image into contiguous row ranges, renders each range in its
own worker process and assembles the blocks into one framebuffer.
Every pixel is computed from immutable scene parameters, so the result
does not depend on the number of workers.
"""

import math
import os
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

import numpy as np

from kaboom.colorgrade import shade
from kaboom.core.field import NOISE_AMPLITUDE, SPHERE_RADIUS, estimate_normal
from kaboom.core.tracer import sphere_trace
from kaboom.core.vector import Vec3


@dataclass(frozen=True)
class RenderConfig:
    """Scene and image parameters for a single frame."""

    width: int = 640
    height: int = 480
    fov: float = math.pi / 3  # radians

    sphere_radius: float = SPHERE_RADIUS
    noise_amplitude: float = NOISE_AMPLITUDE

    # Pinhole camera at ``eye`` looking along -z
    eye: Tuple[float, float, float] = (0.0, 0.0, 3.0)
    light: Tuple[float, float, float] = (10.0, 10.0, 10.0)
    background: Tuple[float, float, float] = (0.2, 0.7, 0.8)

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Image size must be positive, got {self.width}x{self.height}"
            )
        if not 0.0 < self.fov < math.pi:
            raise ValueError(f"Field of view must be in (0, pi), got {self.fov}")
        if not (math.isfinite(self.sphere_radius) and self.sphere_radius > 0):
            raise ValueError(
                f"Sphere radius must be positive and finite, got {self.sphere_radius}"
            )
        if not (math.isfinite(self.noise_amplitude) and self.noise_amplitude > 0):
            raise ValueError(
                f"Noise amplitude must be positive and finite, got {self.noise_amplitude}"
            )

    @property
    def focal_distance(self) -> float:
        """Distance from the eye to the screen plane, in pixels."""
        return self.height / (2.0 * math.tan(self.fov / 2.0))


def partition_rows(height: int, workers: int) -> List[Tuple[int, int]]:
    """
    Split [0, height) into contiguous (start, stop) ranges, one per worker.

    Every range holds ``height // workers`` rows; the last one also takes
    the remainder. The worker count is capped at ``height``.
    """
    if workers < 1:
        raise ValueError(f"Worker count must be at least 1, got {workers}")
    workers = min(workers, height)
    chunk = height // workers

    ranges = []
    for i in range(workers):
        start = i * chunk
        stop = height if i == workers - 1 else start + chunk
        ranges.append((start, stop))
    return ranges


def camera_rays(config: RenderConfig, row: int) -> Vec3:
    """Unit ray directions through the pixel centers of one image row."""
    x = (np.arange(config.width, dtype=np.float64) + 0.5) - config.width / 2.0
    # Screen rows grow downwards, so row 0 is the top of the scene
    y = np.full(config.width, -(row + 0.5) + config.height / 2.0)
    z = np.full(config.width, -config.focal_distance)
    return Vec3(x, y, z).normalized(1.0)


def render_rows(config: RenderConfig, start: int, stop: int) -> np.ndarray:
    """
    Render rows [start, stop) of the frame.

    Rows are traced one at a time so a pixel's value never depends on how
    the frame was partitioned.

    Returns:
        (stop - start, W, 3) float64 RGB block, unclamped.
    """
    eye = Vec3(*config.eye)
    block = np.empty((stop - start, config.width, 3), dtype=np.float64)
    block[:] = config.background

    for j in range(start, stop):
        hit, pos = sphere_trace(
            eye,
            camera_rays(config, j),
            config.sphere_radius,
            config.noise_amplitude,
        )
        if not hit.any():
            continue

        surface = Vec3(pos.x[hit], pos.y[hit], pos.z[hit])
        normal = estimate_normal(
            surface, config.sphere_radius, config.noise_amplitude
        )
        color = shade(surface, normal, config)

        row = block[j - start]
        row[hit, 0] = color.x
        row[hit, 1] = color.y
        row[hit, 2] = color.z

    return block


class ExplosionRenderer:
    """
    Renders the explosion frame across a pool of worker processes.

    Each worker owns a disjoint row range of the framebuffer; the frame is
    returned only once every range has been written.
    """

    def __init__(self, config: Optional[RenderConfig] = None):
        self.cfg = config or RenderConfig()

    def render(
        self,
        workers: Optional[int] = None,
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ) -> np.ndarray:
        """
        Render the full frame.

        Args:
            workers: Number of worker processes (default: CPU count).
                1 renders in the calling process.
            progress_callback: Optional callback(rows_done, total_rows),
                called as each row range completes.

        Returns:
            (H, W, 3) float64 framebuffer, row 0 at the top.
        """
        cfg = self.cfg
        if workers is None:
            workers = os.cpu_count() or 1
        ranges = partition_rows(cfg.height, workers)

        framebuffer = np.empty((cfg.height, cfg.width, 3), dtype=np.float64)
        rows_done = 0

        if len(ranges) == 1:
            framebuffer[:] = render_rows(cfg, 0, cfg.height)
            if progress_callback:
                progress_callback(cfg.height, cfg.height)
            return framebuffer

        with ProcessPoolExecutor(max_workers=len(ranges)) as pool:
            futures = {
                pool.submit(render_rows, cfg, start, stop): (start, stop)
                for start, stop in ranges
            }
            for future in as_completed(futures):
                start, stop = futures[future]
                # Re-raises any worker failure and aborts the frame
                framebuffer[start:stop] = future.result()
                rows_done += stop - start
                if progress_callback:
                    progress_callback(rows_done, cfg.height)

        return framebuffer
