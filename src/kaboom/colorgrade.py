"""
Color grading for the explosion.

Maps the carving depth of a hit point to an emissive fire palette and
applies a single point light. Colors are "hot": channels may exceed 1.0
and are only clamped by the encoder.
"""

from typing import Any, TYPE_CHECKING

import numpy as np

from kaboom.core.vector import Vec3

if TYPE_CHECKING:
    from kaboom.renderer import RenderConfig


# Gradient stops at 0, 0.25, 0.5, 0.75, 1.0
GRAY = (0.4, 0.4, 0.4)
DARK_GRAY = (0.2, 0.2, 0.2)
RED = (1.0, 0.0, 0.0)
ORANGE = (1.0, 0.6, 0.0)
YELLOW = (1.7, 1.3, 1.0)

FIRE_STOPS = (0.0, 0.25, 0.5, 0.75, 1.0)
FIRE_COLORS = (GRAY, DARK_GRAY, RED, ORANGE, YELLOW)

# Shifts the typical carving depth onto the interesting part of the palette.
HEAT_OFFSET = -0.2
HEAT_SCALE = 2.0

AMBIENT = 0.4


def palette_fire(heat: Any) -> Vec3:
    """
    Piecewise-linear gray -> dark gray -> red -> orange -> yellow gradient.

    Args:
        heat: Scalar or array, clamped to [0, 1].

    Returns:
        Vec3 of RGB channels with the shape of ``heat``.
    """
    x = np.clip(heat, 0.0, 1.0)
    return Vec3(*(
        np.interp(x, FIRE_STOPS, [color[channel] for color in FIRE_COLORS])
        for channel in range(3)
    ))


def shade(hit: Vec3, normal: Vec3, config: "RenderConfig") -> Vec3:
    """
    Lit fire color of surface points.

    Args:
        hit: Surface positions.
        normal: Unit normals at ``hit``.
        config: Scene parameters (radius, amplitude, light position).

    Returns:
        Vec3 of unclamped RGB channels.
    """
    heat = (config.sphere_radius - hit.norm()) / config.noise_amplitude
    light_dir = (Vec3(*config.light) - hit).normalized(1.0)
    intensity = np.maximum(AMBIENT, light_dir.dot(normal))
    return palette_fire((HEAT_OFFSET + heat) * HEAT_SCALE) * intensity
