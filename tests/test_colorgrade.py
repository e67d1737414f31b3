"""Tests for the fire palette and shading."""

import numpy as np
import pytest

from kaboom.colorgrade import (
    AMBIENT,
    DARK_GRAY,
    GRAY,
    ORANGE,
    RED,
    YELLOW,
    palette_fire,
    shade,
)
from kaboom.core.vector import Vec3
from kaboom.renderer import RenderConfig


def _rgb(v: Vec3):
    return (float(v.x), float(v.y), float(v.z))


class TestPaletteFire:
    @pytest.mark.parametrize(
        "heat, expected",
        [
            (0.0, GRAY),
            (0.25, DARK_GRAY),
            (0.5, RED),
            (0.75, ORANGE),
            (1.0, YELLOW),
        ],
    )
    def test_stops(self, heat, expected):
        assert _rgb(palette_fire(heat)) == pytest.approx(expected)

    def test_clamped(self):
        assert _rgb(palette_fire(-3.0)) == pytest.approx(GRAY)
        assert _rgb(palette_fire(7.0)) == pytest.approx(YELLOW)

    def test_hot_colors_exceed_one(self):
        color = palette_fire(1.0)
        assert color.x > 1.0
        assert color.y > 1.0

    @pytest.mark.parametrize("boundary", [0.25, 0.5, 0.75])
    def test_continuous_at_band_boundaries(self, boundary):
        eps = 1e-9
        left = _rgb(palette_fire(boundary - eps))
        right = _rgb(palette_fire(boundary + eps))
        assert left == pytest.approx(right, abs=1e-6)

    def test_midband_interpolation(self):
        # Halfway between red and orange
        assert _rgb(palette_fire(0.625)) == pytest.approx((1.0, 0.3, 0.0))

    def test_array_input(self):
        heat = np.linspace(-0.5, 1.5, 11)
        color = palette_fire(heat)
        assert color.x.shape == (11,)
        assert np.all(color.x >= 0.2)
        assert np.all(color.x <= 1.7)


class TestShade:
    def test_lit_facing_light(self):
        config = RenderConfig()
        # Carved 0.45 deep: remapped heat 0.5 -> red
        hit = Vec3(1.05, 0.0, 0.0)
        toward_light = (Vec3(*config.light) - hit).normalized(1.0)
        color = shade(hit, toward_light, config)
        assert _rgb(color) == pytest.approx(RED)

    def test_ambient_floor(self):
        config = RenderConfig()
        hit = Vec3(0.0, 0.0, 1.05)
        away = Vec3(-1.0, -1.0, -1.0).normalized(1.0)
        color = shade(hit, away, config)
        assert _rgb(color) == pytest.approx(tuple(c * AMBIENT for c in RED))

    def test_deeper_is_hotter(self):
        config = RenderConfig()
        normal = Vec3(0.0, 0.0, 1.0)
        shallow = shade(Vec3(0.0, 0.0, 1.4), normal, config)
        deep = shade(Vec3(0.0, 0.0, 0.6), normal, config)
        assert deep.y > shallow.y

    def test_uses_config_light(self):
        hit = Vec3(0.0, 0.0, 1.05)
        normal = Vec3(0.0, 0.0, 1.0)
        front = shade(hit, normal, RenderConfig(light=(0.0, 0.0, 10.0)))
        back = shade(hit, normal, RenderConfig(light=(0.0, 0.0, -10.0)))
        assert front.x > back.x
