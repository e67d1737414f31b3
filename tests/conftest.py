"""Pytest configuration and shared fixtures."""

import numpy as np
import pytest

from kaboom.renderer import RenderConfig


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded generator so sampled points are reproducible."""
    return np.random.default_rng(42)


@pytest.fixture
def small_config() -> RenderConfig:
    """
    A thumbnail of the default scene.

    Same camera, light and surface as the full frame, with few enough
    pixels to trace quickly.
    """
    return RenderConfig(width=32, height=24)
