"""
Kaboom: a sphere-traced procedural explosion.
"""

from kaboom.colorgrade import palette_fire, shade
from kaboom.encoder import encode_ppm, write_image
from kaboom.renderer import ExplosionRenderer, RenderConfig, partition_rows

__version__ = "0.1.0"
