"""Core numerics: vector algebra, noise, distance field and sphere tracer."""

from kaboom.core.field import estimate_normal, signed_distance
from kaboom.core.noise import fractal_noise, hash_noise, value_noise
from kaboom.core.tracer import sphere_trace, trace
from kaboom.core.vector import Vec3
