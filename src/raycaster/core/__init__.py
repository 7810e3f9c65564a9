"""Core rendering module.

Components:
    ray: Ray data structure and vector utilities
    runtime: Taichi initialization (double precision, worker threads)
    shading: Shadow rays, half-space check and brightness
    integrator: Per-pixel render loop and frame buffer
    renderer: RenderConfig and the Renderer facade

The render loop casts one primary ray per pixel, takes the nearest triangle
hit, and shades it with ambient plus diffuse light from a single sun with
hard shadows. The loop over pixels is a data-parallel Taichi kernel.
"""

from .ray import (
    FLOAT_EPS,
    Ray,
    cos_angle,
    cross,
    dot,
    is_codirectional,
    is_zero,
    is_zero_scalar,
    length,
    make_ray,
    normalize,
    ray_at,
    ray_between,
    vec3,
)

# Note: shading, integrator and renderer are NOT imported here because they
# declare Taichi fields. Import them after init_runtime():
#   from src.raycaster.core.renderer import Renderer

__all__ = [
    "FLOAT_EPS",
    "Ray",
    "ray_at",
    "make_ray",
    "ray_between",
    "vec3",
    "dot",
    "cross",
    "length",
    "normalize",
    "cos_angle",
    "is_zero",
    "is_zero_scalar",
    "is_codirectional",
]
