"""Geometry module for plane and triangle primitives.

Components:
    plane: Plane coefficients, substitution and ray-plane intersection
    triangle: Triangle with cached plane, inside test and ray-triangle
        intersection

Each primitive has a host-side *Info dataclass, built with NumPy and able to
fail with CollinearVectorsError, and a Taichi dataclass with @ti.func
operations for use in kernels.

Ray-primitive intersection follows the pattern:
    rec = hit_triangle(triangle, ray)   # rec.hit, rec.t
"""

from .plane import (
    PLANE_DISTANCE_EPS,
    CollinearVectorsError,
    HitRecord,
    Plane,
    PlaneInfo,
    intersect_plane,
    plane_contains,
    plane_normal,
    plane_subs,
)
from .triangle import (
    Triangle,
    TriangleInfo,
    hit_triangle,
    is_inside,
    make_triangle,
    triangle_contains,
)

__all__ = [
    "CollinearVectorsError",
    "Plane",
    "PlaneInfo",
    "PLANE_DISTANCE_EPS",
    "intersect_plane",
    "plane_contains",
    "plane_normal",
    "plane_subs",
    "HitRecord",
    "Triangle",
    "TriangleInfo",
    "hit_triangle",
    "is_inside",
    "make_triangle",
    "triangle_contains",
]
