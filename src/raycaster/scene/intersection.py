"""Scene-level triangle storage and ray intersection testing.

This module stores every colored triangle of the scene in Taichi fields and
provides the nearest-hit query used for primary rays.

Triangles are kept in a Structure of Arrays layout. The plane of each triangle
is computed on the host when the triangle is added (see TriangleInfo) and
stored next to its vertices, so kernels never recompute it.

Intersection is brute force: every ray is tested against every triangle.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from src.raycaster.geometry.triangle import TriangleInfo
    >>> from src.raycaster.scene.intersection import add_triangle, clear_scene
    >>> clear_scene()
    >>> tri = TriangleInfo.from_points((0, 0, 0), (1, 0, 0), (0, 1, 0))
    >>> add_triangle(tri, color=(255, 0, 0))
    0
    >>> # Use intersect_scene within a Taichi kernel
"""

import taichi as ti

from src.raycaster.core.ray import FLOAT_EPS, Ray, vec3
from src.raycaster.geometry.triangle import Triangle, TriangleInfo, hit_triangle, make_triangle


@ti.dataclass
class SceneHitRecord:
    """Record of the nearest ray-scene intersection.

    Attributes:
        hit: Whether the ray intersected any triangle (1 if hit, 0 if miss).
        t: The ray parameter of the nearest intersection. Only valid if hit == 1.
        index: The index of the hit triangle. -1 on a miss.
    """

    hit: ti.i32
    t: ti.f64
    index: ti.i32


# Maximum number of triangles supported in the scene
MAX_TRIANGLES = 65536

# Triangle storage: Structure of Arrays layout
tri_v0 = ti.Vector.field(3, dtype=ti.f64, shape=MAX_TRIANGLES)
tri_v1 = ti.Vector.field(3, dtype=ti.f64, shape=MAX_TRIANGLES)
tri_v2 = ti.Vector.field(3, dtype=ti.f64, shape=MAX_TRIANGLES)
# Plane coefficients (a, b, c) and d of each triangle
tri_normals = ti.Vector.field(3, dtype=ti.f64, shape=MAX_TRIANGLES)
tri_offsets = ti.field(dtype=ti.f64, shape=MAX_TRIANGLES)
# Base color per triangle, each channel in [0, 255]
tri_colors = ti.Vector.field(3, dtype=ti.i32, shape=MAX_TRIANGLES)
num_triangles = ti.field(dtype=ti.i32, shape=())


def clear_scene() -> None:
    """Clear all triangles from the scene.

    Resets the triangle count to zero. The field data is left in place and
    is overwritten as new triangles are added.
    """
    num_triangles[None] = 0


def add_triangle(triangle: TriangleInfo, color: tuple[int, int, int]) -> int:
    """Add a colored triangle to the scene.

    Args:
        triangle: The triangle, with its plane already computed.
        color: The base color as (R, G, B), each channel in [0, 255].

    Returns:
        The index of the added triangle.

    Raises:
        RuntimeError: If the maximum number of triangles is exceeded.
    """
    idx = num_triangles[None]
    if idx >= MAX_TRIANGLES:
        raise RuntimeError(f"Maximum number of triangles ({MAX_TRIANGLES}) exceeded")
    p1, p2, p3 = triangle.vertices
    tri_v0[idx] = list(p1)
    tri_v1[idx] = list(p2)
    tri_v2[idx] = list(p3)
    tri_normals[idx] = list(triangle.plane.normal)
    tri_offsets[idx] = triangle.plane.d
    tri_colors[idx] = [int(color[0]), int(color[1]), int(color[2])]
    num_triangles[None] = idx + 1
    return idx


def get_triangle_count() -> int:
    """Get the number of triangles in the scene."""
    return int(num_triangles[None])


@ti.func
def load_triangle(i: ti.i32) -> Triangle:
    """Read triangle i from the scene fields."""
    return make_triangle(tri_v0[i], tri_v1[i], tri_v2[i], tri_normals[i], tri_offsets[i])


@ti.func
def get_triangle_color(i: ti.i32) -> vec3:
    """Base color of triangle i as floating point channels in [0, 255]."""
    c = tri_colors[i]
    return vec3(ti.cast(c[0], ti.f64), ti.cast(c[1], ti.f64), ti.cast(c[2], ti.f64))


@ti.func
def _make_miss_record() -> SceneHitRecord:
    """Create a SceneHitRecord indicating no intersection."""
    return SceneHitRecord(hit=0, t=0.0, index=-1)


@ti.func
def intersect_scene(ray: Ray) -> SceneHitRecord:
    """Find the nearest triangle hit by a ray.

    Intersections behind the ray origin (t < -FLOAT_EPS) are discarded. When
    several triangles are hit at exactly the same t, the one added first
    wins.

    Args:
        ray: The ray to trace.

    Returns:
        A SceneHitRecord for the closest intersection, or a miss record.
    """
    result = _make_miss_record()

    n = num_triangles[None]
    for i in range(n):
        rec = hit_triangle(load_triangle(i), ray)
        if rec.hit == 1 and rec.t >= -FLOAT_EPS:
            if result.hit == 0 or rec.t < result.t:
                result = SceneHitRecord(hit=1, t=rec.t, index=i)

    return result
