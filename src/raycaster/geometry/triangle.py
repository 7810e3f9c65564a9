"""Triangle primitive with ray-triangle intersection.

A triangle is three ordered vertices plus the plane they span. The plane is
derived once, when the triangle is constructed, and is never recomputed per
ray. Vertex order defines the winding used by the inside test and the sign of
the plane normal, so it is kept exactly as given.

Ray-triangle intersection is a two-step test:
1. Find where the ray crosses the triangle's plane.
2. Check whether that point lies inside the triangle.

The inside test works directly in 3-D. For each edge (v_k -> v_k+1) it takes
cross(p - v_k, v_k+1 - v_k). For a point in the plane these vectors are all
parallel to the normal; the point is inside exactly when none of them points
the opposite way. A point on an edge produces a zero vector for that edge and
counts as inside.

Example:
    >>> info = TriangleInfo.from_points((0, 0, 0), (1, 0, 0), (0, 0, 1))
    >>> info.centroid()
    (0.3333333333333333, 0.0, 0.3333333333333333)
"""

from dataclasses import dataclass

import taichi as ti

from src.raycaster.core.ray import Ray, cross, is_codirectional, ray_at, vec3
from src.raycaster.geometry.plane import (
    HitRecord,
    Plane,
    PlaneInfo,
    intersect_plane,
    plane_contains,
)


@ti.dataclass
class Triangle:
    """A triangle for use inside kernels.

    Attributes:
        v0: First vertex.
        v1: Second vertex.
        v2: Third vertex.
        plane: The plane through v0 spanned by (v1 - v0, v2 - v0).
    """

    v0: vec3
    v1: vec3
    v2: vec3
    plane: Plane


@dataclass(frozen=True)
class TriangleInfo:
    """Host-side triangle with its cached plane.

    Attributes:
        vertices: The three vertices in source order.
        plane: The plane through vertices[0] spanned by the first two edges.
    """

    vertices: tuple[
        tuple[float, float, float],
        tuple[float, float, float],
        tuple[float, float, float],
    ]
    plane: PlaneInfo

    @classmethod
    def from_points(
        cls,
        p1: tuple[float, float, float],
        p2: tuple[float, float, float],
        p3: tuple[float, float, float],
    ) -> "TriangleInfo":
        """Build a triangle from three ordered points.

        Raises:
            CollinearVectorsError: If the points are collinear (zero area).
        """
        p1 = (float(p1[0]), float(p1[1]), float(p1[2]))
        p2 = (float(p2[0]), float(p2[1]), float(p2[2]))
        p3 = (float(p3[0]), float(p3[1]), float(p3[2]))
        edge_a = (p2[0] - p1[0], p2[1] - p1[1], p2[2] - p1[2])
        edge_b = (p3[0] - p1[0], p3[1] - p1[1], p3[2] - p1[2])
        plane = PlaneInfo.from_point_and_vectors(p1, edge_a, edge_b)
        return cls(vertices=(p1, p2, p3), plane=plane)

    def centroid(self) -> tuple[float, float, float]:
        """The arithmetic mean of the three vertices."""
        p1, p2, p3 = self.vertices
        return (
            (p1[0] + p2[0] + p3[0]) / 3.0,
            (p1[1] + p2[1] + p3[1]) / 3.0,
            (p1[2] + p2[2] + p3[2]) / 3.0,
        )


# =============================================================================
# Kernel-side operations
# =============================================================================


@ti.func
def make_triangle(v0: vec3, v1: vec3, v2: vec3, normal: vec3, d: ti.f64) -> Triangle:
    """Assemble a Triangle from vertices and precomputed plane coefficients."""
    return Triangle(v0=v0, v1=v1, v2=v2, plane=Plane(normal=normal, d=d))


@ti.func
def _edge_cross(start: vec3, end: vec3, point: vec3) -> vec3:
    """cross(point - start, end - start) for one triangle edge."""
    return cross(point - start, end - start)


@ti.func
def is_inside(tri: Triangle, point: vec3) -> ti.i32:
    """Check whether a point of the triangle's plane lies inside the triangle.

    Each edge vector is compared against the running sum of the previous
    ones; the first mismatch classifies the point as outside. The point is
    assumed to already lie in the triangle's plane.

    Args:
        tri: The triangle.
        point: A point on the triangle's plane.

    Returns:
        1 if the point is inside or on the boundary, 0 otherwise.
    """
    c0 = _edge_cross(tri.v0, tri.v1, point)
    c1 = _edge_cross(tri.v1, tri.v2, point)
    c2 = _edge_cross(tri.v2, tri.v0, point)

    # Accumulator starts as c0 (the zero vector is codirectional with c0)
    acc = c0
    consistent = 1
    if not is_codirectional(c1, acc):
        consistent = 0
    else:
        acc += c1
        if not is_codirectional(c2, acc):
            consistent = 0
    return consistent


@ti.func
def triangle_contains(tri: Triangle, point: vec3) -> ti.i32:
    """Check whether a point lies on the triangle (its plane and its interior)."""
    result = 0
    if plane_contains(tri.plane, point):
        result = is_inside(tri, point)
    return result


@ti.func
def hit_triangle(tri: Triangle, ray: Ray) -> HitRecord:
    """Test for ray-triangle intersection.

    Args:
        tri: The triangle to test.
        ray: The ray (line) to intersect.

    Returns:
        A HitRecord with hit == 1 and the plane parameter t when the line
        crosses the plane inside the triangle. No range filtering on t is
        applied here.
    """
    did_hit = 0
    hit_t = 0.0

    plane_rec = intersect_plane(tri.plane, ray)
    if plane_rec.hit == 1:
        if is_inside(tri, ray_at(ray, plane_rec.t)):
            did_hit = 1
            hit_t = plane_rec.t

    return HitRecord(hit=did_hit, t=hit_t)
