"""Plane primitive with ray-plane intersection.

A plane is stored as the coefficients of ``a*x + b*y + c*z + d = 0``. The
vector (a, b, c) is the (unnormalized) cross product of the two in-plane
vectors it was built from, so its orientation follows their order.

Construction happens on the host with NumPy and can fail: two collinear
vectors do not span a plane and raise CollinearVectorsError. Everything used
during rendering is a Taichi function operating on the Plane dataclass.

Example:
    >>> info = PlaneInfo.from_point_and_vectors((0, 0, 0), (1, 0, 0), (0, 0, 1))
    >>> info.substitute((0, 5, 0))
    -5.0
"""

from dataclasses import dataclass

import numpy as np
import taichi as ti

from src.raycaster.core.ray import FLOAT_EPS, Ray, dot, is_zero_scalar, length, normalize, vec3

# Maximum point-to-plane distance for a point to count as lying on the plane
PLANE_DISTANCE_EPS = 1e-6


class CollinearVectorsError(ValueError):
    """Raised when two vectors are collinear and cannot define a plane."""


@ti.dataclass
class Plane:
    """Plane ``dot(normal, p) + d = 0`` for use inside kernels.

    Attributes:
        normal: The coefficients (a, b, c). Not normalized.
        d: The constant term.
    """

    normal: vec3
    d: ti.f64


@ti.dataclass
class HitRecord:
    """Result of a ray-primitive intersection.

    Attributes:
        hit: 1 if the ray intersected the primitive, 0 otherwise.
        t: The ray parameter of the intersection. Only valid if hit == 1.
            May be negative; callers filter with t >= -FLOAT_EPS.
    """

    hit: ti.i32
    t: ti.f64


@dataclass(frozen=True)
class PlaneInfo:
    """Host-side plane coefficients.

    Attributes:
        a: x coefficient.
        b: y coefficient.
        c: z coefficient.
        d: Constant term.
    """

    a: float
    b: float
    c: float
    d: float

    @classmethod
    def from_point_and_vectors(
        cls,
        point: tuple[float, float, float],
        v1: tuple[float, float, float],
        v2: tuple[float, float, float],
    ) -> "PlaneInfo":
        """Build the plane through ``point`` spanned by ``v1`` and ``v2``.

        Args:
            point: Any point on the plane.
            v1: First in-plane vector.
            v2: Second in-plane vector.

        Returns:
            The plane with normal cross(v1, v2).

        Raises:
            CollinearVectorsError: If cross(v1, v2) is the zero vector.
        """
        n = np.cross(np.asarray(v1, dtype=np.float64), np.asarray(v2, dtype=np.float64))
        if np.all(np.abs(n) <= FLOAT_EPS):
            raise CollinearVectorsError(f"Vectors {tuple(v1)} and {tuple(v2)} are collinear")
        p = np.asarray(point, dtype=np.float64)
        return cls(
            a=float(n[0]),
            b=float(n[1]),
            c=float(n[2]),
            d=float(-np.dot(n, p)),
        )

    @property
    def normal(self) -> tuple[float, float, float]:
        """The (unnormalized) coefficient vector (a, b, c)."""
        return (self.a, self.b, self.c)

    def unit_normal(self) -> tuple[float, float, float]:
        """The plane normal scaled to unit length."""
        n = np.array(self.normal)
        n = n / np.linalg.norm(n)
        return (float(n[0]), float(n[1]), float(n[2]))

    def substitute(self, point: tuple[float, float, float]) -> float:
        """Evaluate the plane equation at ``point``.

        The sign tells which side of the plane the point is on; the magnitude
        is the distance scaled by the length of (a, b, c).
        """
        return self.a * point[0] + self.b * point[1] + self.c * point[2] + self.d


# =============================================================================
# Kernel-side operations
# =============================================================================


@ti.func
def plane_subs(plane: Plane, point: vec3) -> ti.f64:
    """Substitute a point into the plane equation."""
    return dot(plane.normal, point) + plane.d


@ti.func
def plane_normal(plane: Plane) -> vec3:
    """The unit normal of the plane."""
    return normalize(plane.normal)


@ti.func
def plane_contains(plane: Plane, point: vec3) -> ti.i32:
    """Check whether a point lies on the plane within PLANE_DISTANCE_EPS."""
    return ti.abs(plane_subs(plane, point)) <= PLANE_DISTANCE_EPS * length(plane.normal)


@ti.func
def intersect_plane(plane: Plane, ray: Ray) -> HitRecord:
    """Intersect a ray (as an infinite line) with a plane.

    Substituting origin + t * direction into the plane equation gives the
    linear equation ``t * dot(n, direction) = -d - dot(n, origin)``.

    Args:
        plane: The plane to intersect.
        ray: The ray to test.

    Returns:
        A HitRecord. hit is 0 when the direction is parallel to the plane
        (including the coplanar case); t is only meaningful when hit is 1.
    """
    denom = dot(plane.normal, ray.direction)
    rhs = -plane.d - dot(plane.normal, ray.origin)

    hit = 0
    t = 0.0
    if not is_zero_scalar(denom):
        hit = 1
        t = rhs / denom
    return HitRecord(hit=hit, t=t)
