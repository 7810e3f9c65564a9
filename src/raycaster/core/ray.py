"""Ray data structure and vector utilities for the triangle ray caster.

This module provides the Ray dataclass and the vector algebra used by every
intersection and shading routine. Points and vectors share one type (vec3);
the difference is only in how callers use them.

All functions are Taichi functions (@ti.func) and are meant to be called from
inside kernels. The package runs Taichi with ``default_fp=ti.f64`` so that the
FLOAT_EPS tolerances below remain meaningful.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> origin = vec3(0.0, 0.0, 0.0)
    >>> direction = vec3(0.0, 0.0, -1.0)
    >>> ray = Ray(origin=origin, direction=direction)
    >>> point = ray_at(ray, 5.0)  # Point 5 units along the ray
"""

import taichi as ti
import taichi.math as tm

# Double precision 3-component vector used for both points and directions
vec3 = ti.types.vector(3, ti.f64)

# Absolute tolerance for zero tests and forward-ray checks
FLOAT_EPS = 1e-8


@ti.dataclass
class Ray:
    """A ray (or line) with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction vector of the ray (vec3). Not normalized;
            the length only scales the parameter t.
    """

    origin: vec3
    direction: vec3


@ti.func
def ray_at(ray: Ray, t: ti.f64) -> vec3:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Any real; consumers only accept t >= -FLOAT_EPS.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    return ray.origin + t * ray.direction


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    """Create a ray from origin and direction."""
    return Ray(origin=origin, direction=direction)


@ti.func
def ray_between(start: vec3, end: vec3) -> Ray:
    """Create a ray starting at ``start`` that reaches ``end`` at t = 1."""
    return Ray(origin=start, direction=end - start)


# =============================================================================
# Vector Utility Functions
# =============================================================================


@ti.func
def dot(a: vec3, b: vec3) -> ti.f64:
    """Compute the dot product a . b."""
    return a.x * b.x + a.y * b.y + a.z * b.z


@ti.func
def cross(a: vec3, b: vec3) -> vec3:
    """Compute the cross product a x b."""
    return vec3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


@ti.func
def length(v: vec3) -> ti.f64:
    """Compute the Euclidean length of a vector."""
    return tm.sqrt(dot(v, v))


@ti.func
def is_zero_scalar(f: ti.f64) -> ti.i32:
    """Check if a scalar is within FLOAT_EPS of zero."""
    return ti.abs(f) <= FLOAT_EPS


@ti.func
def is_zero(v: vec3) -> ti.i32:
    """Check if every component of a vector is within FLOAT_EPS of zero.

    Args:
        v: The vector to check.

    Returns:
        1 if the vector is (numerically) the zero vector, 0 otherwise.
    """
    return is_zero_scalar(v.x) and is_zero_scalar(v.y) and is_zero_scalar(v.z)


@ti.func
def normalize(v: vec3) -> vec3:
    """Normalize a vector to unit length.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v, or the zero vector when v
        is zero. Callers that need a real direction must check is_zero first.
    """
    result = vec3(0.0, 0.0, 0.0)
    if not is_zero(v):
        result = v / length(v)
    return result


@ti.func
def cos_angle(a: vec3, b: vec3) -> ti.f64:
    """Cosine of the angle between two non-zero vectors.

    Returns:
        dot(a, b) / (|a| * |b|). The sign follows the vectors' orientation;
        shading takes the absolute value.
    """
    return dot(a, b) / (length(a) * length(b))


@ti.func
def is_codirectional(a: vec3, b: vec3) -> ti.i32:
    """Check whether two vectors point into the same half-space.

    The zero vector is codirectional with every vector, which makes the
    point-in-triangle test inclusive on edges and vertices.

    Returns:
        1 if dot(a, b) >= -FLOAT_EPS, 0 otherwise.
    """
    return dot(a, b) >= -FLOAT_EPS
