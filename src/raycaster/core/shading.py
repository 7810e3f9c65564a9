"""Local illumination: shadow rays, half-space check and brightness.

The scene is lit by a single sun, modeled as a point, plus a constant ambient
term. For a hit point on a triangle:

1. Half-space check. The triangle's plane equation is evaluated at the eye and
   at the sun. If the product is <= 0 they are on different sides (or one of
   them lies in the plane): the eye sees the unlit face, so only ambient
   light applies.
2. Shadow test. A ray from the hit point toward the sun is tested against
   every other triangle. Any intersection with t >= -FLOAT_EPS puts the point
   in shadow. The hit triangle and any triangle that contains the hit point
   (neighbors sharing the edge or vertex) are skipped.
3. Brightness. Ambient when back-facing or shadowed, otherwise
   ``(1 - diffuse) + |cos(sun_direction, normal)| * diffuse``.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from src.raycaster.core.shading import Lighting, setup_lighting
    >>> setup_lighting(Lighting(sun=(-80.0, 150.0, 80.0), ambient_light=0.4, diffuse_light=0.2))
"""

from dataclasses import dataclass

import taichi as ti

from src.raycaster.camera.grid import get_camera_origin
from src.raycaster.core.ray import FLOAT_EPS, cos_angle, ray_between, vec3
from src.raycaster.geometry.plane import plane_normal, plane_subs
from src.raycaster.geometry.triangle import Triangle, hit_triangle, triangle_contains
from src.raycaster.scene.intersection import load_triangle, num_triangles


@dataclass
class Lighting:
    """Light configuration.

    Attributes:
        sun: Position of the sun in world space (x, y, z).
        ambient_light: Brightness of unlit points, in [0, 1].
        diffuse_light: Weight of the orientation-dependent term, in [0, 1].
    """

    sun: tuple[float, float, float]
    ambient_light: float = 0.4
    diffuse_light: float = 0.2


# =============================================================================
# Light Fields
# =============================================================================

_sun = ti.Vector.field(3, dtype=ti.f64, shape=())
_ambient_light = ti.field(dtype=ti.f64, shape=())
_diffuse_light = ti.field(dtype=ti.f64, shape=())


def setup_lighting(lighting: Lighting) -> None:
    """Write the light configuration into Taichi fields.

    Args:
        lighting: The light configuration.

    Raises:
        ValueError: If ambient_light or diffuse_light is outside [0, 1].
    """
    if not 0.0 <= lighting.ambient_light <= 1.0:
        raise ValueError(f"ambient_light must be in [0, 1], got {lighting.ambient_light}")
    if not 0.0 <= lighting.diffuse_light <= 1.0:
        raise ValueError(f"diffuse_light must be in [0, 1], got {lighting.diffuse_light}")

    _sun[None] = [float(c) for c in lighting.sun]
    _ambient_light[None] = float(lighting.ambient_light)
    _diffuse_light[None] = float(lighting.diffuse_light)


def get_lighting_info() -> dict[str, object]:
    """Get current light state for debugging."""
    sun = _sun[None]
    return {
        "sun": (float(sun[0]), float(sun[1]), float(sun[2])),
        "ambient_light": float(_ambient_light[None]),
        "diffuse_light": float(_diffuse_light[None]),
    }


# =============================================================================
# Shading (Taichi-compatible)
# =============================================================================


@ti.func
def is_back_facing(tri: Triangle, eye: vec3, sun: vec3) -> ti.i32:
    """Check whether the eye and the sun are on different sides of a triangle.

    Returns:
        1 if subs(eye) * subs(sun) <= 0, 0 otherwise.
    """
    return plane_subs(tri.plane, eye) * plane_subs(tri.plane, sun) <= 0.0


@ti.func
def is_in_shadow(point: vec3, hit_index: ti.i32, sun: vec3) -> ti.i32:
    """Check whether any triangle blocks the way from a point to the sun.

    Args:
        point: The point being shaded.
        hit_index: The triangle the point lies on; it never shadows itself.
        sun: The sun position.

    Returns:
        1 if the point is in shadow, 0 otherwise.
    """
    sun_ray = ray_between(point, sun)
    covered = 0

    n = num_triangles[None]
    for i in range(n):
        if covered == 0 and i != hit_index:
            tri = load_triangle(i)
            if not triangle_contains(tri, point):
                rec = hit_triangle(tri, sun_ray)
                if rec.hit == 1 and rec.t >= -FLOAT_EPS:
                    covered = 1

    return covered


@ti.func
def compute_brightness(hit_index: ti.i32, point: vec3) -> ti.f64:
    """Brightness factor in [0, 1] for a point on triangle hit_index.

    Args:
        hit_index: Index of the triangle that was hit.
        point: The hit point on that triangle.

    Returns:
        The ambient level when the point is back-facing or shadowed,
        otherwise the diffuse blend.
    """
    tri = load_triangle(hit_index)
    sun = _sun[None]
    diffuse = _diffuse_light[None]

    brightness = _ambient_light[None]
    if not is_back_facing(tri, get_camera_origin(), sun):
        if not is_in_shadow(point, hit_index, sun):
            cos_theta = ti.abs(cos_angle(sun - point, plane_normal(tri.plane)))
            brightness = (1.0 - diffuse) + cos_theta * diffuse

    return brightness
