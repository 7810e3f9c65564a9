"""Grid camera for primary ray generation.

The camera shoots one ray per pixel from the eye position through a square
grid of points centered on a look-at point (the world origin by default).

The grid has its own 2-D basis, derived from the eye vector
(eye - look_at) and the world up axis:
- local_x = normalize(cross(eye_vector, up))
- local_y = normalize(cross(eye_vector, local_x))

A pixel (row, col) of a width x height image is mapped to
``u = 2 * col / width - 1`` and ``v = 2 * row / height - 1`` and targets the
grid point ``look_at + grid_size * (u * local_x + v * local_y)``. Columns move
along local_x and rows along local_y, which keeps the image upright in the
conventional row-major orientation. grid_size therefore controls the field of
view.

When the eye vector is parallel to the up axis (a straight top-down view) the
basis is undefined; setup_camera rejects that configuration once, before any
ray is generated.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from src.raycaster.camera.grid import GridCamera, setup_camera, get_ray
    >>> setup_camera(GridCamera(eye=(-5.0, 70.0, 0.0), grid_size=40.0))
    >>>
    >>> @ti.kernel
    ... def render():
    ...     ray = get_ray(250, 250, 500, 500)  # Ray through the grid center
"""

from dataclasses import dataclass

import numpy as np
import taichi as ti

from src.raycaster.core.ray import FLOAT_EPS, Ray, make_ray, vec3


class DegenerateCameraError(ValueError):
    """Raised when the camera basis cannot be built from the eye vector."""


@dataclass
class GridCamera:
    """Configuration for the grid camera.

    Attributes:
        eye: Camera position in world space (x, y, z).
        grid_size: Half-extent of the viewing grid; larger values widen
            the field of view.
        look_at: Center of the viewing grid (default: world origin).
        up: World up direction (default: +y).
    """

    eye: tuple[float, float, float]
    grid_size: float
    look_at: tuple[float, float, float] = (0.0, 0.0, 0.0)
    up: tuple[float, float, float] = (0.0, 1.0, 0.0)


# =============================================================================
# Taichi Fields for Camera State
# =============================================================================

_camera_origin = ti.Vector.field(3, dtype=ti.f64, shape=())
_grid_center = ti.Vector.field(3, dtype=ti.f64, shape=())
_local_x = ti.Vector.field(3, dtype=ti.f64, shape=())
_local_y = ti.Vector.field(3, dtype=ti.f64, shape=())
_grid_size = ti.field(dtype=ti.f64, shape=())


def _normalized(v: np.ndarray) -> np.ndarray:
    """Normalize a host-side vector, rejecting the zero vector."""
    if np.all(np.abs(v) <= FLOAT_EPS):
        raise DegenerateCameraError(
            "Eye vector is parallel to the up axis; the viewing grid is undefined"
        )
    return v / np.linalg.norm(v)


def setup_camera(camera: GridCamera) -> None:
    """Initialize camera state from configuration.

    Computes the grid basis on the host and writes it into Taichi fields.
    Must be called before rendering and again whenever the eye moves.

    Args:
        camera: Camera configuration.

    Raises:
        DegenerateCameraError: If the eye coincides with the look-at point or
            the eye vector is parallel to the up axis.
        ValueError: If grid_size is not positive.
    """
    if camera.grid_size <= 0.0:
        raise ValueError(f"grid_size must be positive, got {camera.grid_size}")

    eye = np.array(camera.eye, dtype=np.float64)
    look_at = np.array(camera.look_at, dtype=np.float64)
    up = np.array(camera.up, dtype=np.float64)

    eye_vector = eye - look_at
    if np.all(np.abs(eye_vector) <= FLOAT_EPS):
        raise DegenerateCameraError("Eye position coincides with the look-at point")

    local_x = _normalized(np.cross(eye_vector, up))
    local_y = _normalized(np.cross(eye_vector, local_x))

    _camera_origin[None] = eye.tolist()
    _grid_center[None] = look_at.tolist()
    _local_x[None] = local_x.tolist()
    _local_y[None] = local_y.tolist()
    _grid_size[None] = float(camera.grid_size)


# =============================================================================
# Ray Generation (Taichi-compatible)
# =============================================================================


@ti.func
def interpolate(cur: ti.i32, extent: ti.i32) -> ti.f64:
    """Map a pixel index in [0, extent) linearly onto [-1, 1)."""
    return 2.0 * (ti.cast(cur, ti.f64) / ti.cast(extent, ti.f64)) - 1.0


@ti.func
def get_ray(row: ti.i32, col: ti.i32, width: ti.i32, height: ti.i32) -> Ray:
    """Generate the primary ray for pixel (row, col).

    Args:
        row: Pixel row (0 = top).
        col: Pixel column (0 = left).
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        A Ray from the eye toward the pixel's grid point. The direction is
        not normalized: t = 1 lands exactly on the grid.
    """
    u = interpolate(col, width)
    v = interpolate(row, height)
    target = _grid_center[None] + _grid_size[None] * (u * _local_x[None] + v * _local_y[None])
    origin = _camera_origin[None]
    return make_ray(origin, target - origin)


@ti.func
def get_camera_origin() -> vec3:
    """Get the eye position in world space."""
    return _camera_origin[None]


# =============================================================================
# Utility Functions
# =============================================================================


def get_camera_info() -> dict[str, tuple[float, float, float]]:
    """Get current camera state for debugging.

    Returns:
        Dictionary with origin, center, local_x and local_y vectors.
    """
    info = {}
    for name, f in (
        ("origin", _camera_origin),
        ("center", _grid_center),
        ("local_x", _local_x),
        ("local_y", _local_y),
    ):
        vec = f[None]
        info[name] = (float(vec[0]), float(vec[1]), float(vec[2]))
    return info
