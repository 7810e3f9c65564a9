"""Render loop: one primary ray per pixel, nearest hit, local shading.

For every pixel the integrator generates the camera ray, finds the nearest
triangle along it, computes the brightness of the hit point and writes the
triangle's color scaled by that brightness into the frame buffer. Pixels
whose ray hits nothing get BACKGROUND_COLOR.

The sweep over the image is the outermost loop of a Taichi kernel, which
Taichi splits across its worker threads. Each iteration reads only the scene,
camera and light fields and writes exactly one frame buffer cell, so the
result does not depend on thread count or scheduling. A serialized variant of
the kernel is provided to check exactly that.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from src.raycaster.core.integrator import (
    ...     render_image, setup_render_target, get_image_numpy
    ... )
    >>> setup_render_target(500, 500)
    >>> render_image()
    >>> image = get_image_numpy()  # (500, 500, 3) uint8
"""

import numpy as np
import numpy.typing as npt
import taichi as ti

from src.raycaster.camera.grid import get_ray
from src.raycaster.core.ray import ray_at, vec3
from src.raycaster.core.shading import compute_brightness
from src.raycaster.scene.intersection import get_triangle_color, intersect_scene

# 8-bit RGB triple as returned by kernels
color3 = ti.types.vector(3, ti.i32)

# =============================================================================
# Rendering Constants
# =============================================================================

# Color written where the primary ray hits nothing
BACKGROUND_COLOR = (30, 30, 30)

# =============================================================================
# Render Target (Frame Buffer)
# =============================================================================

# Maximum supported image dimensions (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

# Image dimensions (actual active size)
_image_width = ti.field(dtype=ti.i32, shape=())
_image_height = ti.field(dtype=ti.i32, shape=())

# Frame buffer indexed [row, col], row-major like the exported image
_frame_buffer = ti.Vector.field(3, dtype=ti.u8, shape=(MAX_IMAGE_HEIGHT, MAX_IMAGE_WIDTH))

# Flag to track if render target is initialized
_render_target_initialized = ti.field(dtype=ti.i32, shape=())


def setup_render_target(width: int, height: int) -> None:
    """Initialize the frame buffer.

    Sets the active image dimensions and clears the buffer. The buffer is
    preallocated to MAX_IMAGE_HEIGHT x MAX_IMAGE_WIDTH.

    Args:
        width: Image width in pixels (1..MAX_IMAGE_WIDTH).
        height: Image height in pixels (1..MAX_IMAGE_HEIGHT).

    Raises:
        ValueError: If dimensions are not positive or exceed the maximum.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )

    _image_width[None] = width
    _image_height[None] = height
    _render_target_initialized[None] = 1

    clear_render_target()


def clear_render_target() -> None:
    """Clear the frame buffer to zero."""
    _frame_buffer.fill(0)


def get_image_dimensions() -> tuple[int, int]:
    """Get the current render target dimensions.

    Returns:
        Tuple of (width, height).
    """
    return int(_image_width[None]), int(_image_height[None])


def _check_render_target_initialized() -> None:
    """Check if render target is initialized and raise if not."""
    if _render_target_initialized[None] == 0:
        raise RuntimeError("Render target not set up. Call setup_render_target() first.")


# =============================================================================
# Ray Casting Core
# =============================================================================


@ti.func
def _background() -> color3:
    return color3(
        ti.static(BACKGROUND_COLOR[0]),
        ti.static(BACKGROUND_COLOR[1]),
        ti.static(BACKGROUND_COLOR[2]),
    )


@ti.func
def shade_color(base: vec3, brightness: ti.f64) -> color3:
    """Scale a base color by brightness and truncate into [0, 255]."""
    out = color3(0, 0, 0)
    for c in ti.static(range(3)):
        out[c] = ti.cast(ti.min(ti.max(base[c] * brightness, 0.0), 255.0), ti.i32)
    return out


@ti.func
def render_pixel_impl(row: ti.i32, col: ti.i32, width: ti.i32, height: ti.i32) -> color3:
    """Compute the color of one pixel.

    Args:
        row: Pixel row (0 = top).
        col: Pixel column (0 = left).
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        The 8-bit RGB color of the pixel.
    """
    ray = get_ray(row, col, width, height)
    rec = intersect_scene(ray)

    color = _background()
    if rec.hit == 1:
        brightness = compute_brightness(rec.index, ray_at(ray, rec.t))
        color = shade_color(get_triangle_color(rec.index), brightness)
    return color


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_parallel(width: ti.i32, height: ti.i32):
    """Render every pixel, parallelized across Taichi's CPU threads."""
    for row, col in ti.ndrange(height, width):
        _frame_buffer[row, col] = ti.cast(render_pixel_impl(row, col, width, height), ti.u8)


@ti.kernel
def _render_serial(width: ti.i32, height: ti.i32):
    """Render every pixel on a single thread, in row-major order."""
    ti.loop_config(serialize=True)
    for row, col in ti.ndrange(height, width):
        _frame_buffer[row, col] = ti.cast(render_pixel_impl(row, col, width, height), ti.u8)


@ti.kernel
def _render_single_pixel(row: ti.i32, col: ti.i32, width: ti.i32, height: ti.i32) -> color3:
    """Render one pixel without touching the frame buffer."""
    return render_pixel_impl(row, col, width, height)


# =============================================================================
# Public Rendering API
# =============================================================================


def render_image(serial: bool = False) -> None:
    """Render the full image into the frame buffer.

    Args:
        serial: If True, run the sweep on a single thread. The output is
            identical to the parallel sweep; this exists for verification
            and debugging.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    if serial:
        _render_serial(width, height)
    else:
        _render_parallel(width, height)


def render_pixel(row: int, col: int) -> tuple[int, int, int]:
    """Render a single pixel and return its color.

    This is a Python-callable function for testing. For production rendering,
    use render_image() which processes all pixels in parallel.

    Args:
        row: Pixel row (0 = top).
        col: Pixel column (0 = left).

    Returns:
        Tuple of (R, G, B) channel values in [0, 255].

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    color = _render_single_pixel(row, col, width, height)
    return (int(color[0]), int(color[1]), int(color[2]))


def get_image_numpy() -> npt.NDArray[np.uint8]:
    """Get the rendered image as a NumPy array.

    Returns:
        Array of shape (height, width, 3) with dtype uint8, row-major with
        row 0 at the top.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    full_image = _frame_buffer.to_numpy()
    return np.ascontiguousarray(full_image[:height, :width, :], dtype=np.uint8)
