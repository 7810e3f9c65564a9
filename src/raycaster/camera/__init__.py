"""Camera module for primary ray generation.

Components:
    grid: Grid camera; one ray per pixel from the eye through a square grid
        centered on the look-at point

Pixel coordinates are (row, col) with row 0 at the top of the image. Both
axes are mapped linearly onto [-1, 1) across the grid.
"""

from .grid import (
    DegenerateCameraError,
    GridCamera,
    get_camera_info,
    get_camera_origin,
    get_ray,
    interpolate,
    setup_camera,
)

__all__ = [
    "DegenerateCameraError",
    "GridCamera",
    "setup_camera",
    "get_ray",
    "get_camera_origin",
    "get_camera_info",
    "interpolate",
]
