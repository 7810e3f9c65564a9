"""Scene manager for building the set of colored triangles.

The SceneManager is the host-side entry point for scene construction. It
validates each triangle, derives its plane, uploads it to the Taichi scene
fields and keeps a Python-side record of everything added.

Degenerate triangles (collinear vertices) are a per-triangle condition, not a
scene failure: add_surface logs a warning, counts the triangle as skipped and
returns None. Meshes from external sources routinely contain a few of them.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from src.raycaster.scene.manager import SceneManager
    >>> from src.raycaster.scene.shapes import cube
    >>> scene = SceneManager()
    >>> scene.add_surface((0, 0, 0), (1, 0, 0), (0, 1, 0), color=(255, 100, 100))
    0
    >>> scene.add_shape(cube((0.25, 0, -0.8), 1.0), color=(255, 0, 0))
    [1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12]
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from src.raycaster.geometry.plane import CollinearVectorsError
from src.raycaster.geometry.triangle import TriangleInfo
from src.raycaster.scene.intersection import (
    MAX_TRIANGLES,
    add_triangle,
    clear_scene,
    get_triangle_count,
)
from src.raycaster.scene.shapes import Point, VertexTriple

logger = logging.getLogger(__name__)

Color = tuple[int, int, int]


def validate_color(color: Iterable[int]) -> Color:
    """Check that a color has three integer channels in [0, 255].

    Raises:
        ValueError: If the color has the wrong length or a channel is out of range.
    """
    channels = tuple(color)
    if len(channels) != 3:
        raise ValueError(f"Color must have 3 channels, got {len(channels)}")
    for c in channels:
        if int(c) != c or not 0 <= c <= 255:
            raise ValueError(f"Color channels must be integers in [0, 255], got {channels}")
    return (int(channels[0]), int(channels[1]), int(channels[2]))


@dataclass
class SurfaceInfo:
    """Information about a colored triangle in the scene.

    Attributes:
        index: The index in the triangle storage arrays.
        triangle: The triangle with its cached plane.
        color: The base color as (R, G, B).
    """

    index: int
    triangle: TriangleInfo
    color: Color


@dataclass
class SceneConfig:
    """Configuration for scene serialization.

    Attributes:
        surfaces: List of surface configurations, each with ``vertices``
            (three points) and ``color``.
    """

    surfaces: list[dict[str, Any]] = field(default_factory=list)


class SceneManager:
    """Scene manager for colored triangles.

    Attributes:
        surfaces: List of SurfaceInfo for every triangle uploaded.
        skipped: Number of degenerate triangles rejected so far.

    Example:
        >>> scene = SceneManager()
        >>> scene.add_surface((0, 0, 0), (1, 0, 0), (2, 0, 0), (0, 0, 255))  # collinear
        >>> scene.skipped
        1
    """

    def __init__(self) -> None:
        """Initialize an empty scene."""
        self.surfaces: list[SurfaceInfo] = []
        self.skipped = 0
        self._clear_all()

    def _clear_all(self) -> None:
        """Clear all scene data including Taichi fields."""
        clear_scene()
        self.surfaces.clear()
        self.skipped = 0

    def clear(self) -> None:
        """Clear the entire scene."""
        self._clear_all()

    # =========================================================================
    # Surface Management
    # =========================================================================

    def add_surface(
        self,
        p1: Point,
        p2: Point,
        p3: Point,
        color: Color,
    ) -> int | None:
        """Add a colored triangle to the scene.

        Args:
            p1: First vertex.
            p2: Second vertex.
            p3: Third vertex.
            color: The base color as (R, G, B), channels in [0, 255].

        Returns:
            The index of the added triangle, or None if it was degenerate
            and skipped.

        Raises:
            ValueError: If the color is invalid.
            RuntimeError: If the maximum number of triangles is exceeded.
        """
        color = validate_color(color)
        try:
            triangle = TriangleInfo.from_points(p1, p2, p3)
        except CollinearVectorsError as e:
            self.skipped += 1
            logger.warning(f"Skipping degenerate triangle {(p1, p2, p3)}: {e}")
            return None

        index = add_triangle(triangle, color)
        self.surfaces.append(SurfaceInfo(index=index, triangle=triangle, color=color))
        return index

    def add_shape(self, triangles: Iterable[VertexTriple], color: Color) -> list[int]:
        """Add every triangle of a shape with one color.

        Args:
            triangles: Vertex triples, e.g. from the builders in scene.shapes.
            color: The base color as (R, G, B).

        Returns:
            Indices of the triangles that were added (degenerate ones are
            left out).
        """
        indices = []
        for p1, p2, p3 in triangles:
            index = self.add_surface(p1, p2, p3, color)
            if index is not None:
                indices.append(index)
        return indices

    # =========================================================================
    # Scene Queries
    # =========================================================================

    def get_surface_count(self) -> int:
        """Get the number of triangles uploaded to the scene."""
        return get_triangle_count()

    def get_surface(self, index: int) -> SurfaceInfo | None:
        """Get information about a surface by index, or None if not found."""
        if 0 <= index < len(self.surfaces):
            return self.surfaces[index]
        return None

    def get_bounds(self) -> tuple[Point, Point] | None:
        """Axis-aligned bounds (min, max) of all vertices, or None if empty."""
        if not self.surfaces:
            return None
        points = [p for s in self.surfaces for p in s.triangle.vertices]
        lo = tuple(min(p[i] for p in points) for i in range(3))
        hi = tuple(max(p[i] for p in points) for i in range(3))
        return (lo[0], lo[1], lo[2]), (hi[0], hi[1], hi[2])

    # =========================================================================
    # Scene Serialization
    # =========================================================================

    def to_config(self) -> SceneConfig:
        """Export the scene to a configuration object."""
        config = SceneConfig()
        for surface in self.surfaces:
            config.surfaces.append(
                {
                    "vertices": [list(p) for p in surface.triangle.vertices],
                    "color": list(surface.color),
                }
            )
        return config

    def from_config(self, config: SceneConfig) -> None:
        """Load a scene from a configuration object.

        Clears the current scene first. Degenerate triangles are skipped.

        Raises:
            ValueError: If a surface does not have exactly three vertices or
                has an invalid color.
        """
        self.clear()
        for surface_config in config.surfaces:
            vertices = surface_config.get("vertices", [])
            if len(vertices) != 3:
                raise ValueError(f"A surface needs 3 vertices, got {len(vertices)}")
            p1, p2, p3 = (tuple(float(c) for c in v) for v in vertices)
            color = surface_config.get("color", [200, 200, 200])
            self.add_surface(p1, p2, p3, tuple(color))

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization)."""
        return {"surfaces": self.to_config().surfaces}

    def from_dict(self, data: dict[str, Any]) -> None:
        """Load a scene from a dictionary with a 'surfaces' key."""
        self.from_config(SceneConfig(surfaces=data.get("surfaces", [])))

    @staticmethod
    def get_max_surfaces() -> int:
        """Get the maximum number of triangles supported."""
        return MAX_TRIANGLES
