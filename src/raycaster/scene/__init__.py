"""Scene module for triangle storage and scene construction.

Components:
    intersection: Triangle storage in Taichi fields and nearest-hit queries
    manager: SceneManager for adding colored triangles, with degenerate
        triangle rejection and serialization
    shapes: Vertex builders (quad, floor plane, tetrahedron, cube)
    wavefront: OBJ mesh import
    demo: Built-in demo scene

Scene data is organized for kernel access:
    - Structure-of-Arrays layout for vertices, plane coefficients and colors
    - Plane coefficients precomputed on the host when a triangle is added
"""

from .intersection import (
    MAX_TRIANGLES,
    SceneHitRecord,
    add_triangle,
    clear_scene,
    get_triangle_color,
    get_triangle_count,
    intersect_scene,
    load_triangle,
)
from .manager import SceneConfig, SceneManager, SurfaceInfo, validate_color

__all__ = [
    "SceneHitRecord",
    "add_triangle",
    "clear_scene",
    "get_triangle_color",
    "get_triangle_count",
    "intersect_scene",
    "load_triangle",
    "MAX_TRIANGLES",
    "SceneManager",
    "SceneConfig",
    "SurfaceInfo",
    "validate_color",
]
