"""Wavefront OBJ mesh import.

Files are read with trimesh. Only geometry is used: vertex positions and
faces. Polygons are triangulated by trimesh; texture coordinates, normals
and materials are ignored. Loading runs with processing disabled so
vertices are not merged and zero-area faces reach the scene manager,
which skips them with a warning.

load_obj_into_scene adds the mesh to a SceneManager with one color and can
put a floor just below the model so it has something to cast shadows on.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import trimesh

from src.raycaster.core.ray import FLOAT_EPS
from src.raycaster.scene.manager import Color, SceneManager
from src.raycaster.scene.shapes import Point, VertexTriple, floor_plane

logger = logging.getLogger(__name__)

DEFAULT_MESH_COLOR = (255, 100, 100)
DEFAULT_FLOOR_COLOR = (200, 200, 200)


@dataclass
class ObjMesh:
    """Geometry read from an OBJ file.

    Attributes:
        vertices: Vertex positions.
        triangles: Faces as triples of 0-based vertex indices.
    """

    vertices: list[Point] = field(default_factory=list)
    triangles: list[tuple[int, int, int]] = field(default_factory=list)

    def triangle_vertices(self, y_offset: float = 0.0) -> list[VertexTriple]:
        """Resolve faces into vertex triples, shifting every point by y_offset."""
        out = []
        for i, j, k in self.triangles:
            out.append(
                tuple(
                    (self.vertices[n][0], self.vertices[n][1] + y_offset, self.vertices[n][2])
                    for n in (i, j, k)
                )
            )
        return out


def load_obj(filepath: str | Path) -> ObjMesh:
    """Read an OBJ file into an ObjMesh.

    Args:
        filepath: Path to the .obj file.

    Returns:
        The loaded mesh.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file holds no triangle geometry.
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"OBJ file not found: {path}")

    loaded = trimesh.load(path, file_type="obj", force="mesh", process=False)
    if isinstance(loaded, trimesh.Scene):
        if not loaded.geometry:
            raise ValueError(f"No geometry found in {path}")
        loaded = trimesh.util.concatenate(tuple(loaded.geometry.values()))
    if not isinstance(loaded, trimesh.Trimesh) or len(loaded.faces) == 0:
        raise ValueError(f"No triangle faces found in {path}")

    mesh = ObjMesh(
        vertices=[tuple(float(c) for c in v) for v in loaded.vertices.tolist()],
        triangles=[tuple(int(n) for n in f) for f in loaded.faces.tolist()],
    )
    logger.info(
        f"Loaded {path.name}: {len(mesh.vertices)} vertices, {len(mesh.triangles)} triangles"
    )
    return mesh


def load_obj_into_scene(
    scene: SceneManager,
    filepath: str | Path,
    color: Color = DEFAULT_MESH_COLOR,
    y_offset: float = 0.0,
    floor_color: Color | None = DEFAULT_FLOOR_COLOR,
    floor_size: float | None = None,
) -> list[int]:
    """Load an OBJ mesh into a scene, optionally with a floor under it.

    The floor is a horizontal square centered below the origin at
    ``min_y - 2 * FLOAT_EPS``, where min_y is the lowest shifted vertex
    height (never above 0).

    Args:
        scene: The scene to add to.
        filepath: Path to the .obj file.
        color: Color of every mesh triangle.
        y_offset: Vertical shift applied to every vertex.
        floor_color: Floor color, or None for no floor.
        floor_size: Floor edge length. Defaults to twice the largest absolute
            vertex coordinate of the file.

    Returns:
        Indices of all triangles added (degenerate faces are skipped).
    """
    mesh = load_obj(filepath)
    triangles = mesh.triangle_vertices(y_offset)
    indices = scene.add_shape(triangles, color)

    if floor_color is not None:
        min_y = min([0.0] + [p[1] for tri in triangles for p in tri])
        if floor_size is None:
            max_dim = max([0.0] + [abs(c) for p in mesh.vertices for c in p])
            floor_size = 2.0 * max_dim if max_dim > 0.0 else 1.0
        floor = floor_plane((0.0, min_y - 2.0 * FLOAT_EPS, 0.0), floor_size, floor_size)
        indices.extend(scene.add_shape(floor, floor_color))

    return indices
