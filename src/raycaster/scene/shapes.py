"""Vertex builders for simple triangle-mesh shapes.

Every builder returns a list of vertex triples in winding order, ready to be
turned into TriangleInfo objects (SceneManager.add_shape does this and skips
any degenerate triangle). Nothing here touches Taichi.

Conventions:
- quad(p1, p2, p3, p4) splits along the p1-p2 diagonal into (p1, p2, p3)
  and (p1, p2, p4); p1 and p2 must be opposite corners.
- floor_plane is horizontal (constant y) and centered on ``center``.
- cube faces are axis aligned, two triangles per face.
"""

from __future__ import annotations

Point = tuple[float, float, float]
VertexTriple = tuple[Point, Point, Point]


def _add(a: Point, b: Point) -> Point:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def triangle(p1: Point, p2: Point, p3: Point) -> list[VertexTriple]:
    """A single triangle."""
    return [(p1, p2, p3)]


def quad(p1: Point, p2: Point, p3: Point, p4: Point) -> list[VertexTriple]:
    """A quadrilateral given by the diagonal p1-p2 and the other two corners."""
    return [(p1, p2, p3), (p1, p2, p4)]


def floor_plane(center: Point, length: float, width: float) -> list[VertexTriple]:
    """A horizontal length x width rectangle centered on ``center``.

    Args:
        center: Center of the rectangle.
        length: Extent along x.
        width: Extent along z.
    """
    hl = length / 2.0
    hw = width / 2.0
    return quad(
        _add(center, (hl, 0.0, hw)),
        _add(center, (-hl, 0.0, -hw)),
        _add(center, (hl, 0.0, -hw)),
        _add(center, (-hl, 0.0, hw)),
    )


def tetrahedron(p1: Point, p2: Point, p3: Point, apex: Point) -> list[VertexTriple]:
    """A tetrahedron with base (p1, p2, p3) and the given apex."""
    return [
        (p1, p2, apex),
        (p2, p3, apex),
        (p3, p1, apex),
        (p1, p2, p3),
    ]


def cube(center: Point, size: float) -> list[VertexTriple]:
    """An axis-aligned cube with edge length ``size``.

    For each axis and each side, the face is built from four corners where
    the first two are opposite, as quad() expects.
    """
    half = size / 2.0
    # In-face offsets; corners 0 and 1 are diagonally opposite
    corner_offsets = ((-half, -half), (half, half), (half, -half), (-half, half))

    triangles: list[VertexTriple] = []
    for dim in range(3):
        d1, d2 = (i for i in range(3) if i != dim)
        for side in (-1.0, 1.0):
            corners = []
            for ds1, ds2 in corner_offsets:
                diff = [0.0, 0.0, 0.0]
                diff[dim] = side * half
                diff[d1] = ds1
                diff[d2] = ds2
                corners.append(_add(center, (diff[0], diff[1], diff[2])))
            triangles.extend(quad(corners[0], corners[1], corners[2], corners[3]))
    return triangles
