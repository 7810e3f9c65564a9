"""Unit tests for the shape builders.

The shapes module itself has no Taichi state, but importing it goes through
the scene package, so imports stay inside the tests like elsewhere.
"""

import pytest


class TestShapes:
    """Tests for vertex builders (no Taichi needed)."""

    def test_triangle(self):
        """Test triangle wraps its vertices unchanged."""
        from src.raycaster.scene.shapes import triangle

        assert triangle((0, 0, 0), (1, 0, 0), (0, 1, 0)) == [((0, 0, 0), (1, 0, 0), (0, 1, 0))]

    def test_quad_splits_on_first_diagonal(self):
        """Test both halves share the p1-p2 diagonal."""
        from src.raycaster.scene.shapes import quad

        a, b, c, d = (0, 0, 0), (1, 1, 0), (1, 0, 0), (0, 1, 0)
        assert quad(a, b, c, d) == [(a, b, c), (a, b, d)]

    def test_floor_plane_is_horizontal(self):
        """Test the floor is flat at the center height and has the given extent."""
        from src.raycaster.scene.shapes import floor_plane

        tris = floor_plane((1.0, -2.0, 3.0), 4.0, 6.0)
        points = [p for t in tris for p in t]
        assert len(tris) == 2
        assert all(p[1] == -2.0 for p in points)
        assert min(p[0] for p in points) == pytest.approx(-1.0)
        assert max(p[0] for p in points) == pytest.approx(3.0)
        assert min(p[2] for p in points) == pytest.approx(0.0)
        assert max(p[2] for p in points) == pytest.approx(6.0)

    def test_tetrahedron_faces(self):
        """Test a tetrahedron has four faces, three through the apex."""
        from src.raycaster.scene.shapes import tetrahedron

        apex = (0.0, 1.0, 1.25)
        tris = tetrahedron((-1, 0, 0.25), (1, 0, 0.25), (-1, 0, 2.25), apex)
        assert len(tris) == 4
        assert sum(apex in t for t in tris) == 3

    def test_cube_has_twelve_non_degenerate_triangles(self):
        """Test every cube face splits into two proper triangles."""
        from src.raycaster.geometry.triangle import TriangleInfo
        from src.raycaster.scene.shapes import cube

        tris = cube((0.25, 0.51, -0.8), 1.0)
        assert len(tris) == 12
        for p1, p2, p3 in tris:
            TriangleInfo.from_points(p1, p2, p3)

    def test_cube_extent(self):
        """Test the cube spans size along every axis around its center."""
        from src.raycaster.scene.shapes import cube

        tris = cube((1.0, 2.0, 3.0), 2.0)
        points = [p for t in tris for p in t]
        for axis, c in enumerate((1.0, 2.0, 3.0)):
            assert min(p[axis] for p in points) == pytest.approx(c - 1.0)
            assert max(p[axis] for p in points) == pytest.approx(c + 1.0)

    def test_cube_faces_lie_on_cube_surface(self):
        """Test each triangle lies in one face plane."""
        from src.raycaster.scene.shapes import cube

        half = 0.5
        for tri in cube((0.0, 0.0, 0.0), 1.0):
            on_face = [
                all(abs(abs(p[axis]) - half) < 1e-12 for p in tri)
                and len({p[axis] for p in tri}) == 1
                for axis in range(3)
            ]
            assert any(on_face)
