"""Unit tests for the triangle primitive.

Tests cover:
- Host-side construction and degenerate triangle rejection
- Inside test for vertices, edges, centroid and outside points
- Ray-triangle intersection (hit, miss, parallel, behind origin)
"""

import pytest
import taichi as ti


class TestTriangleInfo:
    """Tests for host-side triangle construction."""

    def test_from_points_keeps_order(self):
        """Test vertices are stored in the given order."""
        from src.raycaster.geometry.triangle import TriangleInfo

        info = TriangleInfo.from_points((0, 0, 0), (1, 0, 0), (0, 0, 1))
        assert info.vertices == ((0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 0.0, 1.0))

    def test_vertices_lie_on_plane(self):
        """Test every vertex satisfies the cached plane equation."""
        from src.raycaster.geometry.triangle import TriangleInfo

        info = TriangleInfo.from_points((1, 2, 3), (-4, 0.5, 2), (3, -1, -7))
        for v in info.vertices:
            assert abs(info.plane.substitute(v)) < 1e-9

    def test_centroid(self):
        """Test centroid is the vertex mean."""
        from src.raycaster.geometry.triangle import TriangleInfo

        info = TriangleInfo.from_points((0, 0, 0), (3, 0, 0), (0, 3, 0))
        assert info.centroid() == pytest.approx((1.0, 1.0, 0.0))

    def test_collinear_points_raise(self):
        """Test collinear vertices are rejected."""
        from src.raycaster.geometry.plane import CollinearVectorsError
        from src.raycaster.geometry.triangle import TriangleInfo

        with pytest.raises(CollinearVectorsError):
            TriangleInfo.from_points((0, 0, 0), (1, 1, 1), (2, 2, 2))

    def test_repeated_vertex_raises(self):
        """Test a repeated vertex gives a degenerate triangle."""
        from src.raycaster.geometry.plane import CollinearVectorsError
        from src.raycaster.geometry.triangle import TriangleInfo

        with pytest.raises(CollinearVectorsError):
            TriangleInfo.from_points((1, 0, 0), (1, 0, 0), (0, 1, 0))


class TestInsideTest:
    """Tests for the point-in-triangle check."""

    def test_inside_and_boundary_points(self):
        """Test vertices, edge midpoints and centroid are inside."""
        from src.raycaster.geometry.triangle import TriangleInfo, is_inside
        from src.raycaster.scene.intersection import add_triangle, load_triangle

        info = TriangleInfo.from_points((0, 0, 0), (4, 0, 0), (0, 0, 4))
        add_triangle(info, (255, 255, 255))
        points = [
            *info.vertices,
            (2.0, 0.0, 0.0),  # edge v0-v1
            (2.0, 0.0, 2.0),  # edge v1-v2
            (0.0, 0.0, 2.0),  # edge v2-v0
            info.centroid(),
        ]
        count = len(points)
        pts = ti.Vector.field(3, dtype=ti.f64, shape=count)
        results = ti.field(dtype=ti.i32, shape=count)
        for i, p in enumerate(points):
            pts[i] = list(p)

        @ti.kernel
        def test_kernel():
            for i in range(count):
                results[i] = is_inside(load_triangle(0), pts[i])

        test_kernel()
        assert all(results[i] == 1 for i in range(count))

    def test_outside_points(self):
        """Test points of the plane outside the triangle are rejected."""
        from src.raycaster.core.ray import vec3
        from src.raycaster.geometry.triangle import TriangleInfo, is_inside
        from src.raycaster.scene.intersection import add_triangle, load_triangle

        info = TriangleInfo.from_points((0, 0, 0), (4, 0, 0), (0, 0, 4))
        add_triangle(info, (255, 255, 255))
        results = ti.field(dtype=ti.i32, shape=3)

        @ti.kernel
        def test_kernel():
            tri = load_triangle(0)
            results[0] = is_inside(tri, vec3(3.0, 0.0, 3.0))
            results[1] = is_inside(tri, vec3(-1.0, 0.0, 1.0))
            results[2] = is_inside(tri, vec3(100.0, 0.0, -50.0))

        test_kernel()
        assert results[0] == 0
        assert results[1] == 0
        assert results[2] == 0

    def test_winding_does_not_matter(self):
        """Test the inside test agrees for both vertex orders."""
        from src.raycaster.core.ray import vec3
        from src.raycaster.geometry.triangle import TriangleInfo, is_inside
        from src.raycaster.scene.intersection import add_triangle, load_triangle

        ccw = TriangleInfo.from_points((0, 0, 0), (4, 0, 0), (0, 0, 4))
        cw = TriangleInfo.from_points((0, 0, 0), (0, 0, 4), (4, 0, 0))
        add_triangle(ccw, (255, 255, 255))
        add_triangle(cw, (255, 255, 255))
        results = ti.field(dtype=ti.i32, shape=4)

        @ti.kernel
        def test_kernel():
            ta = load_triangle(0)
            tb = load_triangle(1)
            results[0] = is_inside(ta, vec3(1.0, 0.0, 1.0))
            results[1] = is_inside(tb, vec3(1.0, 0.0, 1.0))
            results[2] = is_inside(ta, vec3(5.0, 0.0, 5.0))
            results[3] = is_inside(tb, vec3(5.0, 0.0, 5.0))

        test_kernel()
        assert results[0] == 1 and results[1] == 1
        assert results[2] == 0 and results[3] == 0


class TestTriangleIntersection:
    """Tests for ray-triangle intersection."""

    def test_ray_hits_triangle(self):
        """Test a ray through an interior point hits at the expected t."""
        from src.raycaster.core.ray import make_ray, ray_at, vec3
        from src.raycaster.geometry.triangle import TriangleInfo, hit_triangle
        from src.raycaster.scene.intersection import add_triangle, load_triangle

        info = TriangleInfo.from_points((0, -1, -1), (0, -1, 1), (0, 2, 0))
        add_triangle(info, (255, 255, 255))
        hit = ti.field(dtype=ti.i32, shape=())
        t_val = ti.field(dtype=ti.f64, shape=())
        point = ti.Vector.field(3, dtype=ti.f64, shape=())

        @ti.kernel
        def test_kernel():
            tri = load_triangle(0)
            ray = make_ray(vec3(10.0, 0.0, 0.0), vec3(-1.0, 0.0, 0.0))
            rec = hit_triangle(tri, ray)
            hit[None] = rec.hit
            t_val[None] = rec.t
            point[None] = ray_at(ray, rec.t)

        test_kernel()
        assert hit[None] == 1
        assert abs(t_val[None] - 10.0) < 1e-9
        p = point[None]
        assert abs(p[0]) < 1e-9 and abs(p[1]) < 1e-9 and abs(p[2]) < 1e-9

    def test_ray_misses_outside(self):
        """Test a ray crossing the plane outside the triangle misses."""
        from src.raycaster.core.ray import make_ray, vec3
        from src.raycaster.geometry.triangle import TriangleInfo, hit_triangle
        from src.raycaster.scene.intersection import add_triangle, load_triangle

        info = TriangleInfo.from_points((0, -1, -1), (0, -1, 1), (0, 2, 0))
        add_triangle(info, (255, 255, 255))
        hit = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            tri = load_triangle(0)
            hit[None] = hit_triangle(tri, make_ray(vec3(10.0, 5.0, 5.0), vec3(-1.0, 0.0, 0.0))).hit

        test_kernel()
        assert hit[None] == 0

    def test_parallel_ray_misses(self):
        """Test a ray parallel to the triangle plane misses."""
        from src.raycaster.core.ray import make_ray, vec3
        from src.raycaster.geometry.triangle import TriangleInfo, hit_triangle
        from src.raycaster.scene.intersection import add_triangle, load_triangle

        info = TriangleInfo.from_points((0, -1, -1), (0, -1, 1), (0, 2, 0))
        add_triangle(info, (255, 255, 255))
        hit = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            tri = load_triangle(0)
            hit[None] = hit_triangle(tri, make_ray(vec3(1.0, 0.0, 0.0), vec3(0.0, 1.0, 0.0))).hit

        test_kernel()
        assert hit[None] == 0

    def test_hit_behind_origin_reports_negative_t(self):
        """Test hit_triangle applies no range filter on t."""
        from src.raycaster.core.ray import make_ray, vec3
        from src.raycaster.geometry.triangle import TriangleInfo, hit_triangle
        from src.raycaster.scene.intersection import add_triangle, load_triangle

        info = TriangleInfo.from_points((0, -1, -1), (0, -1, 1), (0, 2, 0))
        add_triangle(info, (255, 255, 255))
        hit = ti.field(dtype=ti.i32, shape=())
        t_val = ti.field(dtype=ti.f64, shape=())

        @ti.kernel
        def test_kernel():
            tri = load_triangle(0)
            rec = hit_triangle(tri, make_ray(vec3(10.0, 0.0, 0.0), vec3(1.0, 0.0, 0.0)))
            hit[None] = rec.hit
            t_val[None] = rec.t

        test_kernel()
        assert hit[None] == 1
        assert t_val[None] < 0.0
