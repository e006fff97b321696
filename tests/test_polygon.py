"""Tests for regular-polygon vertex placement and triangle helpers."""

import math

import pytest

from chaosgame.patterns.polygon import barycentric, polygon_vertices, rotate_point


class TestPolygonVertices:
    """Vertices sit on the circle, evenly spaced, in ascending-angle order."""

    @pytest.mark.parametrize("count", range(3, 13))
    def test_count_and_radius(self, count):
        verts = polygon_vertices(count, radius=2.5)
        assert len(verts) == count
        for x, y in verts:
            assert math.hypot(x, y) == pytest.approx(2.5, abs=1e-9)

    @pytest.mark.parametrize("count", range(3, 13))
    def test_even_angular_spacing(self, count):
        verts = polygon_vertices(count)
        expected = 2 * math.pi / count
        for (ax, ay), (bx, by) in zip(verts, verts[1:] + verts[:1]):
            delta = (math.atan2(by, bx) - math.atan2(ay, ax)) % (2 * math.pi)
            assert delta == pytest.approx(expected, abs=1e-9)

    def test_first_vertex_on_positive_x_axis(self):
        x, y = polygon_vertices(5, radius=1.0)[0]
        assert x == pytest.approx(1.0)
        assert y == pytest.approx(0.0)


class TestHelpers:
    def test_rotate_quarter_turn(self):
        x, y = rotate_point(1.0, 0.0, 0.0, 0.0, 90.0)
        assert x == pytest.approx(0.0, abs=1e-12)
        assert y == pytest.approx(1.0)

    def test_barycentric_of_vertices_and_centroid(self):
        a, b, c = polygon_vertices(3)
        assert barycentric(a, a, b, c) == pytest.approx((1.0, 0.0, 0.0), abs=1e-12)
        assert barycentric(c, a, b, c) == pytest.approx((0.0, 0.0, 1.0), abs=1e-12)
        assert barycentric((0.0, 0.0), a, b, c) == pytest.approx((1 / 3, 1 / 3, 1 / 3))

    def test_barycentric_degenerate(self):
        with pytest.raises(ValueError):
            barycentric((0.0, 0.0), (0.0, 0.0), (1.0, 1.0), (2.0, 2.0))
