"""Tests for the bounds module."""

from __future__ import annotations

import pytest

from cadverter.bounds import DEFAULT_BOUNDS, compute_bounds, entity_extent
from cadverter.dxf_reader import placeholder_drawing
from cadverter.models import (
    Arc,
    Bounds,
    Circle,
    Ellipse,
    Entity,
    Face,
    Line,
    Point,
    PointEntity,
    Polyline,
    Text,
)


class TestEntityExtent:

    def test_line(self):
        assert entity_extent(Line(x1=10, y1=5, x2=-2, y2=8)) == (-2, 5, 10, 8)

    def test_polyline_and_face(self):
        pts = (Point(1, 2), Point(-3, 7), Point(4, -1))
        assert entity_extent(Polyline(points=pts)) == (-3, -1, 4, 7)
        assert entity_extent(Face(points=pts)) == (-3, -1, 4, 7)

    def test_circle(self):
        assert entity_extent(Circle(center=Point(10, 10), radius=5)) == (5, 5, 15, 15)

    def test_arc_uses_full_circle(self):
        """A quarter arc still contributes its whole circle."""
        arc = Arc(center=Point(0, 0), radius=10, start_angle=0, end_angle=90)
        assert entity_extent(arc) == (-10, -10, 10, 10)

    def test_ellipse_axes_independent(self):
        ellipse = Ellipse(center=Point(0, 0), rx=20, ry=5)
        assert entity_extent(ellipse) == (-20, -5, 20, 5)

    def test_text_nominal_box(self):
        text = Text(content="abc", position=Point(10, 50))
        assert entity_extent(text) == (10, 40, 110, 50)

    def test_point(self):
        assert entity_extent(PointEntity(position=Point(3, 4))) == (3, 4, 3, 4)

    def test_unknown_type(self):
        with pytest.raises(TypeError):
            entity_extent(Entity())


class TestComputeBounds:

    def test_empty_is_default(self):
        assert compute_bounds([]) == DEFAULT_BOUNDS
        assert DEFAULT_BOUNDS == Bounds(min_x=0, min_y=0, width=500, height=350)

    def test_padding(self):
        bounds = compute_bounds([Line(x1=0, y1=0, x2=100, y2=50)])
        assert bounds == Bounds(min_x=-30, min_y=-30, width=160, height=110)
        assert bounds.max_x == 130
        assert bounds.max_y == 80

    def test_single_point_has_positive_size(self):
        bounds = compute_bounds([PointEntity(position=Point(7, 7))])
        assert bounds.width == pytest.approx(60)
        assert bounds.height == pytest.approx(60)

    def test_zero_length_line(self):
        bounds = compute_bounds([Line(x1=5, y1=5, x2=5, y2=5)])
        assert bounds.width > 0
        assert bounds.height > 0

    def test_pointless_polyline_only_is_default(self):
        assert compute_bounds([Polyline(points=())]) == DEFAULT_BOUNDS

    def test_overflowing_extent_is_default(self):
        bounds = compute_bounds([Line(x1=-1.7e308, y1=0, x2=1.7e308, y2=1)])
        assert bounds == DEFAULT_BOUNDS

    def test_mixed_entities(self):
        bounds = compute_bounds([
            Circle(center=Point(0, 0), radius=10),
            Text(content="t", position=Point(50, 0)),
        ])
        assert bounds.min_x == pytest.approx(-40)
        assert bounds.max_x == pytest.approx(180)
        assert bounds.min_y == pytest.approx(-40)
        assert bounds.max_y == pytest.approx(40)

    def test_placeholder_drawing(self):
        bounds = compute_bounds(placeholder_drawing())
        assert bounds.min_x == pytest.approx(10 - 30)
        assert bounds.max_x == pytest.approx(500 + 30)
        assert bounds.max_y == pytest.approx(280 + 30)

    def test_accepts_generator(self):
        bounds = compute_bounds(Line(x1=i, y1=i, x2=i + 1, y2=i + 1) for i in range(3))
        assert bounds.width == pytest.approx(3 + 60)
