"""Tests for the transforms module."""

from __future__ import annotations

import pytest

from cadverter.models import AxisConvention, Bounds, Point, Rect
from cadverter.transforms import (
    MAX_ZOOM,
    MIN_ZOOM,
    clamp_zoom,
    compute_transform,
    parse_scale_policy,
    preview_transform,
    zoom_in,
    zoom_out,
)

BOUNDS = Bounds(min_x=-30, min_y=-30, width=200, height=100)


class TestScalePolicy:

    def test_auto(self):
        assert parse_scale_policy("auto") == "auto"
        assert parse_scale_policy(" AUTO ") == "auto"

    def test_numeric(self):
        assert parse_scale_policy("0.5") == 0.5
        assert parse_scale_policy(2) == 2.0

    @pytest.mark.parametrize("bad", ["fit", "", "0", "-1", 0, -2.5])
    def test_invalid(self, bad):
        with pytest.raises(ValueError):
            parse_scale_policy(bad)


class TestComputeTransform:

    @pytest.mark.parametrize("content_w, content_h", [(400, 400), (100, 20), (50, 300)])
    def test_auto_scale_is_min_ratio(self, content_w, content_h):
        t = compute_transform(BOUNDS, Rect(0, 0, content_w, content_h))
        assert t.scale == pytest.approx(min(content_w / 200, content_h / 100))

    def test_fixed_scale(self):
        t = compute_transform(BOUNDS, Rect(0, 0, 400, 400), scale_policy=0.5)
        assert t.scale == 0.5

    def test_centered(self):
        t = compute_transform(BOUNDS, Rect(10, 20, 400, 400))
        # scale 2 -> drawing box 400 x 200, centered vertically
        assert t.scale == pytest.approx(2)
        assert t.offset_x == pytest.approx(10)
        assert t.offset_y == pytest.approx(20 + 100)
        assert t.scaled_width == pytest.approx(400)
        assert t.scaled_height == pytest.approx(200)

    def test_y_down_flips_vertical_axis(self):
        t = compute_transform(BOUNDS, Rect(0, 0, 400, 200), convention=AxisConvention.Y_DOWN)
        # Bottom-left of the bounds lands on the bottom-left of the box
        assert t.apply(-30, -30) == pytest.approx((0, 200))
        # Top-right lands on the top-right
        assert t.apply(170, 70) == pytest.approx((400, 0))

    def test_y_up_keeps_vertical_axis(self):
        t = compute_transform(BOUNDS, Rect(0, 0, 400, 200), convention=AxisConvention.Y_UP)
        assert t.apply(-30, -30) == pytest.approx((0, 0))
        assert t.apply(170, 70) == pytest.approx((400, 200))

    def test_conventions_mirror_each_other(self):
        content = Rect(0, 0, 300, 300)
        down = compute_transform(BOUNDS, content, convention=AxisConvention.Y_DOWN)
        up = compute_transform(BOUNDS, content, convention=AxisConvention.Y_UP)
        for x, y in [(0, 0), (50, 25), (-30, 70)]:
            dx, dy = down.apply(x, y)
            ux, uy = up.apply(x, y)
            assert dx == pytest.approx(ux)
            assert dy == pytest.approx(300 - uy)

    def test_apply_point_and_lengths(self):
        t = compute_transform(BOUNDS, Rect(0, 0, 400, 200), convention=AxisConvention.Y_UP)
        assert t.apply_point(Point(-30, -30)) == Point(0, 0)
        assert t.scale_length(5) == pytest.approx(10)

    def test_angles(self):
        down = compute_transform(BOUNDS, Rect(0, 0, 1, 1), convention=AxisConvention.Y_DOWN)
        up = compute_transform(BOUNDS, Rect(0, 0, 1, 1), convention=AxisConvention.Y_UP)
        assert down.apply_angle(90) == -90
        assert up.apply_angle(90) == 90

    def test_empty_content_rejected(self):
        with pytest.raises(ValueError):
            compute_transform(BOUNDS, Rect(0, 0, 0, 100))

    def test_bad_policy_rejected(self):
        with pytest.raises(ValueError):
            compute_transform(BOUNDS, Rect(0, 0, 100, 100), scale_policy="huge")


class TestPreviewTransform:

    def test_fits_inside_padding(self):
        t = preview_transform(BOUNDS, 460, 260)
        # content 400 x 200 -> scale 2, centered in the full viewport
        assert t.scale == pytest.approx(2)
        assert t.convention is AxisConvention.Y_DOWN
        assert t.offset_x == pytest.approx(30)
        assert t.offset_y == pytest.approx(30)

    def test_zoom_and_pan(self):
        base = preview_transform(BOUNDS, 460, 260)
        zoomed = preview_transform(BOUNDS, 460, 260, zoom=2, pan=(15, -5))
        assert zoomed.scale == pytest.approx(base.scale * 2)
        assert zoomed.offset_x == pytest.approx((460 - 800) / 2 + 15)
        assert zoomed.offset_y == pytest.approx((260 - 400) / 2 - 5)

    def test_zoom_is_clamped(self):
        base = preview_transform(BOUNDS, 460, 260)
        t = preview_transform(BOUNDS, 460, 260, zoom=100)
        assert t.scale == pytest.approx(base.scale * MAX_ZOOM)

    def test_tiny_viewport(self):
        with pytest.raises(ValueError):
            preview_transform(BOUNDS, 50, 400)


class TestZoom:

    def test_steps(self):
        assert zoom_in(1.0) == pytest.approx(1.2)
        assert zoom_out(1.2) == pytest.approx(1.0)

    def test_limits(self):
        assert zoom_in(MAX_ZOOM) == MAX_ZOOM
        assert zoom_out(MIN_ZOOM) == MIN_ZOOM
        assert clamp_zoom(0.01) == MIN_ZOOM
