#!/usr/bin/env python3
"""
Tests for orthographic view projection.

Tests cover:
- Scale formula and per-view independence
- Outline centering and containment in the column
- Top-face cavity anchoring and depth clamping
- Plan-view flip, circle and poly cavities
"""

import pytest

from foamdraw.drawing_generator.constants import DIMENSION_GUTTER, FILL_FACTOR
from foamdraw.drawing_generator.layer_sheet import view_columns
from foamdraw.drawing_generator.view_area import ViewArea
from foamdraw.drawing_generator.view_projection import (
    VIEW_ORDER,
    VIEW_SPECS,
    CavityDepthAnchor,
    ViewKind,
    compute_view_scale,
    depth_range,
    project_view,
)
from foamdraw.model import Block, Cavity, Layer

COLUMN = ViewArea(x=36.0, y=250.0, width=240.0, height=308.0)


def rect_cavity(x=0.25, y=0.25, length=2.0, width=1.0, depth=1.0, **kwargs):
    return Cavity(id="c1", shape="rect", x=x, y=y, length_in=length, width_in=width,
                  depth_in=depth, **kwargs)


def single_layer(thickness=3.0, cavities=()):
    return Layer(id="l1", label="L1", thickness_in=thickness, cavities=tuple(cavities))


# =============================================================================
# VIEW SPEC TESTS
# =============================================================================


class TestViewSpecs:
    """Test the declarative view table."""

    def test_column_order(self):
        assert VIEW_ORDER == (ViewKind.FRONT, ViewKind.TOP, ViewKind.RIGHT)

    @pytest.mark.parametrize(
        "kind,header",
        [
            (ViewKind.FRONT, "FRONT VIEW (L×H)"),
            (ViewKind.TOP, "TOP VIEW (L×W)"),
            (ViewKind.RIGHT, "RIGHT VIEW (W×H)"),
        ],
    )
    def test_headers(self, kind, header):
        assert VIEW_SPECS[kind].header == header

    def test_only_plan_is_flipped(self):
        assert VIEW_SPECS[ViewKind.TOP].flip_v
        assert not VIEW_SPECS[ViewKind.FRONT].flip_v
        assert not VIEW_SPECS[ViewKind.RIGHT].flip_v

    def test_elevations_hang_from_top(self):
        assert VIEW_SPECS[ViewKind.FRONT].depth_anchor is CavityDepthAnchor.TOP
        assert VIEW_SPECS[ViewKind.RIGHT].depth_anchor is CavityDepthAnchor.TOP
        assert VIEW_SPECS[ViewKind.TOP].depth_anchor is None

    def test_matrix_shape(self):
        assert VIEW_SPECS[ViewKind.RIGHT].matrix.shape == (2, 3)


# =============================================================================
# SCALE TESTS
# =============================================================================


class TestScale:
    """Test the fit-to-viewport scale."""

    def test_scale_formula(self):
        assert compute_view_scale(200.0, 100.0, 10.0, 2.0) == pytest.approx(
            min(200.0 / 10.0, 100.0 / 2.0) * FILL_FACTOR, abs=1e-9
        )

    @pytest.mark.parametrize("dims", [(0.0, 1.0), (1.0, 0.0), (-1.0, 1.0)])
    def test_zero_span_rejected(self, dims):
        with pytest.raises(ValueError):
            compute_view_scale(100.0, 100.0, *dims)

    def test_front_scale_matches_formula(self):
        block = Block(12.0, 10.0, 3.0)
        geom = project_view(block, single_layer(3.0), ViewKind.FRONT, COLUMN)

        avail_w = COLUMN.width - 2 * DIMENSION_GUTTER
        avail_h = COLUMN.height - 2 * DIMENSION_GUTTER
        expected = min(avail_w / 12.0, avail_h / 3.0) * FILL_FACTOR
        assert geom.scale == pytest.approx(expected, abs=1e-9)
        assert geom.viewport == COLUMN.inset(DIMENSION_GUTTER)

    def test_views_scale_independently(self):
        block = Block(12.0, 10.0, 3.0)
        layer = single_layer(3.0)
        # Wide, short column: the plan view is limited by its 10" vertical span
        column = ViewArea(x=0.0, y=0.0, width=400.0, height=200.0)

        front = project_view(block, layer, ViewKind.FRONT, column)
        top = project_view(block, layer, ViewKind.TOP, column)

        avail_w = column.width - 2 * DIMENSION_GUTTER
        avail_h = column.height - 2 * DIMENSION_GUTTER
        assert front.scale == pytest.approx(min(avail_w / 12, avail_h / 3) * FILL_FACTOR)
        assert top.scale == pytest.approx(min(avail_w / 12, avail_h / 10) * FILL_FACTOR)
        assert front.scale != pytest.approx(top.scale)

    def test_dims_per_view(self):
        block = Block(12.0, 10.0, 3.0)
        layer = single_layer(2.0)
        dims = {kind: project_view(block, layer, kind, COLUMN).dims_in for kind in VIEW_ORDER}

        assert dims[ViewKind.FRONT] == (12.0, 2.0)
        assert dims[ViewKind.TOP] == (12.0, 10.0)
        assert dims[ViewKind.RIGHT] == (10.0, 2.0)


# =============================================================================
# OUTLINE TESTS
# =============================================================================


class TestOutline:
    """Test outline placement."""

    @pytest.mark.parametrize("block", [
        Block(12.0, 10.0, 3.0),
        Block(48.0, 2.0, 0.5),
        Block(1.0, 30.0, 8.0),
    ])
    def test_outline_inside_column(self, block):
        layer = single_layer(block.height_in)
        for column, kind in zip(view_columns(), VIEW_ORDER):
            geom = project_view(block, layer, kind, column)
            assert geom.outline.width > 0
            assert geom.outline.height > 0
            assert column.contains(geom.outline)

    def test_outline_centered_in_viewport(self):
        geom = project_view(Block(12.0, 10.0, 3.0), single_layer(), ViewKind.FRONT, COLUMN)

        assert geom.outline.center_x == pytest.approx(geom.viewport.center_x)
        assert geom.outline.center_y == pytest.approx(geom.viewport.center_y)

    def test_outline_size(self):
        geom = project_view(Block(12.0, 10.0, 3.0), single_layer(), ViewKind.RIGHT, COLUMN)

        assert geom.outline.width == pytest.approx(10.0 * geom.scale)
        assert geom.outline.height == pytest.approx(3.0 * geom.scale)


# =============================================================================
# CAVITY TESTS
# =============================================================================


class TestCavityProjection:
    """Test cavity geometry in each view."""

    def test_depth_is_clamped_to_layer(self):
        block = Block(12.0, 10.0, 2.0)
        layer = single_layer(2.0, [rect_cavity(depth=5.0)])

        for kind in (ViewKind.FRONT, ViewKind.RIGHT):
            geom = project_view(block, layer, kind, COLUMN)
            pc = geom.cavities[0]
            assert pc.box.height == pytest.approx(2.0 * geom.scale)
            assert pc.depth_in == pytest.approx(2.0)

    def test_cavity_hangs_from_top_face(self):
        block = Block(12.0, 10.0, 3.0)
        geom = project_view(block, single_layer(3.0, [rect_cavity(depth=1.0)]),
                            ViewKind.FRONT, COLUMN)
        pc = geom.cavities[0]

        assert pc.box.top == pytest.approx(geom.outline.top)
        assert pc.box.height == pytest.approx(1.0 * geom.scale)

    def test_front_horizontal_position(self):
        block = Block(12.0, 10.0, 3.0)
        geom = project_view(block, single_layer(3.0, [rect_cavity(x=0.25, length=2.0)]),
                            ViewKind.FRONT, COLUMN)
        pc = geom.cavities[0]

        assert pc.box.left == pytest.approx(geom.outline.left + 3.0 * geom.scale)
        assert pc.box.width == pytest.approx(2.0 * geom.scale)
        assert pc.spans_in == pytest.approx((2.0, 1.0))

    def test_right_uses_cavity_y(self):
        block = Block(12.0, 10.0, 3.0)
        geom = project_view(block, single_layer(3.0, [rect_cavity(y=0.5, width=1.0)]),
                            ViewKind.RIGHT, COLUMN)
        pc = geom.cavities[0]

        assert pc.box.left == pytest.approx(geom.outline.left + 5.0 * geom.scale)
        assert pc.box.width == pytest.approx(1.0 * geom.scale)

    def test_plan_is_flipped(self):
        # y = 0 is the top edge of the footprint in plan
        block = Block(12.0, 10.0, 3.0)
        geom = project_view(block, single_layer(3.0, [rect_cavity(y=0.0, width=1.0)]),
                            ViewKind.TOP, COLUMN)
        pc = geom.cavities[0]

        assert pc.box.top == pytest.approx(geom.outline.top)
        assert pc.box.bottom == pytest.approx(geom.outline.top - 1.0 * geom.scale)
        assert pc.depth_in is None

    def test_circle_default_diameter(self):
        block = Block(12.0, 10.0, 3.0)
        circle = Cavity(id="c", shape="circle", x=0.1, y=0.1, length_in=4.0, width_in=6.0,
                        depth_in=1.0)
        geom = project_view(block, single_layer(3.0, [circle]), ViewKind.TOP, COLUMN)
        cx, cy, r = geom.cavities[0].circle

        assert 2 * r == pytest.approx(4.0 * geom.scale)
        # center at (x*L + length/2, y*W + width/2) = (3.2, 4.0) with y from the top
        assert cx == pytest.approx(geom.outline.left + 3.2 * geom.scale)
        assert cy == pytest.approx(geom.outline.top - 4.0 * geom.scale)

    def test_poly_outline_in_plan(self):
        block = Block(10.0, 10.0, 3.0)
        poly = Cavity(id="p", shape="poly", x=0.1, y=0.1, length_in=5.0, width_in=5.0,
                      depth_in=1.0, points=((0.1, 0.1), (0.6, 0.1), (0.35, 0.6)))
        geom = project_view(block, single_layer(3.0, [poly]), ViewKind.TOP, COLUMN)
        polygon = geom.cavities[0].polygon

        assert polygon is not None
        assert len(polygon) == 3
        x0, y0 = polygon[0]
        assert x0 == pytest.approx(geom.outline.left + 1.0 * geom.scale)
        assert y0 == pytest.approx(geom.outline.top - 1.0 * geom.scale)

    def test_poly_without_points_uses_box(self):
        block = Block(10.0, 10.0, 3.0)
        poly = Cavity(id="p", shape="poly", x=0.1, y=0.1, length_in=5.0, width_in=5.0,
                      depth_in=1.0, points=((0.1, 0.1), (0.6, 0.1)))
        geom = project_view(block, single_layer(3.0, [poly]), ViewKind.TOP, COLUMN)

        assert geom.cavities[0].polygon is None

    @pytest.mark.parametrize(
        "anchor,expected",
        [
            (CavityDepthAnchor.TOP, (2.0, 3.0)),
            (CavityDepthAnchor.BOTTOM, (0.0, 1.0)),
        ],
    )
    def test_depth_range(self, anchor, expected):
        assert depth_range(rect_cavity(depth=1.0), 3.0, anchor) == expected
