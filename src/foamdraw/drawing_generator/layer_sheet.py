"""
Layer sheet composer.

Lays out one page for one layer on a fixed grid:

    +-----------------+-----------------+-----------------+
    | FRONT VIEW (L×H)| TOP VIEW (L×W)  | RIGHT VIEW (W×H)|  header strip
    +-----------------+-----------------+-----------------+
    |                 |                 |                 |
    |     front       |      top        |     right       |  view columns
    |                 |                 |                 |
    +-----------------+-----------------+-----------------+
    |  notes                |  layer metadata + schedule  |  notes panel
    +-----------------------------------------------------+
    |  title / quote / customer   | REV | DATE | SCALE | SHEET
    +-----------------------------------------------------+

Each view is projected with its own scale. Overall block dimensions are
always requested; cavity dimensions are stacked on tiers above the outline
(primary) or placed to the right of the cavity (secondary) and dropped
when they would be illegible or leave the column.
"""

from __future__ import annotations

import logging

from ..model import DrawingInput, Layer
from .cavity_schedule import CavitySchedule
from .constants import (
    BORDER_COLOR,
    CAVITY_COLOR,
    CAVITY_DASH,
    CAVITY_DIMENSION_OFFSET,
    CAVITY_STROKE_WIDTH,
    COLUMN_HEADER_HEIGHT,
    COLUMN_HEADER_Y,
    CONTENT_WIDTH,
    CONTENT_X,
    DIMENSION_TIER_SPACING,
    NOTES_PANEL_HEIGHT,
    NOTES_PANEL_Y,
    OUTLINE_COLOR,
    OUTLINE_FILL,
    OUTLINE_STROKE_WIDTH,
    OVERALL_DIMENSION_OFFSET,
    SECONDARY_DIMENSION_OFFSET,
    THIN_LINE_WIDTH,
    VIEW_COLUMN_COUNT,
    VIEW_ROW_HEIGHT,
    VIEW_ROW_Y,
)
from .dimensions import (
    DEFAULT_STYLE,
    DimensionStyle,
    Orientation,
    TierAllocator,
    dimension_extent,
    format_dimension,
    label_width,
    render_dimension,
)
from .page import DrawingPage
from .primitives import Circle, Line, Polygon, Primitive, Rect, Text
from .title_block import TitleBlock, TitleBlockInfo
from .view_area import ViewArea
from .view_projection import VIEW_ORDER, VIEW_SPECS, ViewGeometry, project_view

logger = logging.getLogger(__name__)

# Keep secondary dimension labels this far inside the column's right edge
RIGHT_MARGIN_CLEARANCE = 2.0


def view_columns() -> list[ViewArea]:
    """Bounds of the three view columns, left to right."""
    row = ViewArea(x=CONTENT_X, y=VIEW_ROW_Y, width=CONTENT_WIDTH, height=VIEW_ROW_HEIGHT)
    return row.split_columns(VIEW_COLUMN_COUNT)


def notes_panel_area() -> ViewArea:
    return ViewArea(x=CONTENT_X, y=NOTES_PANEL_Y, width=CONTENT_WIDTH, height=NOTES_PANEL_HEIGHT)


def _grid(columns: list[ViewArea]) -> list[Primitive]:
    """Column headers and the row/column dividers."""
    parts: list[Primitive] = []
    left, right = columns[0].left, columns[-1].right
    header_top = COLUMN_HEADER_Y + COLUMN_HEADER_HEIGHT
    for y in (VIEW_ROW_Y, COLUMN_HEADER_Y):
        parts.append(Line(left, y, right, y, stroke=BORDER_COLOR, stroke_width=THIN_LINE_WIDTH))
    for column in columns[1:]:
        parts.append(Line(column.left, VIEW_ROW_Y, column.left, header_top,
                          stroke=BORDER_COLOR, stroke_width=THIN_LINE_WIDTH))
    for column, kind in zip(columns, VIEW_ORDER):
        parts.append(Text(column.center_x, COLUMN_HEADER_Y + 6, VIEW_SPECS[kind].header,
                          size=9, bold=True, anchor="middle"))
    return parts


def _draw_view(geom: ViewGeometry) -> list[Primitive]:
    """Layer outline and cavity shapes for one view."""
    o = geom.outline
    parts: list[Primitive] = [
        Rect(o.x, o.y, o.width, o.height, stroke=OUTLINE_COLOR,
             stroke_width=OUTLINE_STROKE_WIDTH, fill=OUTLINE_FILL),
    ]
    cavity_style = dict(stroke=CAVITY_COLOR, stroke_width=CAVITY_STROKE_WIDTH, dash=CAVITY_DASH)
    for pc in geom.cavities:
        if pc.circle is not None:
            cx, cy, r = pc.circle
            parts.append(Circle(cx, cy, r, **cavity_style))
        elif pc.polygon is not None:
            parts.append(Polygon(pc.polygon, **cavity_style))
        else:
            b = pc.box
            parts.append(Rect(b.x, b.y, b.width, b.height, **cavity_style))
        if geom.spec.depth_anchor is None and pc.cavity.label:
            parts.append(Text(pc.box.center_x, pc.box.center_y - 2, pc.cavity.label,
                              size=6, anchor="middle"))
    return parts


def _label_box(center_x: float, center_y: float, text: str,
               style: DimensionStyle) -> tuple[float, float, float, float]:
    half_w = label_width(text, style) / 2
    half_h = (style.font_size + 2) / 2
    return (center_x - half_w, center_y - half_h, center_x + half_w, center_y + half_h)


def _boxes_overlap(a, b) -> bool:
    return not (a[2] <= b[0] or b[2] <= a[0] or a[3] <= b[1] or b[3] <= a[1])


def _dimension_view(geom: ViewGeometry, style: DimensionStyle) -> list[Primitive]:
    o = geom.outline
    dim_h, dim_v = geom.dims_in
    parts: list[Primitive] = []

    # Overall spans of the view
    parts += render_dimension(o.left, o.right, o.bottom, o.bottom - OVERALL_DIMENSION_OFFSET,
                              dim_h, Orientation.HORIZONTAL, style)
    parts += render_dimension(o.bottom, o.top, o.left, o.left - OVERALL_DIMENSION_OFFSET,
                              dim_v, Orientation.VERTICAL, style)

    tiers = TierAllocator(
        base=o.top + CAVITY_DIMENSION_OFFSET,
        spacing=DIMENSION_TIER_SPACING,
        limit=geom.column.top - style.font_size,
    )
    placed_labels: list[tuple[float, float, float, float]] = []

    for pc in sorted(geom.cavities, key=lambda c: (c.box.x, c.box.y)):
        b = pc.box
        value_h, value_v = pc.spans_in

        # Primary: horizontal span, stacked above the outline
        if b.width >= style.min_span:
            pos = tiers.place(*dimension_extent(b.left, b.right, value_h, style))
            if pos is None:
                logger.debug("No tier left for %s cavity %s", geom.kind.value, pc.cavity.id)
            else:
                parts += render_dimension(b.left, b.right, b.top, pos, value_h,
                                          Orientation.HORIZONTAL, style)

        # Secondary: vertical span (depth in elevation, width in plan) right of the cavity
        line_x = b.right + SECONDARY_DIMENSION_OFFSET
        text = format_dimension(value_v)
        label = _label_box(line_x, b.center_y, text, style)
        if any(_boxes_overlap(label, other) for other in placed_labels):
            continue
        right_limit = geom.column.right - label_width(text, style) / 2 - RIGHT_MARGIN_CLEARANCE
        dim = render_dimension(b.bottom, b.top, b.right, line_x, value_v,
                               Orientation.VERTICAL, style, right_limit=right_limit)
        if dim:
            placed_labels.append(label)
            parts += dim

    return parts


def compose_layer_page(
    drawing: DrawingInput,
    index: int,
    drawn_date: str,
    style: DimensionStyle = DEFAULT_STYLE,
) -> DrawingPage:
    """
    Compose the page for one layer.

    Args:
        drawing: Validated drawing input
        index: Layer index (0 = base)
        drawn_date: Date shown in the title block
        style: Dimension styling

    Returns:
        DrawingPage with views, dimensions, notes panel and title block
    """
    layer: Layer = drawing.layers[index]
    total = len(drawing.layers)

    title_block = TitleBlock(TitleBlockInfo(
        quote_no=drawing.quote_no,
        customer_name=drawing.customer_name,
        revision=drawing.revision,
        drawn_date=drawn_date,
        layer_text=f"LAYER {index + 1} OF {total}: {layer.label}",
        sheet_number=index + 1,
        sheet_count=total,
    ))
    page = DrawingPage(
        page_number=index + 1,
        total_pages=total,
        title_block=title_block,
        page_title=layer.label,
    )

    columns = view_columns()
    page.add_elements(_grid(columns))

    for column, kind in zip(columns, VIEW_ORDER):
        geom = project_view(drawing.block, layer, kind, column)
        page.view_scales[kind] = geom.scale
        page.add_elements(_draw_view(geom))
        page.add_elements(_dimension_view(geom, style))

    schedule = CavitySchedule(
        layer=layer,
        layer_index=index,
        layer_count=total,
        block=drawing.block,
        notes=drawing.notes,
        area=notes_panel_area(),
    ).render()
    page.add_elements(schedule.primitives)

    logger.debug(
        "Layer %s: scales %s, %d of %d schedule rows",
        layer.label,
        {k.value: round(s, 3) for k, s in page.view_scales.items()},
        schedule.rows_rendered,
        len(layer.cavities),
    )
    return page
