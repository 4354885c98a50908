"""
Dimension annotations for layer drawings.

A dimension is two extension lines running from the shape edge out past
the dimension line, the dimension line itself with arrow ticks at both
ends, and a centered value label on an opaque patch so the line appears
broken behind the text.

Components:
- DimensionStyle: line, arrow and text styling
- render_dimension: one annotation as draw primitives (empty when skipped)
- TierAllocator: stacks dimensions that share a side so labels don't collide
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

from reportlab.pdfbase.pdfmetrics import stringWidth

from .constants import (
    ARROW_LEG,
    DIMENSION_COLOR,
    DIMENSION_FONT_SIZE,
    DIMENSION_LINE_WIDTH,
    EXTENSION_LINE_OVERSHOOT,
    FONT_FAMILY,
    LABEL_BACKGROUND,
    LABEL_PADDING,
    MIN_DIMENSION_SPAN,
)
from .primitives import Line, Primitive, Rect, Text


class Orientation(str, Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass(frozen=True)
class DimensionStyle:
    """Styling and legibility rules for dimensions."""
    line_width: float = DIMENSION_LINE_WIDTH
    color: str = DIMENSION_COLOR
    overshoot: float = EXTENSION_LINE_OVERSHOOT
    arrow_leg: float = ARROW_LEG
    arrow_angle_deg: float = 45.0
    font_size: float = DIMENSION_FONT_SIZE
    label_padding: float = LABEL_PADDING
    label_background: str = LABEL_BACKGROUND
    min_span: float = MIN_DIMENSION_SPAN


DEFAULT_STYLE = DimensionStyle()


def format_dimension(value_in: float) -> str:
    """Label text for a span in inches, always two decimals."""
    return f'{value_in:.2f}"'


def label_width(text: str, style: DimensionStyle = DEFAULT_STYLE) -> float:
    """Width of the label patch: rendered text width plus padding."""
    return stringWidth(text, FONT_FAMILY, style.font_size) + style.label_padding


def _arrow_ticks(tip: tuple[float, float], inward: tuple[float, float],
                 style: DimensionStyle) -> list[Line]:
    """Two short legs at +/- the arrow angle from the dimension line, pointing back inward."""
    angle = math.radians(style.arrow_angle_deg)
    ux, uy = inward
    # perpendicular to the dimension line
    px, py = -uy, ux
    along = style.arrow_leg * math.cos(angle)
    across = style.arrow_leg * math.sin(angle)
    legs = []
    for sign in (1, -1):
        legs.append(Line(
            tip[0], tip[1],
            tip[0] + ux * along + sign * px * across,
            tip[1] + uy * along + sign * py * across,
            stroke=style.color, stroke_width=style.line_width,
        ))
    return legs


def _label(center: tuple[float, float], text: str, style: DimensionStyle) -> list[Primitive]:
    width = label_width(text, style)
    height = style.font_size + 2
    cx, cy = center
    return [
        Rect(cx - width / 2, cy - height / 2, width, height,
             stroke=None, fill=style.label_background),
        Text(cx, cy - style.font_size * 0.35, text,
             size=style.font_size, anchor="middle", fill=style.color),
    ]


def render_dimension(
    p1: float,
    p2: float,
    edge: float,
    line_pos: float,
    value_in: float,
    orientation: Orientation = Orientation.HORIZONTAL,
    style: DimensionStyle = DEFAULT_STYLE,
    right_limit: float | None = None,
) -> list[Primitive]:
    """
    Draw one dimension between two page-space points.

    For a horizontal dimension ``p1``/``p2`` are x coordinates, ``edge`` is
    the y of the measured shape edge and ``line_pos`` the y of the
    dimension line. For a vertical dimension the roles of x and y swap.

    Args:
        p1, p2: Measured points along the dimension direction
        edge: Shape edge the extension lines start from
        line_pos: Coordinate of the dimension line
        value_in: Physical span in inches shown on the label
        orientation: Horizontal or vertical
        style: Dimension styling
        right_limit: For vertical dimensions, the right-most coordinate the
                     dimension line may take; beyond it nothing is drawn

    Returns:
        Draw primitives, or an empty list when the span is too short to be
        legible or the dimension line would leave the right margin
    """
    if abs(p2 - p1) < style.min_span:
        return []
    if (right_limit is not None and orientation is Orientation.VERTICAL
            and line_pos > right_limit):
        return []

    lo, hi = min(p1, p2), max(p1, p2)
    outward = 1.0 if line_pos >= edge else -1.0
    reach = line_pos + outward * style.overshoot
    text = format_dimension(value_in)

    def pt(along: float, across: float) -> tuple[float, float]:
        if orientation is Orientation.HORIZONTAL:
            return (along, across)
        return (across, along)

    primitives: list[Primitive] = []
    for p in (lo, hi):
        (x1, y1), (x2, y2) = pt(p, edge), pt(p, reach)
        primitives.append(Line(x1, y1, x2, y2, stroke=style.color,
                               stroke_width=style.line_width))

    (x1, y1), (x2, y2) = pt(lo, line_pos), pt(hi, line_pos)
    primitives.append(Line(x1, y1, x2, y2, stroke=style.color,
                           stroke_width=style.line_width))

    primitives.extend(_arrow_ticks(pt(lo, line_pos), pt(1.0, 0.0), style))
    primitives.extend(_arrow_ticks(pt(hi, line_pos), pt(-1.0, 0.0), style))
    primitives.extend(_label(pt((lo + hi) / 2, line_pos), text, style))
    return primitives


def dimension_extent(p1: float, p2: float, value_in: float,
                     style: DimensionStyle = DEFAULT_STYLE) -> tuple[float, float]:
    """Interval along the dimension direction covered by the span and its label."""
    half = label_width(format_dimension(value_in), style) / 2
    center = (p1 + p2) / 2
    return (min(p1, p2, center - half), max(p1, p2, center + half))


@dataclass
class TierAllocator:
    """
    Assigns dimension-line positions for dimensions stacked on one side of a view.

    Tier 0 sits at ``base``; each further tier is ``spacing`` further out in
    ``direction``. A dimension takes the first tier where its extent does not
    overlap anything already placed on that tier. Tiers past ``limit`` are
    unavailable.
    """
    base: float
    spacing: float
    limit: float
    direction: float = 1.0
    gap: float = 2.0
    _tiers: dict[int, list[tuple[float, float]]] = field(default_factory=dict, repr=False)

    def place(self, start: float, end: float) -> float | None:
        """Reserve room for the interval and return its line position, or None if full."""
        tier = 0
        while True:
            pos = self.base + self.direction * tier * self.spacing
            if (pos - self.limit) * self.direction > 0:
                return None
            occupied = self._tiers.setdefault(tier, [])
            if all(end + self.gap <= s or start >= e + self.gap for s, e in occupied):
                occupied.append((start, end))
                return pos
            tier += 1
