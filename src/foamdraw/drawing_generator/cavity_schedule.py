"""
Notes and cavity schedule panel.

The panel below the views has two columns:
- left: general notes (the drawing's own notes, or the default boilerplate)
- right: layer metadata followed by the cavity schedule table

Both columns are filled top-down with a ``Cursor``. Every line asks the
cursor for room; when the cursor would cross the bottom of the panel the
column stops, so a long note list or a layer with many cavities is
truncated instead of running into the title block.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from reportlab.lib.utils import simpleSplit

from ..model import Block, Cavity, CavityShape, Layer
from .constants import (
    BORDER_COLOR,
    BORDER_WIDTH,
    FONT_FAMILY,
    PANEL_FONT_SIZE,
    PANEL_HEADING_SIZE,
    PANEL_PADDING,
    SCHEDULE_LINE_HEIGHT,
    THIN_LINE_WIDTH,
)
from .primitives import Line, Primitive, Rect, Text
from .view_area import ViewArea

logger = logging.getLogger(__name__)

DEFAULT_NOTES = (
    "ALL DIMENSIONS IN INCHES.",
    'TOLERANCE ±0.06" UNLESS OTHERWISE NOTED.',
    "CAVITY DEPTHS ARE MEASURED FROM THE TOP FACE OF THE LAYER.",
    "LAYER 1 IS THE BASE (BOTTOM) LAYER; LAYERS STACK UPWARD.",
    "VIEWS ARE SCALED INDEPENDENTLY. DO NOT SCALE DRAWING.",
)

# Schedule columns as (header, share of column width)
SCHEDULE_COLUMNS = (
    ("#", 0.08),
    ("L", 0.18),
    ("W", 0.18),
    ("D", 0.18),
    ("SHAPE", 0.38),
)


@dataclass(frozen=True)
class Cursor:
    """
    Vertical write position inside a panel column.

    ``y`` is the top of the next free line slot; ``bottom`` is the lowest
    coordinate a line may reach.
    """
    y: float
    bottom: float

    @property
    def remaining(self) -> float:
        return self.y - self.bottom

    def advance(self, height: float) -> "Cursor | None":
        """Cursor below a slot of ``height``, or None if the slot doesn't fit."""
        if height > self.remaining + 1e-9:
            return None
        return Cursor(self.y - height, self.bottom)


@dataclass
class ScheduleResult:
    primitives: list[Primitive] = field(default_factory=list)
    notes_rendered: int = 0
    rows_rendered: int = 0


def layer_metadata_lines(layer: Layer, index: int, total: int, block: Block) -> list[str]:
    """Metadata lines shown above the cavity schedule."""
    position = f"{index + 1} OF {total}"
    if index == 0:
        position += " (BASE)"
    elif index == total - 1:
        position += " (TOP)"
    return [
        f"LAYER: {layer.label}",
        f"POSITION: {position}",
        f'THICKNESS: {layer.thickness_in:.2f}"',
        f"MATERIAL: {layer.material_name or '-'}",
        f'BLOCK: {block.length_in:.2f}" × {block.width_in:.2f}"',
        f"CAVITIES: {len(layer.cavities)}",
    ]


def schedule_row(number: int, cavity: Cavity, thickness_in: float) -> tuple[str, ...]:
    """Cells of one schedule row; depth is shown as drawn (clamped to the layer)."""
    shape = cavity.shape.value.upper()
    if cavity.shape is CavityShape.CIRCLE:
        shape = f"CIRCLE Ø{cavity.effective_diameter:.2f}"
    return (
        str(number),
        f"{cavity.length_in:.2f}",
        f"{cavity.width_in:.2f}",
        f"{cavity.clamped_depth(thickness_in):.2f}",
        shape,
    )


class CavitySchedule:
    """
    Renders the notes and cavity schedule panel for one layer page.
    """

    def __init__(
        self,
        layer: Layer,
        layer_index: int,
        layer_count: int,
        block: Block,
        notes: tuple[str, ...] | list[str],
        area: ViewArea,
        line_height: float = SCHEDULE_LINE_HEIGHT,
    ):
        """
        Args:
            layer: Layer shown on this page
            layer_index: Position of the layer in the stack (0 = base)
            layer_count: Number of layers in the drawing
            block: Outer block
            notes: Drawing notes; empty means use DEFAULT_NOTES
            area: Panel bounds
            line_height: Height consumed by each text line
        """
        self.layer = layer
        self.layer_index = layer_index
        self.layer_count = layer_count
        self.block = block
        self.notes = tuple(notes) if notes else DEFAULT_NOTES
        self.area = area
        self.line_height = line_height

    def _columns(self) -> tuple[ViewArea, ViewArea]:
        half = self.area.width / 2
        left = ViewArea(self.area.x, self.area.y, half, self.area.height)
        right = ViewArea(self.area.x + half, self.area.y, half, self.area.height)
        return left.inset(PANEL_PADDING), right.inset(PANEL_PADDING)

    def _write(self, cursor: Cursor, out: list[Primitive], x: float, text: str,
               bold: bool = False, size: float = PANEL_FONT_SIZE) -> Cursor | None:
        """Write one line in the next slot; returns the advanced cursor or None if full."""
        nxt = cursor.advance(self.line_height)
        if nxt is None:
            return None
        out.append(Text(x, nxt.y + self.line_height * 0.25, text, size=size, bold=bold))
        return nxt

    def _render_notes(self, column: ViewArea, out: list[Primitive]) -> int:
        cursor = Cursor(column.top, column.bottom)
        cursor = self._write(cursor, out, column.x, "NOTES:", bold=True, size=PANEL_HEADING_SIZE)
        if cursor is None:
            return 0

        rendered = 0
        indent = column.x + 10
        for number, note in enumerate(self.notes, start=1):
            lines = simpleSplit(note, FONT_FAMILY, PANEL_FONT_SIZE, column.width - 10) or [""]
            for i, line in enumerate(lines):
                nxt = self._write(cursor, out, indent, line)
                if nxt is None:
                    logger.debug("Notes truncated after %d of %d", rendered, len(self.notes))
                    return rendered
                if i == 0:
                    # note number hangs in the indent of its first line
                    out.append(Text(column.x, nxt.y + self.line_height * 0.25, f"{number}.",
                                    size=PANEL_FONT_SIZE))
                cursor = nxt
            rendered += 1
        return rendered

    def _render_schedule(self, column: ViewArea, out: list[Primitive]) -> int:
        cursor = Cursor(column.top, column.bottom)
        cursor = self._write(cursor, out, column.x, "LAYER / MATERIAL",
                             bold=True, size=PANEL_HEADING_SIZE)
        if cursor is None:
            return 0

        for line in layer_metadata_lines(self.layer, self.layer_index,
                                         self.layer_count, self.block):
            cursor = self._write(cursor, out, column.x, line)
            if cursor is None:
                return 0

        col_x = []
        x = column.x
        for _, share in SCHEDULE_COLUMNS:
            col_x.append(x)
            x += column.width * share

        header = cursor.advance(self.line_height)
        if header is None:
            return 0
        baseline = header.y + self.line_height * 0.25
        for (name, _), cx in zip(SCHEDULE_COLUMNS, col_x):
            out.append(Text(cx, baseline, name, size=PANEL_FONT_SIZE, bold=True))
        out.append(Line(column.x, header.y, column.right, header.y,
                        stroke=BORDER_COLOR, stroke_width=THIN_LINE_WIDTH))
        cursor = header

        rows = 0
        thickness = self.layer.thickness_in
        for number, cavity in enumerate(self.layer.cavities, start=1):
            slot = cursor.advance(self.line_height)
            if slot is None:
                logger.debug("Cavity schedule for layer %s truncated at %d of %d rows",
                             self.layer.label, rows, len(self.layer.cavities))
                break
            baseline = slot.y + self.line_height * 0.25
            for cell, cx in zip(schedule_row(number, cavity, thickness), col_x):
                out.append(Text(cx, baseline, cell, size=PANEL_FONT_SIZE))
            cursor = slot
            rows += 1
        return rows

    def render(self) -> ScheduleResult:
        """Render the panel border, divider, notes column and schedule column."""
        result = ScheduleResult()
        out = result.primitives
        out.append(Rect(self.area.x, self.area.y, self.area.width, self.area.height,
                        stroke=BORDER_COLOR, stroke_width=BORDER_WIDTH))
        mid_x = self.area.x + self.area.width / 2
        out.append(Line(mid_x, self.area.bottom, mid_x, self.area.top,
                        stroke=BORDER_COLOR, stroke_width=THIN_LINE_WIDTH))

        notes_column, schedule_column = self._columns()
        result.notes_rendered = self._render_notes(notes_column, out)
        result.rows_rendered = self._render_schedule(schedule_column, out)
        return result
