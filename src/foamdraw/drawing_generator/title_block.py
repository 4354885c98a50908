"""
Title block generator for layer drawings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from .constants import (
    BORDER_COLOR,
    BORDER_WIDTH,
    CONTENT_WIDTH,
    CONTENT_X,
    DEFAULT_REVISION,
    DRAWING_TITLE,
    SCALE_TEXT,
    THIN_LINE_WIDTH,
    TITLE_BLOCK_DARK,
    TITLE_BLOCK_HEIGHT,
    TITLE_BLOCK_TEXT_LIGHT,
    TITLE_BLOCK_Y,
)
from .primitives import Line, Primitive, Rect, Text
from .view_area import ViewArea


@dataclass
class TitleBlockInfo:
    """Information displayed in the title block."""
    quote_no: str = ""
    customer_name: str | None = None
    title: str = DRAWING_TITLE
    revision: str = DEFAULT_REVISION
    layer_text: str = ""
    drawn_date: str | None = None
    scale_text: str = SCALE_TEXT
    sheet_number: int = 1
    sheet_count: int = 1

    def __post_init__(self):
        if self.drawn_date is None:
            self.drawn_date = date.today().isoformat()

    @property
    def sheet_text(self) -> str:
        return f"{self.sheet_number} OF {self.sheet_count}"


@dataclass
class TitleBlock:
    """
    Engineering title block across the bottom of the sheet.

    Left: dark panel with the drawing title, quote number and customer.
    Right: four boxed fields, REVISION, DATE, SCALE and SHEET.
    """
    info: TitleBlockInfo = field(default_factory=TitleBlockInfo)
    area: ViewArea = field(default_factory=lambda: ViewArea(
        x=CONTENT_X,
        y=TITLE_BLOCK_Y,
        width=CONTENT_WIDTH,
        height=TITLE_BLOCK_HEIGHT,
    ))
    dark_share: float = 0.6

    def _fields(self) -> list[tuple[str, str]]:
        info = self.info
        return [
            ("REVISION", info.revision),
            ("DATE", info.drawn_date or ""),
            ("SCALE", info.scale_text),
            ("SHEET", info.sheet_text),
        ]

    def render(self) -> list[Primitive]:
        """Title block as draw primitives."""
        a = self.area
        info = self.info
        dark_width = a.width * self.dark_share
        top = a.top

        parts: list[Primitive] = [
            Rect(a.x, a.y, dark_width, a.height, stroke=None, fill=TITLE_BLOCK_DARK),
            Text(a.x + 10, top - 20, info.title, size=13, bold=True, fill=TITLE_BLOCK_TEXT_LIGHT),
            Text(a.x + 10, top - 38, f"QUOTE: {info.quote_no}", size=9,
                 fill=TITLE_BLOCK_TEXT_LIGHT),
        ]
        if info.customer_name:
            parts.append(Text(a.x + 10, top - 52, f"CUSTOMER: {info.customer_name}", size=9,
                              fill=TITLE_BLOCK_TEXT_LIGHT))
        if info.layer_text:
            parts.append(Text(a.x + dark_width - 10, top - 38, info.layer_text, size=9,
                              bold=True, anchor="end", fill=TITLE_BLOCK_TEXT_LIGHT))

        fields = self._fields()
        box_x = a.x + dark_width
        box_width = (a.width - dark_width) / len(fields)
        for i, (label, value) in enumerate(fields):
            x = box_x + i * box_width
            if i > 0:
                parts.append(Line(x, a.bottom, x, a.top, stroke=BORDER_COLOR,
                                  stroke_width=THIN_LINE_WIDTH))
            parts.append(Text(x + 4, top - 12, label, size=6, fill="#555555"))
            parts.append(Text(x + box_width / 2, a.y + a.height / 2 - 8, value,
                              size=10, bold=True, anchor="middle"))

        parts.append(Rect(a.x, a.y, a.width, a.height, stroke=BORDER_COLOR,
                          stroke_width=BORDER_WIDTH * 1.5))
        return parts
