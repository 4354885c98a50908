"""
Draw primitives for drawing pages.

Everything on a page is built from these records in page space (origin at
the bottom-left of the sheet, Y up). A primitive only becomes SVG when the
page is serialized; ``to_svg`` is the one place where Y is flipped into
SVG's top-left convention.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union
from xml.sax.saxutils import escape

from .constants import FONT_FAMILY


def _num(value: float) -> str:
    """Format a coordinate for SVG output."""
    return f"{value:.2f}"


def _stroke_attrs(stroke: str | None, stroke_width: float, dash: str | None) -> str:
    if stroke is None:
        return 'stroke="none"'
    attrs = f'stroke="{stroke}" stroke-width="{_num(stroke_width)}"'
    if dash:
        attrs += f' stroke-dasharray="{dash}"'
    return attrs


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    stroke: str = "#000000"
    stroke_width: float = 0.5
    dash: str | None = None

    @property
    def length(self) -> float:
        return ((self.x2 - self.x1) ** 2 + (self.y2 - self.y1) ** 2) ** 0.5

    def to_svg(self, page_height: float) -> str:
        return (
            f'<line x1="{_num(self.x1)}" y1="{_num(page_height - self.y1)}" '
            f'x2="{_num(self.x2)}" y2="{_num(page_height - self.y2)}" '
            f'{_stroke_attrs(self.stroke, self.stroke_width, self.dash)}/>'
        )


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle; (x, y) is its bottom-left corner."""
    x: float
    y: float
    width: float
    height: float
    stroke: str | None = "#000000"
    stroke_width: float = 0.5
    fill: str = "none"
    dash: str | None = None

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y + self.height

    def to_svg(self, page_height: float) -> str:
        return (
            f'<rect x="{_num(self.x)}" y="{_num(page_height - self.top)}" '
            f'width="{_num(self.width)}" height="{_num(self.height)}" '
            f'fill="{self.fill}" '
            f'{_stroke_attrs(self.stroke, self.stroke_width, self.dash)}/>'
        )


@dataclass(frozen=True)
class Circle:
    cx: float
    cy: float
    r: float
    stroke: str | None = "#000000"
    stroke_width: float = 0.5
    fill: str = "none"
    dash: str | None = None

    def to_svg(self, page_height: float) -> str:
        return (
            f'<circle cx="{_num(self.cx)}" cy="{_num(page_height - self.cy)}" '
            f'r="{_num(self.r)}" fill="{self.fill}" '
            f'{_stroke_attrs(self.stroke, self.stroke_width, self.dash)}/>'
        )


@dataclass(frozen=True)
class Polygon:
    points: tuple[tuple[float, float], ...]
    stroke: str | None = "#000000"
    stroke_width: float = 0.5
    fill: str = "none"
    dash: str | None = None

    def to_svg(self, page_height: float) -> str:
        coords = " ".join(f"{_num(x)},{_num(page_height - y)}" for x, y in self.points)
        return (
            f'<polygon points="{coords}" fill="{self.fill}" '
            f'{_stroke_attrs(self.stroke, self.stroke_width, self.dash)}/>'
        )


@dataclass(frozen=True)
class Text:
    """Single line of text; (x, y) is the baseline anchor point."""
    x: float
    y: float
    text: str
    size: float = 7.0
    bold: bool = False
    anchor: Literal["start", "middle", "end"] = "start"
    fill: str = "#000000"

    def to_svg(self, page_height: float) -> str:
        weight = ' font-weight="bold"' if self.bold else ""
        return (
            f'<text x="{_num(self.x)}" y="{_num(page_height - self.y)}" '
            f'font-family="{FONT_FAMILY}" font-size="{_num(self.size)}"{weight} '
            f'text-anchor="{self.anchor}" fill="{self.fill}">'
            f'{escape(self.text)}</text>'
        )


Primitive = Union[Line, Rect, Circle, Polygon, Text]
