"""
Multi-page drawing support.

This module provides classes for managing multi-page layer drawings: one
``DrawingPage`` per sheet, collected in a ``MultiPageDrawing`` that can be
serialized to SVG (one document per page) or to a single multi-page PDF.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from reportlab.graphics import renderPDF
from reportlab.pdfgen import canvas
from svglib.svglib import svg2rlg

from .constants import (
    BORDER_COLOR,
    BORDER_WIDTH,
    MARGIN,
    PAGE_HEIGHT,
    PAGE_WIDTH,
)
from .primitives import Primitive, Rect
from .view_area import ViewArea

if TYPE_CHECKING:
    from .title_block import TitleBlock
    from .view_projection import ViewKind

logger = logging.getLogger(__name__)


@dataclass
class DrawingPage:
    """
    One landscape sheet of a layer drawing.

    Attributes:
        page_number: Sheet number, starting at 1
        total_pages: Sheet count of the document
        title_block: Title block drawn across the bottom band
        elements: Draw primitives in page space (bottom-left origin)
        page_title: Title of the page, e.g. the layer label
        view_scales: Scale chosen for each view on this page
    """

    page_number: int
    total_pages: int
    title_block: "TitleBlock | None" = None
    elements: list[Primitive] = field(default_factory=list)
    page_title: str = ""
    view_scales: dict["ViewKind", float] = field(default_factory=dict)

    # Sheet dimensions
    width: float = PAGE_WIDTH
    height: float = PAGE_HEIGHT
    margin: float = MARGIN

    def add_elements(self, elements: list[Primitive]) -> None:
        """Add multiple primitives to the page content."""
        self.elements.extend(elements)

    @property
    def drawing_area(self) -> ViewArea:
        """Area inside the border."""
        return ViewArea(
            x=self.margin,
            y=self.margin,
            width=self.width - 2 * self.margin,
            height=self.height - 2 * self.margin,
        )

    def all_elements(self) -> list[Primitive]:
        """Border, content and title block, in paint order."""
        area = self.drawing_area
        parts: list[Primitive] = [
            Rect(0, 0, self.width, self.height, stroke=None, fill="white"),
            Rect(area.x, area.y, area.width, area.height,
                 stroke=BORDER_COLOR, stroke_width=BORDER_WIDTH),
        ]
        parts.extend(self.elements)
        if self.title_block:
            parts.extend(self.title_block.render())
        return parts

    def generate_svg(self) -> str:
        """Serialize the sheet as a standalone SVG document (Y flipped here)."""
        svg_parts = [
            '<?xml version="1.0" encoding="UTF-8"?>',
            self._svg_header(),
        ]
        svg_parts.extend(e.to_svg(self.height) for e in self.all_elements())
        svg_parts.append("</svg>")
        return "\n".join(svg_parts)

    def _svg_header(self) -> str:
        return (
            f'<svg xmlns="http://www.w3.org/2000/svg" '
            f'width="{self.width:g}" height="{self.height:g}" '
            f'viewBox="0 0 {self.width:g} {self.height:g}">'
        )


@dataclass
class MultiPageDrawing:
    """
    Ordered sheets of one layer drawing.

    Sheet numbers follow list order. Output is either one SVG per sheet or
    a single PDF with one page per sheet.
    """

    pages: list[DrawingPage] = field(default_factory=list)
    title: str = ""
    subject: str = ""

    def add_page(self, page: DrawingPage) -> None:
        self.pages.append(page)
        self._update_page_numbers()

    def _update_page_numbers(self) -> None:
        """Update page numbers, totals and title block sheet fields on all pages."""
        total = len(self.pages)
        for i, page in enumerate(self.pages):
            page.page_number = i + 1
            page.total_pages = total
            if page.title_block:
                page.title_block.info.sheet_number = i + 1
                page.title_block.info.sheet_count = total

    def generate_svgs(self) -> list[str]:
        return [page.generate_svg() for page in self.pages]

    def export_svg_files(self, base_path: str | Path) -> list[str]:
        """
        Write each sheet to its own SVG file.

        A single sheet is written to ``{base_path}.svg``; several sheets to
        ``{base_path}_page{n}.svg``. Returns the written paths in sheet order.
        """
        single = len(self.pages) == 1
        paths = []
        for page in self.pages:
            suffix = "" if single else f"_page{page.page_number}"
            path = f"{base_path}{suffix}.svg"
            Path(path).write_text(page.generate_svg(), encoding="utf-8")
            paths.append(path)
        return paths

    def to_pdf_bytes(self) -> bytes:
        """
        Render all pages into one PDF, one sheet per page, in page order.

        Returns:
            The PDF document
        """
        if not self.pages:
            raise ValueError("No pages to export")

        # Get page size from first page
        page_width = self.pages[0].width
        page_height = self.pages[0].height

        buffer = io.BytesIO()
        c = canvas.Canvas(buffer, pagesize=(page_width, page_height), invariant=True)
        if self.title:
            c.setTitle(self.title)
        if self.subject:
            c.setSubject(self.subject)

        for page in self.pages:
            # Convert SVG to reportlab drawing
            svg_content = page.generate_svg()
            drawing = svg2rlg(io.BytesIO(svg_content.encode("utf-8")))
            if drawing is None:
                raise ValueError(f"Failed to parse SVG content for page {page.page_number}")

            # Scale drawing to fit page
            scale = min(page_width / drawing.width, page_height / drawing.height)
            drawing.width *= scale
            drawing.height *= scale
            drawing.scale(scale, scale)

            renderPDF.draw(drawing, c, 0, 0)
            c.showPage()

        c.save()
        pdf = buffer.getvalue()
        logger.debug("Rendered %d page(s), %d bytes", len(self.pages), len(pdf))
        return pdf

    def export_pdf(self, output_path: str | Path) -> None:
        """
        Export all pages to a single multi-page PDF.

        Args:
            output_path: Output PDF file path
        """
        Path(output_path).write_bytes(self.to_pdf_bytes())
