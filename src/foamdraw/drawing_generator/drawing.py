"""
Layer drawing generator.

Turns one ``DrawingInput`` into a paginated drawing: one sheet per layer,
in layer order (sheet 1 is the base layer). The input is validated before
any page is composed, so a bad input never yields a partial document.
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

from ..model import DrawingInput, validate_drawing_input
from .constants import DRAWING_TITLE
from .dimensions import DEFAULT_STYLE, DimensionStyle
from .layer_sheet import compose_layer_page
from .page import MultiPageDrawing

logger = logging.getLogger(__name__)


def assemble_document(
    drawing: DrawingInput,
    strict: bool = False,
    today: date | None = None,
    style: DimensionStyle = DEFAULT_STYLE,
) -> MultiPageDrawing:
    """
    Build the multi-page drawing for a quote.

    Args:
        drawing: Drawing input
        strict: Treat stack-height and footprint mismatches as errors
        today: Date used when the input has no date (defaults to today)
        style: Dimension styling

    Returns:
        MultiPageDrawing with exactly one page per layer

    Raises:
        DrawingInputError: if the input cannot be drawn
    """
    validate_drawing_input(drawing, strict=strict)

    drawn_date = drawing.date or (today or date.today()).isoformat()
    total = len(drawing.layers)
    logger.info("Drawing quote %s: %d layer(s)", drawing.quote_no, total)

    pages = []
    for index in range(total):
        logger.debug("Composing sheet %d of %d", index + 1, total)
        pages.append(compose_layer_page(drawing, index, drawn_date, style))

    document = MultiPageDrawing(
        title=f"{DRAWING_TITLE} - {drawing.quote_no}",
        subject=drawing.customer_name or "",
    )
    for page in pages:
        document.add_page(page)
    return document


def generate_drawing_pdf(
    drawing: DrawingInput,
    strict: bool = False,
    today: date | None = None,
) -> bytes:
    """Render the drawing for a quote as PDF bytes (792 x 612 pt sheets)."""
    return assemble_document(drawing, strict=strict, today=today).to_pdf_bytes()


class FoamDrawing:
    """
    Convenience wrapper around the assembler for scripts and the CLI.

    Usage:
        drawing = FoamDrawing(drawing_input)
        drawing.generate()
        drawing.export_pdf("Q-1001.pdf")
    """

    def __init__(self, drawing_input: DrawingInput, strict: bool = False,
                 today: date | None = None):
        self.drawing_input = drawing_input
        self.strict = strict
        self.today = today
        self.document: MultiPageDrawing | None = None

    def generate(self) -> MultiPageDrawing:
        self.document = assemble_document(self.drawing_input, strict=self.strict,
                                          today=self.today)
        return self.document

    def _ensure_generated(self) -> MultiPageDrawing:
        if self.document is None:
            return self.generate()
        return self.document

    @property
    def page_count(self) -> int:
        return len(self._ensure_generated().pages)

    def pdf_bytes(self) -> bytes:
        return self._ensure_generated().to_pdf_bytes()

    def export_pdf(self, filepath: str | Path) -> None:
        """Export the drawing as a multi-page PDF file."""
        self._ensure_generated().export_pdf(filepath)
        logger.info("Exported PDF: %s", filepath)

    def export_svg(self, base_path: str | Path) -> list[str]:
        """Export one SVG file per page; returns the written paths."""
        paths = self._ensure_generated().export_svg_files(base_path)
        logger.info("Exported %d SVG file(s)", len(paths))
        return paths
