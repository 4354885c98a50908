"""
Drawing Generator Module

Generates dimensioned orthographic drawings of layered foam inserts.
Each layer gets its own landscape sheet (11x8.5, 792x612 pt) with:

- Front, Top and Right views, each scaled independently to its column
- Overall and cavity dimensions with legibility and margin rules
- Notes and cavity schedule panel
- Title block with revision, date, scale and sheet fields
- SVG (per page) and multi-page PDF output

Usage:
    from foamdraw.drawing_generator import generate_drawing_pdf
    from foamdraw.model import DrawingInput

    drawing = DrawingInput.from_dict(data)
    pdf_bytes = generate_drawing_pdf(drawing)
"""

from .cavity_schedule import DEFAULT_NOTES, CavitySchedule, Cursor, ScheduleResult
from .constants import (
    DIMENSION_GUTTER,
    FILL_FACTOR,
    MARGIN,
    MIN_DIMENSION_SPAN,
    PAGE_HEIGHT,
    PAGE_WIDTH,
)
from .dimensions import DimensionStyle, Orientation, TierAllocator, render_dimension
from .drawing import FoamDrawing, assemble_document, generate_drawing_pdf
from .layer_sheet import compose_layer_page
from .page import DrawingPage, MultiPageDrawing
from .title_block import TitleBlock, TitleBlockInfo
from .view_area import ViewArea
from .view_projection import (
    CAVITY_DEPTH_ANCHOR,
    VIEW_SPECS,
    CavityDepthAnchor,
    ViewGeometry,
    ViewKind,
    ViewSpec,
    project_view,
)

__all__ = [
    # Entry points
    'generate_drawing_pdf',
    'assemble_document',
    'FoamDrawing',
    'compose_layer_page',
    # Pages
    'DrawingPage',
    'MultiPageDrawing',
    'ViewArea',
    'TitleBlock',
    'TitleBlockInfo',
    # Views and annotations
    'ViewKind',
    'ViewSpec',
    'VIEW_SPECS',
    'ViewGeometry',
    'CavityDepthAnchor',
    'CAVITY_DEPTH_ANCHOR',
    'project_view',
    'DimensionStyle',
    'Orientation',
    'TierAllocator',
    'render_dimension',
    'CavitySchedule',
    'Cursor',
    'ScheduleResult',
    'DEFAULT_NOTES',
    # Constants
    'PAGE_WIDTH',
    'PAGE_HEIGHT',
    'MARGIN',
    'FILL_FACTOR',
    'DIMENSION_GUTTER',
    'MIN_DIMENSION_SPAN',
]
