"""
Drawing generator constants.

Sheet size, panel bands, and styling constants for layer drawings.
All values are PDF points (72 per inch) in page space with the origin at
the bottom-left corner of the sheet and Y pointing up.
"""

# =============================================================================
# SHEET AND LAYOUT CONSTANTS
# =============================================================================

# 11 x 8.5 inch sheet, landscape
PAGE_WIDTH = 792.0
PAGE_HEIGHT = 612.0

MARGIN = 36.0  # 0.5" on all sides

# Bands stacked from the bottom margin upward:
# title block, notes panel, view columns, column header strip
TITLE_BLOCK_HEIGHT = 64.0
NOTES_PANEL_HEIGHT = 150.0
COLUMN_HEADER_HEIGHT = 18.0

CONTENT_X = MARGIN
CONTENT_Y = MARGIN
CONTENT_WIDTH = PAGE_WIDTH - 2 * MARGIN
CONTENT_HEIGHT = PAGE_HEIGHT - 2 * MARGIN

TITLE_BLOCK_Y = CONTENT_Y
NOTES_PANEL_Y = TITLE_BLOCK_Y + TITLE_BLOCK_HEIGHT
VIEW_ROW_Y = NOTES_PANEL_Y + NOTES_PANEL_HEIGHT
COLUMN_HEADER_Y = CONTENT_Y + CONTENT_HEIGHT - COLUMN_HEADER_HEIGHT
VIEW_ROW_HEIGHT = COLUMN_HEADER_Y - VIEW_ROW_Y

VIEW_COLUMN_COUNT = 3
VIEW_COLUMN_WIDTH = CONTENT_WIDTH / VIEW_COLUMN_COUNT


# =============================================================================
# VIEW FITTING
# =============================================================================

# Fraction of the available viewport used by the shape itself
FILL_FACTOR = 0.82

# Space reserved for dimensions on each side of a view column
DIMENSION_GUTTER = 24.0


# =============================================================================
# DIMENSIONS
# =============================================================================

MIN_DIMENSION_SPAN = 6.0           # spans shorter than this are not dimensioned
EXTENSION_LINE_OVERSHOOT = 3.0     # extension line runs past the dimension line
ARROW_LEG = 3.5                    # arrow tick leg length, drawn at +/-45 degrees
LABEL_PADDING = 4.0                # added to the text width for the label patch
DIMENSION_FONT_SIZE = 7.0
OVERALL_DIMENSION_OFFSET = 12.0    # overall dims sit this far off the outline
CAVITY_DIMENSION_OFFSET = 8.0      # first tier of cavity dims off the outline
DIMENSION_TIER_SPACING = 10.0
SECONDARY_DIMENSION_OFFSET = 8.0   # depth dims to the right of a cavity


# =============================================================================
# NOTES PANEL
# =============================================================================

PANEL_PADDING = 6.0
SCHEDULE_LINE_HEIGHT = 10.0
PANEL_FONT_SIZE = 7.0
PANEL_HEADING_SIZE = 8.0


# =============================================================================
# STYLING
# =============================================================================

FONT_FAMILY = "Helvetica"

OUTLINE_STROKE_WIDTH = 1.0
OUTLINE_COLOR = "#000000"
OUTLINE_FILL = "#F2F2F2"
CAVITY_STROKE_WIDTH = 0.8
CAVITY_COLOR = "#B30000"
CAVITY_DASH = "3,2"
BORDER_COLOR = "#000000"
BORDER_WIDTH = 1.0
THIN_LINE_WIDTH = 0.5
DIMENSION_LINE_WIDTH = 0.4
DIMENSION_COLOR = "#000000"
LABEL_BACKGROUND = "#FFFFFF"
TITLE_BLOCK_DARK = "#1F2933"
TITLE_BLOCK_TEXT_LIGHT = "#FFFFFF"

DRAWING_TITLE = "FOAM INSERT - LAYER DRAWING"
DEFAULT_REVISION = "AS"
SCALE_TEXT = "NTS"
