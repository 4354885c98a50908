"""
ViewArea class for managing rectangular areas on drawing sheets.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ViewArea:
    """
    Represents a rectangular area on the drawing sheet for placing content.

    Coordinates are page space: origin at the bottom-left corner of the
    sheet, Y pointing up.

    Attributes:
        x: Left edge position (pt from sheet left)
        y: Bottom edge position (pt from sheet bottom)
        width: Width of the area (pt)
        height: Height of the area (pt)
    """
    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        """Left edge x-coordinate."""
        return self.x

    @property
    def right(self) -> float:
        """Right edge x-coordinate."""
        return self.x + self.width

    @property
    def bottom(self) -> float:
        """Bottom edge y-coordinate."""
        return self.y

    @property
    def top(self) -> float:
        """Top edge y-coordinate."""
        return self.y + self.height

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2

    def inset(self, margin: float) -> 'ViewArea':
        """Return a new ViewArea inset by the given margin on all sides."""
        return ViewArea(
            x=self.x + margin,
            y=self.y + margin,
            width=self.width - 2 * margin,
            height=self.height - 2 * margin
        )

    def split_columns(self, count: int) -> list['ViewArea']:
        """Split the area into ``count`` equal-width columns, left to right."""
        col_width = self.width / count
        return [
            ViewArea(x=self.x + i * col_width, y=self.y,
                     width=col_width, height=self.height)
            for i in range(count)
        ]

    def contains(self, other: 'ViewArea', tol: float = 1e-9) -> bool:
        """True if ``other`` lies fully inside this area."""
        return (other.left >= self.left - tol
                and other.right <= self.right + tol
                and other.bottom >= self.bottom - tol
                and other.top <= self.top + tol)

    def __repr__(self) -> str:
        return (f"ViewArea(x={self.x}, y={self.y}, "
                f"w={self.width}, h={self.height})")
