"""
Grid rectangle primitives for the aisle layout.

All coordinates are integer cell indices. A rectangle is anchored at its
top-left cell and spans ``width`` columns and ``height`` rows, so it covers
rows ``[row, row + height)`` and columns ``[col, col + width)``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class Orientation(str, Enum):
    """Direction of an aisle's long axis."""
    HORIZONTAL = 'horizontal'
    VERTICAL = 'vertical'


@dataclass(frozen=True)
class Rect:
    """
    Axis-aligned rectangle of grid cells.

    Attributes:
        row: Top row index
        col: Left column index
        width: Number of columns covered
        height: Number of rows covered
    """
    row: int
    col: int
    width: int = 1
    height: int = 1

    @property
    def bottom(self) -> int:
        """Row index just past the last covered row."""
        return self.row + self.height

    @property
    def right(self) -> int:
        """Column index just past the last covered column."""
        return self.col + self.width

    @property
    def is_straight(self) -> bool:
        return self.width == 1 or self.height == 1

    @property
    def orientation(self) -> Orientation:
        return classify_orientation(self.width, self.height)

    def moved_to(self, row: int, col: int) -> 'Rect':
        """Same footprint anchored at another cell."""
        return Rect(row, col, self.width, self.height)

    def cells(self):
        """Iterate over every covered (row, col) cell."""
        for r in range(self.row, self.bottom):
            for c in range(self.col, self.right):
                yield r, c


def rectangles_overlap(a: Rect, b: Rect) -> bool:
    """Check if two rectangles share any area. Touching edges do not count."""
    return not (a.right <= b.col or b.right <= a.col or
                a.bottom <= b.row or b.bottom <= a.row)


def within_bounds(rect: Rect, grid) -> bool:
    """Check if a rectangle fits inside a grid with ``rows``/``cols`` attributes."""
    return (rect.row >= 0 and rect.col >= 0 and
            rect.bottom <= grid.rows and rect.right <= grid.cols)


def contains_cell(rect: Rect, row: int, col: int) -> bool:
    return rect.row <= row < rect.bottom and rect.col <= col < rect.right


def cell_in_grid(row: int, col: int, grid) -> bool:
    return 0 <= row < grid.rows and 0 <= col < grid.cols


def classify_orientation(width: int, height: int) -> Orientation:
    """A footprint is horizontal unless it only extends along rows."""
    if width > 1 or height <= 1:
        return Orientation.HORIZONTAL
    return Orientation.VERTICAL


def segment_rect(start: Tuple[int, int], end: Tuple[int, int]) -> Optional[Rect]:
    """
    Build the rectangle spanned by two cells on the same row or column.

    Args:
        start: (row, col) of the first picked cell
        end: (row, col) of the second picked cell

    Returns:
        Rect anchored at the minimum coordinate, or None for a diagonal pair
    """
    (r1, c1), (r2, c2) = start, end
    if r1 == r2:
        return Rect(row=r1, col=min(c1, c2), width=abs(c2 - c1) + 1, height=1)
    if c1 == c2:
        return Rect(row=min(r1, r2), col=c1, width=1, height=abs(r2 - r1) + 1)
    return None
