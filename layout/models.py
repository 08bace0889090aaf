"""
Core records of a warehouse layout.

This module defines the grid size and the aisle record. Derived values
(orientation, colour, footprint) are computed from the stored fields on
every access and are never stored themselves.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Dict

from geometry import Orientation, Rect, classify_orientation
from .config import (
    DEFAULT_GRID_COLS,
    DEFAULT_GRID_ROWS,
    aisle_color,
    clamp_grid_dimension,
)


def utc_timestamp() -> str:
    """Current time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


class BayScheme(str, Enum):
    """How bays along an aisle are numbered."""
    SEQUENTIAL = 'sequential'
    DUAL_SIDE = 'dual-side'


@dataclass(frozen=True)
class GridSize:
    """
    Bounded drawing grid.

    Attributes:
        rows: Number of rows
        cols: Number of columns
    """
    rows: int = DEFAULT_GRID_ROWS
    cols: int = DEFAULT_GRID_COLS

    def __post_init__(self):
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError(f"Grid size must be positive, got {self.rows}x{self.cols}")

    @classmethod
    def clamped(cls, rows, cols) -> 'GridSize':
        """Grid size from raw user input, clamped to the editor limits."""
        return cls(clamp_grid_dimension(rows), clamp_grid_dimension(cols))

    def to_dict(self) -> Dict:
        return {'rows': self.rows, 'cols': self.cols}


@dataclass
class Aisle:
    """
    A straight storage run on the grid.

    Attributes:
        id: Unique identifier, stable for the aisle's lifetime
        number: Zero-padded display counter ("01", "02", ...)
        zone: Zone tag copied from the layout defaults at creation
        grid_row: Top row of the footprint
        grid_col: Left column of the footprint
        width: Columns covered
        height: Rows covered
        sections: Addressable sections along the long axis
        bays_high: Stacking depth per section
        bay_scheme: Bay numbering scheme
        created_at: ISO-8601 creation timestamp
    """
    id: str
    number: str
    zone: str
    grid_row: int
    grid_col: int
    width: int
    height: int
    sections: int
    bays_high: int
    bay_scheme: BayScheme = BayScheme.SEQUENTIAL
    created_at: str = field(default_factory=utc_timestamp)

    @property
    def rect(self) -> Rect:
        return Rect(self.grid_row, self.grid_col, self.width, self.height)

    @property
    def orientation(self) -> Orientation:
        return classify_orientation(self.width, self.height)

    @property
    def color(self) -> str:
        return aisle_color(int(self.number))

    @property
    def label(self) -> str:
        """Zone-prefixed aisle name, e.g. ``A01``."""
        return f"{self.zone}{self.number}"

    @property
    def sequential_bay_count(self) -> int:
        return self.sections * self.bays_high

    def moved_to(self, row: int, col: int) -> 'Aisle':
        return replace(self, grid_row=row, grid_col=col)

    def __repr__(self):
        return (f"Aisle(id={self.id}, label={self.label}, "
                f"at=({self.grid_row},{self.grid_col}), "
                f"size={self.width}x{self.height}, bays_high={self.bays_high})")
