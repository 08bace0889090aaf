"""
Two-point drawing of straight aisles.

The user picks a start cell and then an end cell on the same row or column.
The spanned cells become a new aisle once the store accepts the footprint.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from geometry import Rect, segment_rect
from layout import Aisle, Layout, NotStraightError
from layout.errors import LayoutError

logger = logging.getLogger(__name__)


class DrawPhase(Enum):
    IDLE = 'idle'
    AWAITING_START = 'awaiting_start'
    AWAITING_END = 'awaiting_end'


@dataclass(frozen=True)
class Preview:
    """Candidate footprint shown while the user moves the cursor."""
    rect: Rect
    valid: bool


class PlacementEngine:
    """
    Drawing protocol: Idle -> AwaitingStart -> AwaitingEnd -> Idle.

    A diagonal end pick is rejected and keeps the session waiting for a
    better end point. Any other rejection ends the session.
    """

    def __init__(self, layout: Layout):
        self.layout = layout
        self.phase = DrawPhase.IDLE
        self.start_point: Optional[Tuple[int, int]] = None

    @property
    def active(self) -> bool:
        return self.phase != DrawPhase.IDLE

    def begin_drawing(self) -> None:
        self.phase = DrawPhase.AWAITING_START
        self.start_point = None

    def cancel(self) -> None:
        self.phase = DrawPhase.IDLE
        self.start_point = None

    def pick_cell(self, row: int, col: int) -> Optional[Aisle]:
        """
        Handle a cell click.

        Returns:
            The new aisle when the click completes a valid segment, else None

        Raises:
            NotStraightError: end cell shares neither row nor column with the
                start (the session keeps waiting for an end cell)
            BoundsError, OverlapError: the store rejected the footprint (the
                session is back to Idle)
        """
        if self.phase == DrawPhase.IDLE:
            return None

        if self.phase == DrawPhase.AWAITING_START:
            self.start_point = (row, col)
            self.phase = DrawPhase.AWAITING_END
            return None

        rect = segment_rect(self.start_point, (row, col))
        if rect is None:
            raise NotStraightError(
                "Aisles must be straight - either horizontal (same row) or vertical (same column)")

        config = self.layout.config
        self.cancel()
        try:
            return self.layout.store.insert(rect, zone=config.zone,
                                            bays_high=config.default_bays_high)
        except LayoutError:
            logger.warning(f"Discarded drawn segment at ({rect.row},{rect.col}) "
                           f"size {rect.width}x{rect.height}")
            raise

    def preview_at(self, row: int, col: int) -> Optional[Preview]:
        """Footprint the end cell would produce, or None if it is not straight."""
        if self.phase != DrawPhase.AWAITING_END:
            return None
        rect = segment_rect(self.start_point, (row, col))
        if rect is None:
            return None
        return Preview(rect, self.layout.store.is_valid_placement(rect))
