"""
Pick-up, preview and drop of existing aisles.
"""

import logging
from enum import Enum
from typing import Optional, Tuple

from geometry import cell_in_grid
from layout import Aisle, Layout
from layout.errors import LayoutError
from .placement import Preview

logger = logging.getLogger(__name__)


class DragPhase(Enum):
    IDLE = 'idle'
    SELECTING = 'selecting'
    ARMED = 'armed'
    PREVIEWING = 'previewing'


class RelocationEngine:
    """
    Drag protocol: Idle -> (Selecting) -> Armed(offset) -> Previewing -> Idle.

    The first pick on an aisle arms the session and remembers where inside
    the aisle it was grabbed. Cursor moves produce previews. A pick while a
    preview exists drops the aisle there. A failed drop leaves the aisle
    where it was.
    """

    def __init__(self, layout: Layout):
        self.layout = layout
        self.phase = DragPhase.IDLE
        self.aisle_id: Optional[str] = None
        self.offset: Tuple[int, int] = (0, 0)
        self.preview: Optional[Preview] = None

    @property
    def active(self) -> bool:
        return self.phase != DragPhase.IDLE

    def begin_dragging(self) -> None:
        self._reset()
        self.phase = DragPhase.SELECTING

    def cancel(self) -> None:
        self._reset()

    def pick_cell(self, row: int, col: int) -> Optional[Aisle]:
        """
        Handle a cell click.

        Returns:
            The picked aisle when arming, the moved aisle on a drop, else None

        Raises:
            BoundsError, OverlapError: the drop was rejected (the session is
                back to Idle and the aisle did not move)
        """
        if self.phase == DragPhase.SELECTING:
            aisle = self.layout.store.aisle_at(row, col)
            if aisle is None:
                return None
            self.aisle_id = aisle.id
            self.offset = (row - aisle.grid_row, col - aisle.grid_col)
            self.phase = DragPhase.ARMED
            return aisle

        if self.phase == DragPhase.PREVIEWING:
            aisle_id, target = self.aisle_id, self.preview.rect
            self._reset()
            try:
                return self.layout.store.move(aisle_id, target.row, target.col)
            except LayoutError:
                logger.warning(f"Drop of aisle {aisle_id} at ({target.row},{target.col}) failed")
                raise

        return None

    def hover_at(self, row: int, col: int) -> Optional[Preview]:
        """
        Preview the dragged aisle anchored under the cursor.

        Returns:
            Candidate footprint with a validity flag, or None when nothing is
            armed or the cursor is outside the grid
        """
        if self.phase not in (DragPhase.ARMED, DragPhase.PREVIEWING):
            return None
        store = self.layout.store
        aisle = store.get_aisle(self.aisle_id)
        if aisle is None:
            self._reset()
            return None
        if not cell_in_grid(row, col, store.grid):
            self.preview = None
            self.phase = DragPhase.ARMED
            return None

        rect = aisle.rect.moved_to(row - self.offset[0], col - self.offset[1])
        self.preview = Preview(rect, store.is_valid_placement(rect, exclude_id=aisle.id))
        self.phase = DragPhase.PREVIEWING
        return self.preview

    def _reset(self) -> None:
        self.phase = DragPhase.IDLE
        self.aisle_id = None
        self.offset = (0, 0)
        self.preview = None
