"""
Editor session: one tagged mode routing grid events to the active engine.
"""

import logging
from enum import Enum
from typing import List, Optional

from layout import Aisle, Layout
from .placement import DrawPhase, PlacementEngine, Preview
from .relocation import DragPhase, RelocationEngine

logger = logging.getLogger(__name__)


class EditorMode(Enum):
    IDLE = 'idle'
    DRAWING = 'drawing'
    DRAGGING = 'dragging'


class EditorSession:
    """
    Owns the drawing and dragging engines for one layout.

    The session records which tool was chosen last. Starting one tool
    cancels the other, and cell picks and cursor moves only reach the chosen
    engine. The mode falls back to Idle once that engine finishes its cycle.
    """

    def __init__(self, layout: Layout):
        self.layout = layout
        self.placement = PlacementEngine(layout)
        self.relocation = RelocationEngine(layout)
        self._tool = EditorMode.IDLE

    @property
    def mode(self) -> EditorMode:
        if self._tool == EditorMode.DRAWING and self.placement.active:
            return EditorMode.DRAWING
        if self._tool == EditorMode.DRAGGING and self.relocation.active:
            return EditorMode.DRAGGING
        return EditorMode.IDLE

    def begin_drawing(self) -> None:
        self.relocation.cancel()
        self.placement.begin_drawing()
        self._tool = EditorMode.DRAWING

    def begin_dragging(self) -> None:
        self.placement.cancel()
        self.relocation.begin_dragging()
        self._tool = EditorMode.DRAGGING

    def cancel(self) -> None:
        self.placement.cancel()
        self.relocation.cancel()
        self._tool = EditorMode.IDLE

    def pick_cell(self, row: int, col: int) -> Optional[Aisle]:
        mode = self.mode
        if mode == EditorMode.DRAWING:
            return self.placement.pick_cell(row, col)
        if mode == EditorMode.DRAGGING:
            return self.relocation.pick_cell(row, col)
        return None

    def hover_at(self, row: int, col: int) -> Optional[Preview]:
        mode = self.mode
        if mode == EditorMode.DRAWING:
            return self.placement.preview_at(row, col)
        if mode == EditorMode.DRAGGING:
            return self.relocation.hover_at(row, col)
        return None

    def replace_layout(self, other: Layout, confirmed: bool = False) -> List[str]:
        """Swap in a loaded layout, ending any drawing or drag in progress."""
        discarded = self.layout.replace_with(other, confirmed=confirmed)
        self.cancel()
        return discarded

    @property
    def instructions(self) -> str:
        """Short prompt describing what the next click will do."""
        mode = self.mode
        if mode == EditorMode.DRAWING:
            if self.placement.phase == DrawPhase.AWAITING_START:
                return "Click start point anywhere on grid"
            return "Click end point on same row or column"
        if mode == EditorMode.DRAGGING:
            if self.relocation.phase == DragPhase.SELECTING:
                return "Click any aisle to start dragging"
            return "Click to drop aisle at new position"
        return "Choose a tool to create or move aisles"

    def __repr__(self):
        return f"EditorSession(mode={self.mode.value}, layout={self.layout!r})"
