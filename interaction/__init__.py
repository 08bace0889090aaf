"""Interactive drawing and dragging of aisles."""

from .placement import DrawPhase, PlacementEngine, Preview
from .relocation import DragPhase, RelocationEngine
from .session import EditorMode, EditorSession

__all__ = ['DrawPhase', 'DragPhase', 'EditorMode', 'EditorSession',
           'PlacementEngine', 'Preview', 'RelocationEngine']
