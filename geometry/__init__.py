"""Grid geometry for aisle layouts."""

from .rect import (
    Orientation,
    Rect,
    cell_in_grid,
    classify_orientation,
    contains_cell,
    rectangles_overlap,
    segment_rect,
    within_bounds,
)

__all__ = ['Orientation', 'Rect', 'cell_in_grid', 'classify_orientation',
           'contains_cell', 'rectangles_overlap', 'segment_rect', 'within_bounds']
