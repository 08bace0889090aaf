"""
DXF interchange for aisle layouts.

Each aisle is drawn as a closed LWPOLYLINE rectangle on its own layer named
after the aisle (zone + number, e.g. ``A01``). The grid boundary sits on the
``grid`` layer. Row 0 is at the top of the drawing, so y grows upwards from
the last grid row.
"""

import logging
import re
from pathlib import Path
from typing import List, Optional, Tuple

import ezdxf

from geometry import Rect
from layout import Aisle, AisleStore, FormatError, GridSize, Layout, LayoutConfig
from layout.config import format_aisle_number
from layout.errors import LayoutError

logger = logging.getLogger(__name__)

GRID_LAYER = 'grid'
AISLE_LAYER_PATTERN = re.compile(r'^(?P<zone>.*?)(?P<number>\d+)$')


def hex_to_rgb(color: str) -> Tuple[int, int, int]:
    color = color.lstrip('#')
    return int(color[0:2], 16), int(color[2:4], 16), int(color[4:6], 16)


class DXFAdapter:
    """Write layouts to DXF drawings and read them back."""

    def __init__(self, cell_size: float = 1000.0):
        """
        Args:
            cell_size: Drawing units per grid cell (mm by default)
        """
        self.cell_size = cell_size

    def validate_format(self, file_path: str) -> bool:
        """Check if file is a valid DXF file."""
        return str(file_path).lower().endswith('.dxf') and Path(file_path).exists()

    def export_layout(self, layout: Layout, file_path) -> Path:
        """Write the grid boundary and one rectangle per aisle."""
        doc = ezdxf.new()
        msp = doc.modelspace()
        rows = layout.grid.rows

        doc.layers.add(GRID_LAYER)
        boundary = Rect(0, 0, layout.grid.cols, rows)
        msp.add_lwpolyline(self._corners(boundary, rows), close=True,
                           dxfattribs={'layer': GRID_LAYER})

        for aisle in layout.store.sorted_aisles():
            layer = doc.layers.add(aisle.label)
            layer.rgb = hex_to_rgb(aisle.color)
            msp.add_lwpolyline(self._corners(aisle.rect, rows), close=True,
                               dxfattribs={'layer': aisle.label})

        path = Path(file_path)
        doc.saveas(path)
        logger.info(f"Exported {len(layout.aisles)} aisle(s) to {path}")
        return path

    def import_layout(self, file_path, config: Optional[LayoutConfig] = None) -> Layout:
        """
        Rebuild a layout from a drawing written by ``export_layout``.

        Section counts and bays high are not part of the drawing; they come
        from ``config`` the same way they do for freshly drawn aisles.
        """
        config = config or LayoutConfig()
        doc = ezdxf.readfile(str(file_path))
        msp = doc.modelspace()

        grid = None
        shapes = []
        for entity in msp.query('LWPOLYLINE'):
            layer_name = entity.dxf.layer
            points = [(p[0], p[1]) for p in entity.get_points('xy')]
            if layer_name.lower() == GRID_LAYER:
                min_x, min_y, max_x, max_y = _bounding_box(points)
                grid = GridSize(rows=self._cells(max_y - min_y), cols=self._cells(max_x - min_x))
                continue
            match = AISLE_LAYER_PATTERN.match(layer_name)
            if match and int(match.group('number')) > 0:
                shapes.append((match.group('zone'), int(match.group('number')), points))

        grid = grid or GridSize()
        store = AisleStore(grid)
        try:
            for zone, number, points in sorted(shapes, key=lambda s: s[1]):
                store.restore(self._aisle_from_points(zone, number, points, grid, config))
        except LayoutError as e:
            raise FormatError(f"Invalid aisle in {file_path}: {e}") from e

        logger.info(f"Imported {len(store)} aisle(s) from {file_path}")
        return Layout(config=config, store=store)

    def _aisle_from_points(self, zone: str, number: int, points: List[Tuple[float, float]],
                           grid: GridSize, config: LayoutConfig) -> Aisle:
        min_x, min_y, max_x, max_y = _bounding_box(points)
        width = self._cells(max_x - min_x)
        height = self._cells(max_y - min_y)
        return Aisle(
            id=f"aisle-{number}",
            number=format_aisle_number(number),
            zone=zone or config.zone,
            grid_row=grid.rows - self._cells(max_y),
            grid_col=self._cells(min_x),
            width=width,
            height=height,
            sections=max(width, height),
            bays_high=config.default_bays_high,
        )

    def _corners(self, rect: Rect, rows: int) -> List[Tuple[float, float]]:
        s = self.cell_size
        top, bottom = (rows - rect.row) * s, (rows - rect.bottom) * s
        left, right = rect.col * s, rect.right * s
        return [(left, top), (right, top), (right, bottom), (left, bottom)]

    def _cells(self, length: float) -> int:
        return int(round(length / self.cell_size))


def _bounding_box(points):
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    return min(xs), min(ys), max(xs), max(ys)
