#!/usr/bin/env python3
"""
Generate a block layout of parallel horizontal aisles.

Aisles run left to right, one row apart with one empty row between them as
a walkway, starting one cell in from the grid edge.
"""

import sys
from pathlib import Path

from geometry import Rect
from layout import GridSize, Layout, LayoutConfig
from layout_io import save_file


def generate_block_layout(rows=20, cols=25, aisle_length=20, zone="A", bays_high=5):
    """
    Fill a grid with parallel aisles.

    Args:
        rows: Grid rows (default 20)
        cols: Grid columns (default 25)
        aisle_length: Cells per aisle (default 20)
        zone: Zone tag for every aisle
        bays_high: Bays high for every aisle

    Returns:
        Layout with one aisle on every other row
    """
    layout = Layout(GridSize(rows, cols), LayoutConfig(zone=zone, default_bays_high=bays_high))
    length = min(aisle_length, cols - 2)

    for row in range(1, rows - 1, 2):
        layout.store.insert(Rect(row=row, col=1, width=length, height=1),
                            zone=zone, bays_high=bays_high)

    return layout


if __name__ == "__main__":
    output_file = sys.argv[1] if len(sys.argv) > 1 else "data/layout_block_20x25.json"
    layout = generate_block_layout()
    Path(output_file).parent.mkdir(parents=True, exist_ok=True)
    save_file(layout, output_file)

    stats = layout.get_statistics()
    print(f"✓ Generated {layout.grid.rows}x{layout.grid.cols} block layout")
    print(f"✓ Total aisles: {stats['total_aisles']}")
    print(f"✓ Total bays: {stats['total_bays']}")
    print(f"✓ Saved to: {output_file}")
