#!/usr/bin/env python3
"""
Simple Warehouse Layout Session
===============================

Draw a few aisles, move one, duplicate one, then save the layout and export
its bay locations.
"""

import sys
import logging
import os
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from bays import generate_bays
from interaction import EditorSession
from layout import BayScheme, GridSize, Layout, LayoutConfig, LayoutError
from layout_io import save_csv, save_file
from visualization import LayoutVisualizer

# Setup simple logging
logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')

print("\n" + "="*60)
print("WAREHOUSE LAYOUT BUILDER")
print("="*60 + "\n")

# 1. Create layout
print("1. Creating layout...")
layout = Layout(GridSize(rows=20, cols=25), LayoutConfig(zone="A", default_bays_high=5))
session = EditorSession(layout)
print(f"   ✓ {layout.grid.rows}x{layout.grid.cols} grid, zone {layout.config.zone}\n")

# 2. Draw aisles
print("2. Drawing aisles...")
segments = [((2, 2), (2, 14)), ((5, 2), (5, 14)), ((9, 18), (17, 18))]
for start, end in segments:
    session.begin_drawing()
    session.pick_cell(*start)
    aisle = session.pick_cell(*end)
    print(f"   ✓ {aisle.label}: {aisle.orientation.value} {aisle.width}x{aisle.height} "
          f"at R{aisle.grid_row} C{aisle.grid_col}")

session.begin_drawing()
session.pick_cell(10, 2)
try:
    session.pick_cell(12, 8)
except LayoutError as e:
    print(f"   ✗ Diagonal rejected: {e}")
session.cancel()
print()

# 3. Move and duplicate
print("3. Moving and duplicating...")
session.begin_dragging()
picked = session.pick_cell(9, 18)
preview = session.hover_at(9, 20)
print(f"   ✓ Picked {picked.label}, preview at R{preview.rect.row} C{preview.rect.col} "
      f"({'valid' if preview.valid else 'invalid'})")
moved = session.pick_cell(9, 20)
print(f"   ✓ Dropped {moved.label} at R{moved.grid_row} C{moved.grid_col}")

copy = layout.store.duplicate(layout.store.sorted_aisles()[1].id)
layout.store.set_bay_scheme(copy.id, BayScheme.DUAL_SIDE)
print(f"   ✓ Duplicated into {copy.label} at R{copy.grid_row} C{copy.grid_col} (dual-side)\n")

# 4. Bays
print("4. Generating bays...")
for aisle in layout.store.sorted_aisles():
    bays = generate_bays(aisle)
    print(f"   ✓ {aisle.label}: {len(bays)} bays ({bays[0].location_code} .. {bays[-1].location_code})")
print()

# 5. Save and export
print("5. Saving and exporting...")
os.makedirs("output", exist_ok=True)
save_file(layout, "output/warehouse_A_layout.json")
save_csv(layout, "output/warehouse_A_locations.csv")
print("   ✓ Saved: output/warehouse_A_layout.json")
print("   ✓ Saved: output/warehouse_A_locations.csv")

viz = LayoutVisualizer(layout)
viz.plot_layout(title="Warehouse Layout - Zone A", show_bay_counts=True)
viz.save_plot("output/layout.png")
viz.close()
print("   ✓ Saved: output/layout.png\n")

stats = layout.get_statistics()
print("="*60)
print(f"COMPLETE! {stats['total_aisles']} aisles, {stats['total_bays']} bays")
print("="*60)
