#!/usr/bin/env python3
"""
Layout Exporter

Reads a saved layout (JSON document or DXF drawing) and writes next to it:
- <name>_locations.csv  one row per bay
- <name>.dxf            aisle rectangles (skipped when the input is DXF)
- <name>.png            rendered layout

Usage:
    python export_layout.py <layout.json|layout.dxf>
"""

import sys
import logging
from pathlib import Path

from layout import LayoutError
from layout_io import DXFAdapter, LayoutImporter, save_csv
from visualization import LayoutVisualizer


def export_layout(layout_file):
    """
    Export a layout file to CSV, DXF and PNG.

    Args:
        layout_file (str): Path to the layout file

    Returns:
        Layout: the imported layout
    """
    source = Path(layout_file)
    layout = LayoutImporter().import_from_file(str(source))
    stem = source.with_suffix('')

    save_csv(layout, f"{stem}_locations.csv")
    if source.suffix.lower() != '.dxf':
        DXFAdapter().export_layout(layout, f"{stem}.dxf")

    viz = LayoutVisualizer(layout)
    viz.plot_layout(title=f"Warehouse Layout - {source.name}")
    viz.save_plot(f"{stem}.png")
    viz.close()

    return layout


def main():
    """Command line interface."""
    logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')

    if len(sys.argv) != 2:
        print("Usage: python export_layout.py <layout.json|layout.dxf>")
        sys.exit(1)

    layout_file = sys.argv[1]

    try:
        layout = export_layout(layout_file)

        stats = layout.get_statistics()
        print(f"\nLayout Exported Successfully!")
        print(f"{'=' * 50}")
        print(f"Grid: {layout.grid.rows} x {layout.grid.cols}")
        print(f"Aisles: {stats['total_aisles']}")
        print(f"  - Horizontal: {stats['horizontal_aisles']}")
        print(f"  - Vertical: {stats['vertical_aisles']}")
        print(f"Total Bays: {stats['total_bays']}")
        print(f"Avg Bays/Aisle: {stats['avg_bays_per_aisle']}")

        return layout

    except FileNotFoundError:
        print(f"Error: File '{layout_file}' not found.")
        sys.exit(1)
    except LayoutError as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
