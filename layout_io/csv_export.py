"""
Flat CSV export of every bay in a layout.

One row per bay. Aisle footprint and rack dimensions are repeated on every
row so the file can be used as a plain table. ``Total Bays`` is only filled
on the first row of each aisle.
"""

import csv
import io
import logging
from pathlib import Path
from typing import Dict, List

from bays import generate_bays
from layout import Aisle, Layout
from layout.config import CSV_COLUMNS

logger = logging.getLogger(__name__)


def grid_position(aisle: Aisle) -> str:
    """Footprint as ``R<row>[-R<last>] C<col>[-C<last>]``."""
    rows = f"R{aisle.grid_row}"
    if aisle.height > 1:
        rows += f"-R{aisle.grid_row + aisle.height - 1}"
    cols = f"C{aisle.grid_col}"
    if aisle.width > 1:
        cols += f"-C{aisle.grid_col + aisle.width - 1}"
    return f"{rows} {cols}"


def aisle_dimensions(aisle: Aisle) -> str:
    return f"{aisle.width}×{aisle.height}"


def export_rows(layout: Layout) -> List[Dict]:
    """
    Flatten the layout into bay rows.

    Returns:
        Rows keyed by CSV column name, aisles in number order and bays in
        generation order
    """
    config = layout.config
    rows = []

    for aisle in layout.store.sorted_aisles():
        bays = generate_bays(aisle)
        position = grid_position(aisle)
        dimensions = aisle_dimensions(aisle)
        for index, bay in enumerate(bays):
            rows.append({
                'Zone': aisle.zone,
                'Aisle': aisle.number,
                'Section': bay.section,
                'Bay': bay.bay,
                'Location Code': bay.location_code,
                'Height(mm)': config.height,
                'Width(mm)': config.width,
                'Depth(mm)': config.depth,
                'Grid Position': position,
                'Aisle Dimensions': dimensions,
                'Orientation': aisle.orientation.value,
                'Total Bays': len(bays) if index == 0 else '',
            })

    return rows


def write_csv(layout: Layout, stream) -> int:
    """
    Write the header and every bay row to an open text stream.

    Returns:
        Number of bay rows written
    """
    rows = export_rows(layout)
    writer = csv.DictWriter(stream, fieldnames=CSV_COLUMNS, lineterminator='\n')
    writer.writeheader()
    writer.writerows(rows)
    return len(rows)


def export_csv(layout: Layout) -> str:
    buffer = io.StringIO()
    write_csv(layout, buffer)
    return buffer.getvalue()


def save_csv(layout: Layout, file_path) -> Path:
    path = Path(file_path)
    if not layout.aisles:
        logger.warning("No aisles to export, writing header only")
    with open(path, 'w', newline='', encoding='utf-8') as f:
        count = write_csv(layout, f)
    logger.info(f"Exported {count} bay rows to {path}")
    return path
