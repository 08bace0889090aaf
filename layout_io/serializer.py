"""
JSON save/load of complete layouts.

A saved document carries the grid, the defaults, every aisle and the aisle
counter. Loading builds a brand new Layout; the live layout is only touched
when the caller hands the result to ``Layout.replace_with``.
"""

import json
import logging
import re
from pathlib import Path
from typing import Dict, Optional

from layout import Aisle, AisleStore, BayScheme, FormatError, GridSize, Layout, LayoutConfig
from layout.config import DEFAULT_GRID_COLS, DEFAULT_GRID_ROWS, LAYOUT_VERSION, format_aisle_number
from layout.models import utc_timestamp

logger = logging.getLogger(__name__)

TRAILING_NUMBER = re.compile(r'(\d+)$')


def aisle_to_dict(aisle: Aisle) -> Dict:
    return {
        'id': aisle.id,
        'number': aisle.number,
        'width': aisle.width,
        'height': aisle.height,
        'sections': aisle.sections,
        'baysHigh': aisle.bays_high,
        'gridRow': aisle.grid_row,
        'gridCol': aisle.grid_col,
        'zone': aisle.zone,
        'type': BayScheme(aisle.bay_scheme).value,
        'color': aisle.color,
        'orientation': aisle.orientation.value,
        'createdAt': aisle.created_at,
    }


def aisle_from_dict(key: str, data: Dict, config: LayoutConfig) -> Aisle:
    """
    Rebuild an aisle record from its saved form.

    Footprint fields are required. ``color`` and ``orientation`` are ignored
    because they are derived from the other fields.
    """
    if not isinstance(data, dict):
        raise FormatError(f"Aisle {key} is not an object")
    missing = [name for name in ('gridRow', 'gridCol', 'width', 'height') if name not in data]
    if missing:
        raise FormatError(f"Aisle {key} is missing {', '.join(missing)}")

    aisle_id = str(data.get('id', key))
    number = data.get('number')
    if number is None:
        match = TRAILING_NUMBER.search(aisle_id)
        if match is None:
            raise FormatError(f"Aisle {key} has no number")
        number = match.group(1)

    width, height = int(data['width']), int(data['height'])
    return Aisle(
        id=aisle_id,
        number=format_aisle_number(int(number)),
        zone=str(data.get('zone', config.zone)),
        grid_row=int(data['gridRow']),
        grid_col=int(data['gridCol']),
        width=width,
        height=height,
        sections=int(data.get('sections', max(width, height))),
        bays_high=int(data.get('baysHigh', config.default_bays_high)),
        bay_scheme=BayScheme(data.get('type', BayScheme.SEQUENTIAL.value)),
        created_at=str(data.get('createdAt') or utc_timestamp()),
    )


def save(layout: Layout) -> Dict:
    """Build the layout document."""
    aisles = layout.store.sorted_aisles()
    return {
        'version': LAYOUT_VERSION,
        'created': utc_timestamp(),
        'gridSize': layout.grid.to_dict(),
        'formData': layout.config.to_dict(),
        'aisles': {aisle.id: aisle_to_dict(aisle) for aisle in aisles},
        'nextAisleId': layout.next_aisle_number,
        'metadata': {
            'totalAisles': len(aisles),
            'totalBays': layout.store.total_bays(),
        },
    }


def load(document: Dict) -> Layout:
    """
    Build a Layout from a document.

    Raises:
        FormatError: document lacks ``version`` or ``aisles``, or holds
            aisles that break the layout rules
    """
    if not isinstance(document, dict) or not document.get('version') or 'aisles' not in document:
        raise FormatError("Invalid layout file format")
    if document['version'] != LAYOUT_VERSION:
        logger.warning(f"Layout version {document['version']} differs from {LAYOUT_VERSION}")

    aisles = document['aisles']
    if not isinstance(aisles, dict):
        raise FormatError("Layout aisles must be an object keyed by aisle id")

    grid_data = document.get('gridSize') or {}
    if not isinstance(grid_data, dict):
        raise FormatError("Layout gridSize must be an object with rows and cols")

    try:
        grid = GridSize(int(grid_data.get('rows', DEFAULT_GRID_ROWS)),
                        int(grid_data.get('cols', DEFAULT_GRID_COLS)))
        config = LayoutConfig.from_dict(document.get('formData'))
        next_number = max(1, int(document.get('nextAisleId') or 1))
        store = AisleStore(grid, next_aisle_number=next_number)
        records = [aisle_from_dict(key, data, config) for key, data in aisles.items()]
        for aisle in sorted(records, key=lambda a: int(a.number)):
            store.restore(aisle)
    except FormatError:
        raise
    except (TypeError, ValueError) as e:
        raise FormatError(f"Invalid layout: {e}") from e

    logger.info(f"Loaded layout with {len(store)} aisle(s) on {grid.rows}x{grid.cols} grid")
    return Layout(config=config, store=store)


def dumps(layout: Layout, indent: Optional[int] = 2) -> str:
    return json.dumps(save(layout), indent=indent)


def loads(text: str) -> Layout:
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise FormatError(f"Error loading layout file: {e}") from e
    return load(document)


def save_file(layout: Layout, file_path) -> Path:
    path = Path(file_path)
    path.write_text(dumps(layout), encoding='utf-8')
    logger.info(f"Layout saved to {path}")
    return path


def load_file(file_path) -> Layout:
    try:
        text = Path(file_path).read_text(encoding='utf-8')
    except UnicodeDecodeError as e:
        raise FormatError(f"Error loading layout file: {e}") from e
    return loads(text)


def default_filename(layout: Layout, kind: str = 'layout', extension: str = 'json') -> str:
    """File name used for downloads, e.g. ``warehouse_A_layout.json``."""
    return f"warehouse_{layout.config.zone}_{kind}.{extension}"
