"""
Layout configuration and constants.

Holds the per-layout defaults applied to newly drawn aisles (the ``formData``
block of a saved layout) together with the fixed limits of the editor.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Optional

# Grid limits for sizes entered by the user
MIN_GRID_SIZE = 10
MAX_GRID_SIZE = 50
DEFAULT_GRID_ROWS = 20
DEFAULT_GRID_COLS = 25
FALLBACK_GRID_SIZE = 20

# Aisle defaults
DUPLICATE_OFFSET = 2  # cells, perpendicular to the aisle's long axis
AISLE_NUMBER_WIDTH = 2
AISLE_PALETTE = (
    "#4CAF50",
    "#2196F3",
    "#FF9800",
    "#9C27B0",
    "#F44336",
    "#00BCD4",
    "#8BC34A",
    "#FF5722",
)

# Layout document
LAYOUT_VERSION = "1.0"

CSV_COLUMNS = (
    'Zone', 'Aisle', 'Section', 'Bay', 'Location Code',
    'Height(mm)', 'Width(mm)', 'Depth(mm)',
    'Grid Position', 'Aisle Dimensions', 'Orientation', 'Total Bays',
)


@dataclass
class LayoutConfig:
    """
    Defaults copied onto new aisles and repeated into exports.

    Attributes:
        zone: Zone tag given to newly drawn aisles
        height: Rack height in mm
        width: Rack width in mm
        depth: Rack depth in mm
        default_bays_high: Bays high given to newly drawn aisles
    """
    zone: str = "A"
    height: int = 1500
    width: int = 1000
    depth: int = 1200
    default_bays_high: int = 5

    def __post_init__(self):
        if self.default_bays_high < 1:
            raise ValueError("default_bays_high must be at least 1")

    def to_dict(self) -> Dict:
        return {
            'zone': self.zone,
            'height': self.height,
            'width': self.width,
            'depth': self.depth,
            'defaultBaysHigh': self.default_bays_high,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> 'LayoutConfig':
        """Build a config from a ``formData`` block, defaulting missing keys."""
        defaults = asdict(cls())
        data = data or {}
        if not isinstance(data, dict):
            raise ValueError(f"formData must be an object, got {type(data).__name__}")
        return cls(
            zone=str(data.get('zone', defaults['zone'])),
            height=int(data.get('height', defaults['height'])),
            width=int(data.get('width', defaults['width'])),
            depth=int(data.get('depth', defaults['depth'])),
            default_bays_high=int(data.get('defaultBaysHigh', defaults['default_bays_high'])),
        )

    def with_bays_high_step(self, step: int) -> 'LayoutConfig':
        """Copy with default_bays_high nudged by ``step``, never below 1."""
        values = asdict(self)
        values['default_bays_high'] = max(1, self.default_bays_high + step)
        return LayoutConfig(**values)


def clamp_grid_dimension(value) -> int:
    """
    Turn raw user input into a grid dimension.

    Non-numeric input falls back to the default size before clamping.
    """
    try:
        number = int(value)
    except (TypeError, ValueError):
        number = FALLBACK_GRID_SIZE
    if number == 0:
        number = FALLBACK_GRID_SIZE
    return max(MIN_GRID_SIZE, min(MAX_GRID_SIZE, number))


def format_aisle_number(number: int) -> str:
    return str(number).zfill(AISLE_NUMBER_WIDTH)


def aisle_color(number: int) -> str:
    """Palette colour for the aisle created with this counter value."""
    return AISLE_PALETTE[(number - 1) % len(AISLE_PALETTE)]
