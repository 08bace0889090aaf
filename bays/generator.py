"""
Bay generation for aisles.

Bays are derived from an aisle's sections, bays high and numbering scheme
every time they are needed. They have no identity of their own and are
never stored.
"""

from dataclasses import dataclass
from typing import List, Optional

from layout.models import Aisle, BayScheme

LEFT = 'left'
RIGHT = 'right'


@dataclass(frozen=True)
class Bay:
    """
    One addressable storage slot.

    Attributes:
        section: Zero-padded section number along the aisle
        bay: Zero-padded bay number within the section
        level: Stacking level (1 = lowest)
        location_code: Canonical address, e.g. ``A01-03-02``
        side: 'left' or 'right' for dual-side aisles, None otherwise
    """
    section: str
    bay: str
    level: int
    location_code: str
    side: Optional[str] = None


def pad(value: int) -> str:
    return str(value).zfill(2)


def location_code(zone: str, aisle_number: str, section: int, bay: int) -> str:
    """Zone and aisle number as-is, section and bay padded to two digits."""
    return f"{zone}{aisle_number}-{pad(section)}-{pad(bay)}"


def generate_bays(aisle: Aisle) -> List[Bay]:
    """
    Expand an aisle into its ordered bays.

    Sequential aisles get one bay per (section, level) numbered by level.
    Dual-side aisles get two per (section, level): the left side takes the
    odd number ``2*level-1`` and the right side the even number ``2*level``.

    Args:
        aisle: Aisle to expand

    Returns:
        Bays ordered by section, then level, then left before right
    """
    bays = []
    dual_side = BayScheme(aisle.bay_scheme) == BayScheme.DUAL_SIDE

    for section in range(1, aisle.sections + 1):
        for level in range(1, aisle.bays_high + 1):
            if dual_side:
                for side, number in ((LEFT, 2 * level - 1), (RIGHT, 2 * level)):
                    bays.append(_make_bay(aisle, section, level, number, side))
            else:
                bays.append(_make_bay(aisle, section, level, level))

    return bays


def count_bays(aisle: Aisle) -> int:
    """Number of bays ``generate_bays`` yields for this aisle."""
    per_level = 2 if BayScheme(aisle.bay_scheme) == BayScheme.DUAL_SIDE else 1
    return aisle.sections * aisle.bays_high * per_level


def _make_bay(aisle: Aisle, section: int, level: int, number: int,
              side: Optional[str] = None) -> Bay:
    return Bay(
        section=pad(section),
        bay=pad(number),
        level=level,
        location_code=location_code(aisle.zone, aisle.number, section, number),
        side=side,
    )
