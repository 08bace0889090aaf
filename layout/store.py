"""
Aisle store: the single owner of every aisle record in a layout.

All mutations are validated against the grid and the other aisles before
anything is committed. A rejected operation raises a ``LayoutError`` and
leaves the store exactly as it was.
"""

import logging
from dataclasses import replace
from typing import Dict, Iterator, List, Optional, Tuple

from geometry import Orientation, Rect, contains_cell, rectangles_overlap, within_bounds
from .config import DUPLICATE_OFFSET, format_aisle_number
from .errors import (
    BoundsError,
    ConfirmationRequiredError,
    InvalidDimensionError,
    NotFoundError,
    NotStraightError,
    OverlapError,
)
from .models import Aisle, BayScheme, GridSize

logger = logging.getLogger(__name__)


class AisleStore:
    """
    Mapping from aisle id to aisle record on a bounded grid.

    Keeps the layout invariants: every aisle inside the grid, no two aisles
    overlapping, every footprint straight, sections and bays high at least 1,
    ids and numbers unique.
    """

    def __init__(self, grid: Optional[GridSize] = None, next_aisle_number: int = 1):
        self.grid = grid or GridSize()
        self.aisles: Dict[str, Aisle] = {}
        self.next_aisle_number = next_aisle_number

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_aisle(self, aisle_id: str) -> Optional[Aisle]:
        """Get an aisle by ID."""
        return self.aisles.get(aisle_id)

    def require(self, aisle_id: str) -> Aisle:
        """Get an aisle by ID or raise NotFoundError."""
        aisle = self.aisles.get(aisle_id)
        if aisle is None:
            raise NotFoundError(aisle_id)
        return aisle

    def aisle_at(self, row: int, col: int) -> Optional[Aisle]:
        """Aisle covering a cell. Aisles never overlap, so there is at most one."""
        for aisle in self.aisles.values():
            if contains_cell(aisle.rect, row, col):
                return aisle
        return None

    def find_conflict(self, rect: Rect, exclude_id: Optional[str] = None) -> Optional[Aisle]:
        """First aisle overlapping ``rect``, ignoring the aisle ``exclude_id``."""
        for aisle in self.aisles.values():
            if aisle.id == exclude_id:
                continue
            if rectangles_overlap(rect, aisle.rect):
                return aisle
        return None

    def check_placement(self, rect: Rect, exclude_id: Optional[str] = None) -> None:
        """
        Validate a footprint against the grid and every other aisle.

        Raises:
            NotStraightError: footprint wider than one cell in both directions
            BoundsError: footprint leaves the grid
            OverlapError: footprint intersects another aisle
        """
        if rect.width < 1 or rect.height < 1:
            raise BoundsError(f"Empty footprint {rect.width}x{rect.height}")
        if not rect.is_straight:
            raise NotStraightError(
                f"Aisle footprint {rect.width}x{rect.height} must be a single row or column")
        if not within_bounds(rect, self.grid):
            raise BoundsError(
                f"Footprint at ({rect.row},{rect.col}) size {rect.width}x{rect.height} "
                f"is outside the {self.grid.rows}x{self.grid.cols} grid")
        conflict = self.find_conflict(rect, exclude_id)
        if conflict is not None:
            raise OverlapError(
                f"Footprint at ({rect.row},{rect.col}) overlaps aisle {conflict.label}",
                conflicting_id=conflict.id)

    def is_valid_placement(self, rect: Rect, exclude_id: Optional[str] = None) -> bool:
        try:
            self.check_placement(rect, exclude_id)
        except (NotStraightError, BoundsError, OverlapError):
            return False
        return True

    def sorted_aisles(self) -> List[Aisle]:
        """Aisles in creation (number) order."""
        return sorted(self.aisles.values(), key=lambda a: int(a.number))

    def total_bays(self) -> int:
        """Sequential bay count over all aisles (sections x bays high)."""
        return sum(aisle.sequential_bay_count for aisle in self.aisles.values())

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def insert(self, rect: Rect, zone: str, bays_high: int,
               sections: Optional[int] = None,
               bay_scheme: BayScheme = BayScheme.SEQUENTIAL) -> Aisle:
        """
        Validate and commit a new aisle.

        Args:
            rect: Proposed footprint
            zone: Zone tag for the aisle
            bays_high: Stacking depth per section
            sections: Section count (defaults to the long extent)
            bay_scheme: Bay numbering scheme

        Returns:
            The committed aisle with a fresh id and number
        """
        if sections is None:
            sections = max(rect.width, rect.height)
        _check_dimensions(sections, bays_high)
        try:
            self.check_placement(rect)
        except (NotStraightError, BoundsError, OverlapError) as e:
            logger.warning(f"Rejected new aisle: {e}")
            raise

        number = self.next_aisle_number
        aisle_id = self._fresh_id(number)
        aisle = Aisle(
            id=aisle_id,
            number=format_aisle_number(number),
            zone=zone,
            grid_row=rect.row,
            grid_col=rect.col,
            width=rect.width,
            height=rect.height,
            sections=sections,
            bays_high=bays_high,
            bay_scheme=BayScheme(bay_scheme),
        )
        self.aisles[aisle_id] = aisle
        self.next_aisle_number = number + 1
        logger.info(f"Placed aisle {aisle.label} at ({rect.row},{rect.col}) "
                    f"{aisle.orientation.value} {rect.width}x{rect.height}")
        return aisle

    def restore(self, aisle: Aisle) -> Aisle:
        """
        Re-admit a saved aisle keeping its id and number.

        Used by loaders. Applies the same validation as insert and keeps the
        number counter ahead of every restored number.
        """
        if aisle.id in self.aisles:
            raise OverlapError(f"Duplicate aisle id {aisle.id}", conflicting_id=aisle.id)
        if any(int(a.number) == int(aisle.number) for a in self.aisles.values()):
            raise OverlapError(f"Duplicate aisle number {aisle.number}")
        _check_dimensions(aisle.sections, aisle.bays_high)
        self.check_placement(aisle.rect)
        self.aisles[aisle.id] = aisle
        self.next_aisle_number = max(self.next_aisle_number, int(aisle.number) + 1)
        return aisle

    def move(self, aisle_id: str, new_row: int, new_col: int) -> Aisle:
        """Relocate an aisle, leaving every field except its anchor untouched."""
        aisle = self.require(aisle_id)
        target = aisle.rect.moved_to(new_row, new_col)
        try:
            self.check_placement(target, exclude_id=aisle_id)
        except (BoundsError, OverlapError) as e:
            logger.warning(f"Rejected move of aisle {aisle.label}: {e}")
            raise
        moved = aisle.moved_to(new_row, new_col)
        self.aisles[aisle_id] = moved
        logger.info(f"Moved aisle {aisle.label} from ({aisle.grid_row},{aisle.grid_col}) "
                    f"to ({new_row},{new_col})")
        return moved

    def resize(self, aisle_id: str, sections: Optional[int] = None,
               bays_high: Optional[int] = None) -> Aisle:
        """Update sections and/or bays high. The footprint does not change."""
        aisle = self.require(aisle_id)
        updated = replace(
            aisle,
            sections=aisle.sections if sections is None else sections,
            bays_high=aisle.bays_high if bays_high is None else bays_high,
        )
        _check_dimensions(updated.sections, updated.bays_high)
        self.aisles[aisle_id] = updated
        return updated

    def set_bay_scheme(self, aisle_id: str, bay_scheme: BayScheme) -> Aisle:
        aisle = self.require(aisle_id)
        updated = replace(aisle, bay_scheme=BayScheme(bay_scheme))
        self.aisles[aisle_id] = updated
        return updated

    def remove(self, aisle_id: str) -> Aisle:
        """Delete an aisle. Its number is not handed out again."""
        aisle = self.require(aisle_id)
        del self.aisles[aisle_id]
        logger.info(f"Removed aisle {aisle.label}")
        return aisle

    def duplicate(self, aisle_id: str) -> Aisle:
        """
        Clone an aisle two cells away across its long axis.

        Horizontal aisles are copied downwards, vertical aisles to the right.
        The clone gets a fresh id, number and timestamp and is validated as a
        normal insert.
        """
        source = self.require(aisle_id)
        if source.orientation == Orientation.HORIZONTAL:
            target = source.rect.moved_to(source.grid_row + DUPLICATE_OFFSET, source.grid_col)
        else:
            target = source.rect.moved_to(source.grid_row, source.grid_col + DUPLICATE_OFFSET)
        return self.insert(
            target,
            zone=source.zone,
            bays_high=source.bays_high,
            sections=source.sections,
            bay_scheme=source.bay_scheme,
        )

    # ------------------------------------------------------------------
    # Bulk operations: impact query first, then an explicit apply
    # ------------------------------------------------------------------

    def orphaned_by(self, grid: GridSize) -> List[str]:
        """IDs of aisles that would no longer fit inside ``grid``."""
        return [aisle.id for aisle in self.sorted_aisles()
                if not within_bounds(aisle.rect, grid)]

    def resize_grid(self, grid: GridSize, discard_orphans: bool = False) -> List[str]:
        """
        Change the grid size.

        Aisles left outside the new grid are only removed when the caller
        passes ``discard_orphans=True`` after confirming ``orphaned_by``.

        Returns:
            IDs of the removed aisles
        """
        orphans = self.orphaned_by(grid)
        if orphans and not discard_orphans:
            raise ConfirmationRequiredError(
                f"Resizing to {grid.rows}x{grid.cols} would remove {len(orphans)} aisle(s): "
                f"{', '.join(orphans)}", orphans)
        for aisle_id in orphans:
            del self.aisles[aisle_id]
        self.grid = grid
        logger.info(f"Grid resized to {grid.rows}x{grid.cols}, removed {len(orphans)} aisle(s)")
        return orphans

    def discard_impact(self) -> List[str]:
        """IDs that clearing or replacing the layout would discard."""
        return [aisle.id for aisle in self.sorted_aisles()]

    def clear(self, confirmed: bool = False) -> List[str]:
        """Remove every aisle and restart numbering. Requires confirmation when non-empty."""
        removed = self.discard_impact()
        if removed and not confirmed:
            raise ConfirmationRequiredError(
                f"Clearing would discard {len(removed)} aisle(s)", removed)
        self.aisles.clear()
        self.next_aisle_number = 1
        logger.info(f"Cleared layout, removed {len(removed)} aisle(s)")
        return removed

    # ------------------------------------------------------------------
    # Audit
    # ------------------------------------------------------------------

    def validate(self) -> Tuple[bool, List[str]]:
        """
        Validate every layout invariant.

        Returns:
            Tuple of (is_valid, list_of_errors)
        """
        errors = []
        aisles = self.sorted_aisles()
        numbers = set()

        for aisle in aisles:
            if not aisle.rect.is_straight:
                errors.append(f"Aisle {aisle.id} is not straight ({aisle.width}x{aisle.height})")
            if not within_bounds(aisle.rect, self.grid):
                errors.append(f"Aisle {aisle.id} is outside the grid")
            if aisle.sections < 1 or aisle.bays_high < 1:
                errors.append(f"Aisle {aisle.id} has sections/bays high below 1")
            if aisle.number in numbers:
                errors.append(f"Aisle number {aisle.number} is used twice")
            numbers.add(aisle.number)
            if int(aisle.number) >= self.next_aisle_number:
                errors.append(f"Aisle number {aisle.number} is not below the next counter value")

        for i, a in enumerate(aisles):
            for b in aisles[i + 1:]:
                if rectangles_overlap(a.rect, b.rect):
                    errors.append(f"Aisles {a.id} and {b.id} overlap")

        return len(errors) == 0, errors

    def get_statistics(self) -> Dict:
        """Get statistics about the layout."""
        total_aisles = len(self.aisles)
        total_bays = self.total_bays()
        return {
            'total_aisles': total_aisles,
            'total_bays': total_bays,
            'avg_bays_per_aisle': round(total_bays / total_aisles, 1) if total_aisles else 0,
            'horizontal_aisles': sum(1 for a in self.aisles.values()
                                     if a.orientation == Orientation.HORIZONTAL),
            'vertical_aisles': sum(1 for a in self.aisles.values()
                                   if a.orientation == Orientation.VERTICAL),
        }

    def _fresh_id(self, number: int) -> str:
        aisle_id = f"aisle-{number}"
        suffix = 1
        while aisle_id in self.aisles:
            aisle_id = f"aisle-{number}-{suffix}"
            suffix += 1
        return aisle_id

    def __len__(self):
        return len(self.aisles)

    def __iter__(self) -> Iterator[Aisle]:
        return iter(self.sorted_aisles())

    def __contains__(self, aisle_id):
        return aisle_id in self.aisles

    def __repr__(self):
        return (f"AisleStore(grid={self.grid.rows}x{self.grid.cols}, "
                f"aisles={len(self.aisles)}, next={self.next_aisle_number})")


def _check_dimensions(sections: int, bays_high: int) -> None:
    if sections < 1:
        raise InvalidDimensionError(f"Sections must be at least 1, got {sections}")
    if bays_high < 1:
        raise InvalidDimensionError(f"Bays high must be at least 1, got {bays_high}")
