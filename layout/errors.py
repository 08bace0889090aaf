"""
Errors raised by the layout engine.

Every error is a ``ValueError`` so callers that only care about "the
proposal was rejected" can catch that. A raised error means the store was
left untouched.
"""

from typing import Optional


class LayoutError(ValueError):
    """Base class for rejected layout operations."""


class BoundsError(LayoutError):
    """Rectangle falls outside the grid."""


class OverlapError(LayoutError):
    """Rectangle intersects an existing aisle."""

    def __init__(self, message: str, conflicting_id: Optional[str] = None):
        super().__init__(message)
        self.conflicting_id = conflicting_id


class NotStraightError(LayoutError):
    """Drawn segment or footprint is not a single row or column."""


class NotFoundError(LayoutError):
    """Operation referenced an aisle id that is not in the layout."""

    def __init__(self, aisle_id: str):
        super().__init__(f"Aisle {aisle_id} not found")
        self.aisle_id = aisle_id


class InvalidDimensionError(LayoutError):
    """Sections or bays high below 1."""


class FormatError(LayoutError):
    """Layout document is unparsable or missing required fields."""


class ConfirmationRequiredError(LayoutError):
    """A destructive bulk operation would discard aisles and was not confirmed."""

    def __init__(self, message: str, affected_ids):
        super().__init__(message)
        self.affected_ids = list(affected_ids)
