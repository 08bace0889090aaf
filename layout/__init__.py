"""Aisle layout model, store and configuration."""

from .config import LayoutConfig
from .errors import (
    BoundsError,
    ConfirmationRequiredError,
    FormatError,
    InvalidDimensionError,
    LayoutError,
    NotFoundError,
    NotStraightError,
    OverlapError,
)
from .layout import Layout
from .models import Aisle, BayScheme, GridSize
from .store import AisleStore

__all__ = [
    'Aisle', 'AisleStore', 'BayScheme', 'GridSize', 'Layout', 'LayoutConfig',
    'LayoutError', 'BoundsError', 'OverlapError', 'NotStraightError',
    'NotFoundError', 'InvalidDimensionError', 'FormatError',
    'ConfirmationRequiredError',
]
