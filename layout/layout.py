"""
Layout aggregate: grid, defaults and aisles handled as one unit.
"""

import logging
from typing import Dict, List, Optional

from .config import LayoutConfig
from .errors import ConfirmationRequiredError
from .models import Aisle, GridSize
from .store import AisleStore

logger = logging.getLogger(__name__)


class Layout:
    """
    Complete warehouse layout.

    Owns the aisle store and the defaults used for new aisles. Loading a
    document produces a separate Layout that replaces this one in a single
    step via ``replace_with``.
    """

    def __init__(self, grid: Optional[GridSize] = None,
                 config: Optional[LayoutConfig] = None,
                 store: Optional[AisleStore] = None):
        # An empty store is falsy, so test against None
        self.config = config if config is not None else LayoutConfig()
        self.store = store if store is not None else AisleStore(grid or GridSize())

    @property
    def grid(self) -> GridSize:
        return self.store.grid

    @property
    def aisles(self) -> Dict[str, Aisle]:
        return self.store.aisles

    @property
    def next_aisle_number(self) -> int:
        return self.store.next_aisle_number

    def discard_impact(self) -> List[str]:
        """IDs of the aisles a clear or a replace would discard."""
        return self.store.discard_impact()

    def replace_with(self, other: 'Layout', confirmed: bool = False) -> List[str]:
        """
        Swap in another layout's grid, defaults and aisles.

        Returns:
            IDs of the aisles that were discarded
        """
        discarded = self.discard_impact()
        if discarded and not confirmed:
            raise ConfirmationRequiredError(
                f"Replacing the layout would discard {len(discarded)} aisle(s)", discarded)
        self.config, self.store = other.config, other.store
        logger.info(f"Layout replaced: {len(self.store)} aisle(s) on "
                    f"{self.grid.rows}x{self.grid.cols} grid")
        return discarded

    def set_config(self, config: LayoutConfig) -> None:
        """New defaults apply to aisles created from now on only."""
        self.config = config

    def get_statistics(self) -> Dict:
        return self.store.get_statistics()

    def __eq__(self, other):
        if not isinstance(other, Layout):
            return NotImplemented
        return (self.grid == other.grid and
                self.config == other.config and
                self.aisles == other.aisles and
                self.next_aisle_number == other.next_aisle_number)

    def __repr__(self):
        return (f"Layout(grid={self.grid.rows}x{self.grid.cols}, "
                f"zone={self.config.zone}, aisles={len(self.store)})")
