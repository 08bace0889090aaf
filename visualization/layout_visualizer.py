"""
Layout Visualizer for Aisle Grids

Draws a layout the way the editor shows it:
- Grid cells (light lines, row 0 at the top)
- Aisles as filled rectangles in their palette colour, labelled zone+number
- Live drawing/drag previews (green when valid, red when rejected)
- The start cell of a drawing in progress
"""

import logging
from typing import Dict, Optional, Tuple

import matplotlib.pyplot as plt
import matplotlib.patches as mpatches

from bays import count_bays
from geometry import Orientation
from interaction import Preview

logger = logging.getLogger(__name__)


class LayoutVisualizer:
    """Renders a layout and editor previews with matplotlib."""

    def __init__(self, layout):
        """
        Initialize the visualizer with a layout.

        Args:
            layout: Layout to draw
        """
        self.layout = layout
        self.fig = None
        self.ax = None
        self.aisle_patches: Dict[str, mpatches.Rectangle] = {}

    def plot_layout(self, figsize: Tuple[int, int] = (12, 10), title: str = "Warehouse Layout",
                    show_grid: bool = True, show_labels: bool = True,
                    show_bay_counts: bool = False) -> None:
        """
        Plot the grid and every aisle.

        Args:
            figsize: Figure size (width, height)
            title: Plot title
            show_grid: Draw cell lines
            show_labels: Write zone+number on each aisle
            show_bay_counts: Add the bay count under each label
        """
        grid = self.layout.grid
        self.fig, self.ax = plt.subplots(figsize=figsize)
        self.aisle_patches = {}

        self.ax.set_xlim(0, grid.cols)
        self.ax.set_ylim(grid.rows, 0)
        self.ax.set_aspect('equal')

        if show_grid:
            self.ax.set_xticks(range(grid.cols + 1))
            self.ax.set_yticks(range(grid.rows + 1))
            self.ax.grid(True, color='lightgray', linewidth=0.5)
            self.ax.tick_params(labelsize=6)

        for aisle in self.layout.store.sorted_aisles():
            patch = mpatches.Rectangle(
                (aisle.grid_col, aisle.grid_row), aisle.width, aisle.height,
                facecolor=aisle.color,
                edgecolor='black',
                linewidth=1.5,
                alpha=0.85,
                label=aisle.label,
            )
            self.ax.add_patch(patch)
            self.aisle_patches[aisle.id] = patch

            if show_labels:
                text = aisle.label
                if show_bay_counts:
                    text += f"\n{count_bays(aisle)} bays"
                self.ax.text(
                    aisle.grid_col + aisle.width / 2,
                    aisle.grid_row + aisle.height / 2,
                    text,
                    ha='center', va='center',
                    fontsize=8, fontweight='bold', color='white',
                    rotation=90 if aisle.orientation == Orientation.VERTICAL and aisle.height > 2 else 0,
                )

        stats = self.layout.get_statistics()
        self.ax.set_title(
            f"{title}\nAisles: {stats['total_aisles']}  Total Bays: {stats['total_bays']}  "
            f"Avg Bays/Aisle: {stats['avg_bays_per_aisle']}",
            fontsize=12, fontweight='bold')
        plt.tight_layout()

    def plot_preview(self, preview: Optional[Preview]) -> Optional[mpatches.Rectangle]:
        """Overlay a drawing or drag preview on the current plot."""
        if self.ax is None:
            raise ValueError("No plot to draw on. Create a plot first.")
        if preview is None:
            return None
        rect = preview.rect
        patch = mpatches.Rectangle(
            (rect.col, rect.row), rect.width, rect.height,
            facecolor='green' if preview.valid else 'red',
            edgecolor='darkgreen' if preview.valid else 'darkred',
            linestyle='dashed',
            linewidth=2,
            alpha=0.4,
        )
        self.ax.add_patch(patch)
        return patch

    def mark_cell(self, row: int, col: int, color: str = 'orange') -> mpatches.Rectangle:
        """Highlight a single cell, e.g. the start point of a drawing."""
        if self.ax is None:
            raise ValueError("No plot to draw on. Create a plot first.")
        patch = mpatches.Rectangle((col, row), 1, 1, facecolor=color, edgecolor='black', alpha=0.7)
        self.ax.add_patch(patch)
        return patch

    def save_plot(self, filename: str, dpi: int = 150) -> None:
        """
        Save the current plot to a file.

        Args:
            filename: Output filename (with extension)
            dpi: Resolution in dots per inch
        """
        if self.fig is None:
            raise ValueError("No plot to save. Create a plot first.")

        self.fig.savefig(filename, dpi=dpi, bbox_inches='tight')
        logger.info(f"Plot saved to {filename}")

    def show(self) -> None:
        """Display the current plot."""
        if self.fig is None:
            raise ValueError("No plot to show. Create a plot first.")
        plt.show()

    def close(self) -> None:
        """Close the current plot."""
        if self.fig is not None:
            plt.close(self.fig)
            self.fig = None
            self.ax = None
            self.aisle_patches = {}
