"""Matplotlib rendering of aisle layouts."""

from .layout_visualizer import LayoutVisualizer

__all__ = ['LayoutVisualizer']
