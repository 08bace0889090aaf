"""
Layout importer choosing an adapter by file type.
"""

from pathlib import Path

from layout import FormatError, Layout
from . import serializer
from .dxf_adapter import DXFAdapter


class JSONAdapter:
    """Saved layout documents."""

    def validate_format(self, file_path: str) -> bool:
        return str(file_path).lower().endswith('.json') and Path(file_path).exists()

    def import_layout(self, file_path: str) -> Layout:
        return serializer.load_file(file_path)


class LayoutImporter:
    """Main importer for layout files (JSON documents or DXF drawings)."""

    def __init__(self, dxf_adapter: DXFAdapter = None):
        self.adapters = [JSONAdapter(), dxf_adapter or DXFAdapter()]

    def import_from_file(self, file_path: str) -> Layout:
        """
        Import a layout from a file.

        Args:
            file_path: Path to a ``.json`` or ``.dxf`` layout file

        Returns:
            A new Layout, not yet attached to any session
        """
        for adapter in self.adapters:
            if adapter.validate_format(file_path):
                return adapter.import_layout(file_path)
        raise FormatError(f"Invalid or unsupported file: {file_path}")
