"""Reading and writing layouts: JSON documents, CSV bay lists, DXF drawings."""

from .csv_export import export_csv, export_rows, save_csv, write_csv
from .dxf_adapter import DXFAdapter
from .layout_importer import JSONAdapter, LayoutImporter
from .serializer import dumps, load, load_file, loads, save, save_file

__all__ = ['DXFAdapter', 'JSONAdapter', 'LayoutImporter',
           'dumps', 'export_csv', 'export_rows', 'load', 'load_file', 'loads',
           'save', 'save_csv', 'save_file', 'write_csv']
