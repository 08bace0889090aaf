"""
Unit tests for layout save/load, CSV export and DXF interchange
"""

import csv
import io
import json
import tempfile
import unittest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from geometry import Rect
from layout import (
    BayScheme,
    ConfirmationRequiredError,
    FormatError,
    GridSize,
    Layout,
    LayoutConfig,
)
from layout.config import CSV_COLUMNS
from layout_io import (
    DXFAdapter,
    LayoutImporter,
    dumps,
    export_csv,
    export_rows,
    load,
    load_file,
    loads,
    save,
    save_csv,
    save_file,
)
from layout_io.csv_export import aisle_dimensions, grid_position
from layout_io.serializer import default_filename


def build_layout():
    layout = Layout(GridSize(rows=20, cols=25), LayoutConfig(zone="B", default_bays_high=3))
    store = layout.store
    store.insert(Rect(2, 2, 6, 1), zone="B", bays_high=3)
    store.insert(Rect(5, 15, 1, 4), zone="B", bays_high=2)
    third = store.insert(Rect(10, 0, 3, 1), zone="C", bays_high=1,
                         bay_scheme=BayScheme.DUAL_SIDE)
    store.remove(third.id)
    store.insert(Rect(12, 3, 2, 1), zone="B", bays_high=4, bay_scheme=BayScheme.DUAL_SIDE)
    return layout


class TestJSONDocument(unittest.TestCase):
    """Test the saved layout document."""

    def setUp(self):
        self.layout = build_layout()

    def test_round_trip(self):
        restored = load(save(self.layout))
        self.assertEqual(restored, self.layout)
        self.assertIsNot(restored.store, self.layout.store)

    def test_text_round_trip(self):
        restored = loads(dumps(self.layout))
        self.assertEqual(restored, self.layout)
        self.assertEqual(restored.next_aisle_number, 5)

    def test_document_fields(self):
        document = save(self.layout)
        self.assertEqual(document['version'], "1.0")
        self.assertIn('created', document)
        self.assertEqual(document['gridSize'], {'rows': 20, 'cols': 25})
        self.assertEqual(document['formData']['zone'], "B")
        self.assertEqual(document['formData']['defaultBaysHigh'], 3)
        self.assertEqual(document['nextAisleId'], 5)
        self.assertEqual(document['metadata'], {'totalAisles': 3, 'totalBays': 18 + 8 + 8})

    def test_aisle_fields(self):
        aisle = save(self.layout)['aisles']['aisle-2']
        self.assertEqual(aisle['number'], "02")
        self.assertEqual(aisle['gridRow'], 5)
        self.assertEqual(aisle['gridCol'], 15)
        self.assertEqual(aisle['width'], 1)
        self.assertEqual(aisle['height'], 4)
        self.assertEqual(aisle['baysHigh'], 2)
        self.assertEqual(aisle['type'], "sequential")
        self.assertEqual(aisle['orientation'], "vertical")
        self.assertEqual(aisle['color'], "#2196F3")
        self.assertEqual(save(self.layout)['aisles']['aisle-4']['type'], "dual-side")

    def test_document_is_json_serialisable(self):
        text = json.dumps(save(self.layout))
        self.assertIn('"aisle-4"', text)

    def test_file_round_trip(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = save_file(self.layout, Path(tmp) / "layout.json")
            self.assertEqual(load_file(path), self.layout)

    def test_default_filename(self):
        self.assertEqual(default_filename(self.layout), "warehouse_B_layout.json")
        self.assertEqual(default_filename(self.layout, 'locations', 'csv'),
                         "warehouse_B_locations.csv")


class TestLoadDefaults(unittest.TestCase):
    """Test loading minimal documents."""

    def test_missing_optional_blocks(self):
        document = {
            'version': "1.0",
            'aisles': {
                'aisle-3': {'gridRow': 1, 'gridCol': 1, 'width': 4, 'height': 1},
            },
        }
        layout = load(document)
        self.assertEqual(layout.grid, GridSize(20, 25))
        self.assertEqual(layout.config, LayoutConfig())
        aisle = layout.aisles['aisle-3']
        self.assertEqual(aisle.number, "03")
        self.assertEqual(aisle.zone, "A")
        self.assertEqual(aisle.sections, 4)
        self.assertEqual(aisle.bays_high, 5)
        self.assertEqual(aisle.bay_scheme, BayScheme.SEQUENTIAL)
        self.assertEqual(layout.next_aisle_number, 4)

    def test_stale_counter_is_raised(self):
        document = {
            'version': "1.0",
            'nextAisleId': 1,
            'aisles': {
                'aisle-7': {'number': "07", 'gridRow': 0, 'gridCol': 0, 'width': 3, 'height': 1},
            },
        }
        layout = load(document)
        self.assertEqual(layout.next_aisle_number, 8)
        aisle = layout.store.insert(Rect(4, 0, 3, 1), zone="A", bays_high=1)
        self.assertEqual(aisle.number, "08")

    def test_derived_fields_ignored(self):
        document = {
            'version': "1.0",
            'aisles': {
                'aisle-1': {'number': "01", 'gridRow': 0, 'gridCol': 0, 'width': 1, 'height': 5,
                            'orientation': 'horizontal', 'color': '#000000'},
            },
        }
        aisle = load(document).aisles['aisle-1']
        self.assertEqual(aisle.orientation.value, "vertical")
        self.assertEqual(aisle.color, "#4CAF50")

    def test_empty_aisles(self):
        layout = load({'version': "1.0", 'aisles': {}, 'gridSize': {'rows': 12, 'cols': 30}})
        self.assertEqual(len(layout.aisles), 0)
        self.assertEqual(layout.grid, GridSize(12, 30))

    def test_empty_layout_round_trip(self):
        """Grid and counter survive when every aisle has been deleted."""
        layout = Layout(GridSize(rows=12, cols=30), LayoutConfig(zone="D"))
        aisle = layout.store.insert(Rect(0, 0, 4, 1), zone="D", bays_high=2)
        layout.store.remove(aisle.id)

        restored = load(save(layout))
        self.assertEqual(restored, layout)
        self.assertEqual(restored.grid, GridSize(12, 30))
        self.assertEqual(restored.next_aisle_number, 2)
        self.assertEqual(restored.config.zone, "D")

        fresh = restored.store.insert(Rect(1, 0, 4, 1), zone="D", bays_high=2)
        self.assertEqual(fresh.number, "02")

    def test_negative_counter_clamped(self):
        layout = load({'version': "1.0", 'aisles': {}, 'nextAisleId': -5})
        self.assertEqual(layout.next_aisle_number, 1)
        aisle = layout.store.insert(Rect(0, 0, 3, 1), zone="A", bays_high=1)
        self.assertEqual(aisle.number, "01")
        self.assertEqual(aisle.id, "aisle-1")


class TestLoadErrors(unittest.TestCase):
    """Test rejection of malformed documents."""

    def test_missing_version(self):
        with self.assertRaises(FormatError):
            load({'aisles': {}})

    def test_missing_aisles(self):
        with self.assertRaises(FormatError):
            load({'version': "1.0"})

    def test_not_a_document(self):
        with self.assertRaises(FormatError):
            load(["version", "aisles"])

    def test_malformed_json(self):
        with self.assertRaises(FormatError):
            loads("{not json")

    def test_aisles_not_an_object(self):
        with self.assertRaises(FormatError):
            load({'version': "1.0", 'aisles': [1, 2]})

    def test_null_aisles(self):
        with self.assertRaises(FormatError):
            loads('{"version": "1.0", "aisles": null}')

    def test_grid_size_not_an_object(self):
        with self.assertRaises(FormatError):
            loads('{"version": "1.0", "aisles": {}, "gridSize": [20, 25]}')
        with self.assertRaises(FormatError):
            loads('{"version": "1.0", "aisles": {}, "gridSize": "20x25"}')

    def test_form_data_not_an_object(self):
        with self.assertRaises(FormatError):
            loads('{"version": "1.0", "aisles": {}, "formData": "A"}')
        with self.assertRaises(FormatError):
            loads('{"version": "1.0", "aisles": {}, "formData": [1, 2]}')

    def test_file_not_utf8(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "layout.json"
            path.write_bytes(b'{"version": "1.0", "aisles": {}, "x": "\xff\xfe"}')
            with self.assertRaises(FormatError):
                load_file(path)

    def test_missing_footprint(self):
        with self.assertRaises(FormatError):
            load({'version': "1.0", 'aisles': {'aisle-1': {'gridRow': 0, 'gridCol': 0}}})

    def test_overlapping_aisles(self):
        document = {
            'version': "1.0",
            'aisles': {
                'aisle-1': {'number': "01", 'gridRow': 2, 'gridCol': 0, 'width': 6, 'height': 1},
                'aisle-2': {'number': "02", 'gridRow': 0, 'gridCol': 3, 'width': 1, 'height': 5},
            },
        }
        with self.assertRaises(FormatError):
            load(document)

    def test_aisle_off_grid(self):
        document = {
            'version': "1.0",
            'gridSize': {'rows': 10, 'cols': 10},
            'aisles': {
                'aisle-1': {'number': "01", 'gridRow': 0, 'gridCol': 8, 'width': 5, 'height': 1},
            },
        }
        with self.assertRaises(FormatError):
            load(document)

    def test_non_numeric_field(self):
        document = {
            'version': "1.0",
            'aisles': {
                'aisle-1': {'number': "01", 'gridRow': "top", 'gridCol': 0, 'width': 5, 'height': 1},
            },
        }
        with self.assertRaises(FormatError):
            load(document)

    def test_failed_load_leaves_live_layout(self):
        live = build_layout()
        before = save(live)
        with self.assertRaises(FormatError):
            live.replace_with(loads('{"version": "1.0"}'), confirmed=True)
        self.assertEqual(load(before), live)


class TestReplaceLayout(unittest.TestCase):
    """Test swapping in a loaded layout."""

    def test_needs_confirmation_when_not_empty(self):
        live = build_layout()
        loaded = load({'version': "1.0", 'aisles': {}})
        with self.assertRaises(ConfirmationRequiredError) as ctx:
            live.replace_with(loaded)
        self.assertEqual(sorted(ctx.exception.affected_ids), ['aisle-1', 'aisle-2', 'aisle-4'])
        self.assertEqual(len(live.aisles), 3)

        live.replace_with(loaded, confirmed=True)
        self.assertEqual(len(live.aisles), 0)

    def test_empty_layout_replaced_without_confirmation(self):
        live = Layout()
        discarded = live.replace_with(build_layout())
        self.assertEqual(discarded, [])
        self.assertEqual(live.config.zone, "B")
        self.assertEqual(len(live.aisles), 3)


class TestCSVExport(unittest.TestCase):
    """Test the flat bay table."""

    def setUp(self):
        self.layout = Layout(GridSize(rows=20, cols=25))
        self.layout.store.insert(Rect(3, 0, 1, 5), zone="A", bays_high=2)
        self.layout.store.insert(Rect(0, 4, 3, 1), zone="A", bays_high=1,
                                 bay_scheme=BayScheme.DUAL_SIDE)

    def test_header(self):
        text = export_csv(self.layout)
        self.assertEqual(text.splitlines()[0],
                         "Zone,Aisle,Section,Bay,Location Code,Height(mm),Width(mm),Depth(mm),"
                         "Grid Position,Aisle Dimensions,Orientation,Total Bays")

    def test_empty_layout_has_header_only(self):
        text = export_csv(Layout())
        self.assertEqual(len(text.splitlines()), 1)

    def test_row_count(self):
        rows = export_rows(self.layout)
        self.assertEqual(len(rows), 10 + 6)

    def test_first_row(self):
        row = export_rows(self.layout)[0]
        self.assertEqual(row['Zone'], "A")
        self.assertEqual(row['Aisle'], "01")
        self.assertEqual(row['Section'], "01")
        self.assertEqual(row['Bay'], "01")
        self.assertEqual(row['Location Code'], "A01-01-01")
        self.assertEqual(row['Height(mm)'], 1500)
        self.assertEqual(row['Width(mm)'], 1000)
        self.assertEqual(row['Depth(mm)'], 1200)
        self.assertEqual(row['Grid Position'], "R3-R7 C0")
        self.assertEqual(row['Aisle Dimensions'], "1×5")
        self.assertEqual(row['Orientation'], "vertical")
        self.assertEqual(row['Total Bays'], 10)

    def test_total_bays_only_on_first_row_of_aisle(self):
        rows = export_rows(self.layout)
        totals = [row['Total Bays'] for row in rows]
        self.assertEqual(totals[0], 10)
        self.assertEqual(totals[1:10], [''] * 9)
        self.assertEqual(totals[10], 6)
        self.assertEqual(totals[11:], [''] * 5)

    def test_dual_side_rows(self):
        rows = export_rows(self.layout)[10:]
        self.assertEqual([r['Location Code'] for r in rows[:2]], ["A02-01-01", "A02-01-02"])
        self.assertEqual(rows[0]['Grid Position'], "R0 C4-C6")
        self.assertEqual(rows[0]['Orientation'], "horizontal")

    def test_parses_as_csv(self):
        reader = csv.DictReader(io.StringIO(export_csv(self.layout)))
        self.assertEqual(tuple(reader.fieldnames), CSV_COLUMNS)
        records = list(reader)
        self.assertEqual(records[0]['Total Bays'], "10")
        self.assertEqual(records[1]['Total Bays'], "")

    def test_save_csv(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = save_csv(self.layout, Path(tmp) / "locations.csv")
            with open(path, newline='', encoding='utf-8') as f:
                self.assertEqual(len(list(csv.reader(f))), 17)

    def test_position_helpers(self):
        aisle = self.layout.aisles['aisle-1']
        self.assertEqual(grid_position(aisle), "R3-R7 C0")
        self.assertEqual(aisle_dimensions(aisle), "1×5")
        single = self.layout.store.insert(Rect(15, 15, 1, 1), zone="A", bays_high=1)
        self.assertEqual(grid_position(single), "R15 C15")


class TestDXFAdapter(unittest.TestCase):
    """Test DXF export and import."""

    def setUp(self):
        self.layout = Layout(GridSize(rows=15, cols=30))
        self.layout.store.insert(Rect(1, 2, 8, 1), zone="A", bays_high=5)
        self.layout.store.insert(Rect(4, 20, 1, 6), zone="A", bays_high=5)
        self.tmp = tempfile.TemporaryDirectory()
        self.path = Path(self.tmp.name) / "layout.dxf"

    def tearDown(self):
        self.tmp.cleanup()

    def test_round_trip_geometry(self):
        adapter = DXFAdapter()
        adapter.export_layout(self.layout, self.path)
        imported = adapter.import_layout(self.path)

        self.assertEqual(imported.grid, GridSize(15, 30))
        self.assertEqual(sorted(imported.aisles), ['aisle-1', 'aisle-2'])
        for aisle_id, original in self.layout.aisles.items():
            aisle = imported.aisles[aisle_id]
            self.assertEqual(aisle.rect, original.rect)
            self.assertEqual(aisle.number, original.number)
            self.assertEqual(aisle.zone, "A")
        self.assertEqual(imported.next_aisle_number, 3)

    def test_import_uses_config_defaults(self):
        adapter = DXFAdapter()
        adapter.export_layout(self.layout, self.path)
        imported = adapter.import_layout(self.path, LayoutConfig(zone="A", default_bays_high=2))
        self.assertEqual(imported.aisles['aisle-2'].bays_high, 2)
        self.assertEqual(imported.aisles['aisle-2'].sections, 6)

    def test_empty_drawing_keeps_grid(self):
        empty = Layout(GridSize(rows=12, cols=40))
        adapter = DXFAdapter()
        adapter.export_layout(empty, self.path)
        imported = adapter.import_layout(self.path)
        self.assertEqual(imported.grid, GridSize(12, 40))
        self.assertEqual(len(imported.aisles), 0)

    def test_validate_format(self):
        adapter = DXFAdapter()
        self.assertFalse(adapter.validate_format(self.path))
        adapter.export_layout(self.layout, self.path)
        self.assertTrue(adapter.validate_format(self.path))
        self.assertFalse(adapter.validate_format(Path(self.tmp.name) / "layout.json"))


class TestLayoutImporter(unittest.TestCase):
    """Test adapter dispatch by file type."""

    def setUp(self):
        self.layout = build_layout()
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)

    def tearDown(self):
        self.tmp.cleanup()

    def test_json(self):
        path = save_file(self.layout, self.dir / "layout.json")
        self.assertEqual(LayoutImporter().import_from_file(str(path)), self.layout)

    def test_dxf(self):
        path = self.dir / "layout.dxf"
        DXFAdapter().export_layout(self.layout, path)
        imported = LayoutImporter().import_from_file(str(path))
        self.assertEqual(len(imported.aisles), 3)

    def test_unsupported_extension(self):
        path = self.dir / "layout.txt"
        path.write_text("hello", encoding='utf-8')
        with self.assertRaises(FormatError):
            LayoutImporter().import_from_file(str(path))

    def test_missing_file(self):
        with self.assertRaises(FormatError):
            LayoutImporter().import_from_file(str(self.dir / "absent.json"))


if __name__ == "__main__":
    unittest.main()
