import json
import tempfile
import unittest
from datetime import datetime, timezone
from pathlib import Path

from seating_layout.models import LayoutError, default_layout
from seating_layout.storage import export_document, export_layout, load_layout, maybe_init_layout, save_layout
from seating_layout.store import LayoutStore


class TestStorage(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_save_and_load(self):
        store = LayoutStore()
        store.transform_section("section-1", 200, 300, 300, 200, 30)
        store.fill_with_seats("section-1", 2, 3, 8)
        path = self.dir / "nested" / "layout.json"
        save_layout(store.layout, path)
        self.assertTrue(path.read_text(encoding="utf-8").endswith("\n"))
        self.assertIn('"sectionId"', path.read_text(encoding="utf-8"))
        self.assertEqual(load_layout(path), store.layout)

    def test_missing_file(self):
        with self.assertRaises(LayoutError):
            load_layout(self.dir / "nope.json")

    def test_bad_json(self):
        path = self.dir / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with self.assertRaises(LayoutError):
            load_layout(path)
        path.write_text("[]", encoding="utf-8")
        with self.assertRaises(LayoutError):
            load_layout(path)

    def test_maybe_init(self):
        path = self.dir / "layout.json"
        layout = maybe_init_layout(path)
        self.assertEqual(layout, default_layout())
        store = LayoutStore(layout)
        store.rename_section("section-1", "Pit")
        save_layout(store.layout, path)
        self.assertEqual(maybe_init_layout(path).sections[0].name, "Pit")
        self.assertEqual(maybe_init_layout(path, overwrite=True).sections[0].name, "Section A")

    def test_export_document(self):
        store = LayoutStore()
        store.transform_section("section-1", 200, 300, 300, 200, 0)
        store.fill_with_seats("section-1", 3, 4, 8)
        store.add_seat("section-2", 300, 250)
        before = store.layout.to_dict()
        now = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

        doc = export_document(store.layout, now=now)
        self.assertEqual(doc["totalSeats"], 13)
        self.assertEqual(doc["exportDate"], "2024-05-01T12:00:00+00:00")
        self.assertEqual(doc["scale"], 1.0)
        self.assertEqual(len(doc["sections"]), 2)
        self.assertEqual(doc["bounds"], [50.0, 200.0, 400.0, 400.0])
        self.assertEqual(store.layout.to_dict(), before)

    def test_export_is_idempotent_and_reloadable(self):
        layout = default_layout()
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)
        path = self.dir / "export.json"
        first = export_layout(layout, path, now=now)
        second = export_layout(layout, path, now=now)
        self.assertEqual(first, second)
        self.assertEqual(json.loads(path.read_text(encoding="utf-8"))["totalSeats"], 0)
        self.assertEqual(load_layout(path), layout)


if __name__ == "__main__":
    unittest.main()
