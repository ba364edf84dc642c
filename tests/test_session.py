import random
import unittest

from seating_layout.config import EditorSettings
from seating_layout.ids import IdAllocator
from seating_layout.session import MAX_ZOOM, MIN_ZOOM, EditorSession, Tool
from seating_layout.store import LayoutStore


class TestEditorSession(unittest.TestCase):
    def setUp(self):
        self.changes = []
        self.store = LayoutStore(
            on_layout_change=self.changes.append,
            settings=EditorSettings(),
            ids=IdAllocator(rng=random.Random(5)),
        )
        self.session = EditorSession(self.store)

    def test_click_selects_in_select_mode(self):
        self.session.click_section("section-1", 100, 250)
        self.assertEqual(self.session.selected_id, "section-1")
        self.assertEqual(self.changes, [])
        self.session.click_background()
        self.assertIsNone(self.session.selected_id)

    def test_click_adds_seat_in_add_seat_mode(self):
        self.session.select_tool(Tool.add_seat)
        self.session.click_section("section-1", 100, 250)
        self.assertEqual(len(self.store.layout.find_section("section-1").seats), 1)
        self.assertIsNone(self.session.selected_id)

    def test_add_section_tool_adds_immediately(self):
        self.session.select_tool(Tool.add_section)
        self.assertEqual(len(self.store.layout.sections), 3)
        self.assertEqual(self.session.tool, Tool.select)

    def test_zoom_is_clamped_and_stays_out_of_layout(self):
        self.assertAlmostEqual(self.session.zoom("in"), 1.2)
        for _ in range(20):
            self.session.zoom("in")
        self.assertEqual(self.session.scale, MAX_ZOOM)
        for _ in range(40):
            self.session.zoom("out")
        self.assertEqual(self.session.scale, MIN_ZOOM)
        self.assertEqual(self.store.layout.scale, 1.0)
        self.assertEqual(self.changes, [])
        with self.assertRaises(ValueError):
            self.session.zoom("sideways")

    def test_panning_blocks_drags(self):
        self.session.start_pan()
        self.session.drag_section_end("section-1", 500, 500)
        self.assertEqual(self.changes, [])
        self.session.end_pan()
        self.session.drag_section_end("section-1", 500, 500)
        self.assertEqual(len(self.changes), 1)

    def test_transform_end_applies_handle_scale_to_selection(self):
        self.session.transform_end(0, 0, 100, 100, 0)
        self.assertEqual(self.changes, [])
        self.session.click_section("section-2", 300, 250)
        self.session.transform_end(400, 300, 150, 120, 20, scale_x=2.0, scale_y=0.25)
        s = self.store.layout.find_section("section-2")
        self.assertEqual((s.width, s.height, s.rotation), (300.0, 50.0, 20))

    def test_drag_seat_end(self):
        self.session.select_tool(Tool.add_seat)
        self.session.click_section("section-1", 100, 250)
        seat_id = self.store.layout.find_section("section-1").seats[0].id
        self.session.drag_seat_end("section-1", seat_id, 120, 260)
        self.assertEqual(len(self.changes), 1)
        self.session.select_tool(Tool.select)
        self.session.drag_seat_end("section-1", seat_id, 120, 260)
        seat = self.store.layout.find_section("section-1").find_seat(seat_id)
        self.assertEqual((seat.x, seat.y), (70.0, 60.0))

    def test_context_menu_duplicate_and_rename(self):
        self.session.open_context_menu("section-1", 10, 20)
        self.session.duplicate_from_menu()
        self.assertIsNone(self.session.context_menu)
        self.assertEqual(self.store.layout.sections[-1].name, "Section A (Copy)")

        self.session.open_context_menu("section-2", 10, 20)
        self.session.edit_name_from_menu()
        self.assertEqual(self.session.editing_section_id, "section-2")
        self.session.commit_name("Balcony")
        self.assertIsNone(self.session.editing_section_id)
        self.assertEqual(self.store.layout.find_section("section-2").name, "Balcony")

    def test_cancel_name_edit(self):
        self.session.open_context_menu("section-2", 0, 0)
        self.session.edit_name_from_menu()
        self.session.cancel_name_edit()
        self.session.commit_name("ignored")
        self.assertEqual(self.changes, [])

    def test_delete_selected(self):
        self.session.delete_selected()
        self.session.click_section("section-1", 0, 0)
        self.session.delete_selected()
        self.assertIsNone(self.store.layout.find_section("section-1"))
        self.assertIsNone(self.session.selected_id)


if __name__ == "__main__":
    unittest.main()
