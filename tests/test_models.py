import unittest

from seating_layout.models import Layout, LayoutError, Seat, Section, SectionType, default_layout


class TestModels(unittest.TestCase):
    def test_default_layout(self):
        layout = default_layout()
        self.assertEqual([s.name for s in layout.sections], ["Section A", "Section B"])
        self.assertEqual([s.color for s in layout.sections], ["#ff6b6b", "#4ecdc4"])
        self.assertTrue(all(s.seats == () for s in layout.sections))
        self.assertEqual(layout.scale, 1.0)

    def test_camel_case_round_trip(self):
        data = {
            "scale": 1.5,
            "sections": [
                {
                    "id": "section-1",
                    "name": "Floor",
                    "color": "#fff",
                    "x": 10,
                    "y": 20,
                    "width": 100,
                    "height": 80,
                    "rotation": 45,
                    "type": "section",
                    "seats": [{"id": "Floor-A-1", "x": 5, "y": 6, "row": "A", "number": 1, "sectionId": "section-1", "seatSize": 8}],
                }
            ],
        }
        layout = Layout.from_dict(data)
        seat = layout.sections[0].seats[0]
        self.assertEqual(seat.section_id, "section-1")
        self.assertEqual(seat.seat_size, 8)
        dumped = layout.to_dict()
        self.assertEqual(dumped["sections"][0]["seats"][0]["sectionId"], "section-1")
        self.assertEqual(dumped["sections"][0]["type"], "section")
        self.assertEqual(Layout.from_dict(dumped), layout)

    def test_old_files_without_rotation_or_type(self):
        layout = Layout.from_dict(
            {"scale": 1, "sections": [{"id": "s", "name": "S", "color": "#000", "x": 0, "y": 0, "width": 10, "height": 10, "seats": []}]}
        )
        self.assertEqual(layout.sections[0].rotation, 0.0)
        self.assertEqual(layout.sections[0].type, SectionType.section)

    def test_duplicate_section_ids_rejected(self):
        s = {"id": "s", "name": "S", "x": 0, "y": 0, "width": 10, "height": 10}
        with self.assertRaises(LayoutError):
            Layout.from_dict({"sections": [s, s]})

    def test_seat_owner_mismatch_rejected(self):
        seat = {"id": "x", "x": 1, "y": 1, "sectionId": "other"}
        with self.assertRaises(LayoutError):
            Layout.from_dict({"sections": [{"id": "s", "name": "S", "x": 0, "y": 0, "width": 10, "height": 10, "seats": [seat]}]})

    def test_label_with_seats_rejected(self):
        seat = Seat(id="x", x=1, y=1, section_id="s")
        with self.assertRaises(ValueError):
            Section(id="s", name="Stage", x=0, y=0, width=10, height=10, type=SectionType.label, seats=(seat,))

    def test_non_finite_and_non_positive_rejected(self):
        with self.assertRaises(ValueError):
            Section(id="s", name="S", x=float("nan"), y=0, width=10, height=10)
        with self.assertRaises(ValueError):
            Section(id="s", name="S", x=0, y=0, width=0, height=10)
        with self.assertRaises(ValueError):
            Layout(scale=0)

    def test_lookups(self):
        seat = Seat(id="S-A-1", x=1, y=1, section_id="s")
        layout = Layout(sections=(Section(id="s", name="S", x=0, y=0, width=10, height=10, seats=(seat,)),))
        self.assertIs(layout.find_section("s").find_seat("S-A-1"), seat)
        self.assertIsNone(layout.find_section("nope"))
        self.assertIsNone(layout.sections[0].find_seat("nope"))
        self.assertEqual(layout.all_ids(), {"s", "S-A-1"})
        self.assertEqual(layout.total_seats, 1)


if __name__ == "__main__":
    unittest.main()
