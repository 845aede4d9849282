"""
Tests for the view builder, roster parsing and seating export
"""

import unittest
import tempfile
import shutil
import sys
from pathlib import Path

# Add parent directory to path
sys.path.append(str(Path(__file__).parent.parent))

from seating.exporter import SeatingExporter, SeatRecord
from seating.models import Gender, Person, SeatingConfig, SeatState
from seating.roster import (
    normalize_gender, parse_roster, load_roster, strip_directives, rows_needed, is_directive
)
from seating.view import build_desks


def person(name, gender=Gender.UNKNOWN):
    return Person(id=name, name=name, gender=gender)


class TestViewBuilder(unittest.TestCase):

    def setUp(self):
        self.config = SeatingConfig(rows=2, cols=2)
        self.ann = person("Ann", Gender.FEMALE)
        self.state = SeatState(
            disabled={"desk-1-0-R"},
            locked={"desk-0-0-L": self.ann},
            current={"desk-0-0-L": self.ann, "desk-0-1-R": person("Bo", Gender.MALE)},
        )

    def test_desks_in_traversal_order(self):
        desks = build_desks(self.state, self.config)

        self.assertEqual([d.id for d in desks], ["desk-0-0", "desk-0-1", "desk-1-0", "desk-1-1"])
        self.assertEqual((desks[2].row, desks[2].col), (2, 1))

    def test_seat_flags(self):
        desks = build_desks(self.state, self.config)

        self.assertEqual(desks[0].left.occupant, self.ann)
        self.assertTrue(desks[0].left.locked)
        self.assertIsNone(desks[0].right.occupant)
        self.assertTrue(desks[2].right.disabled)
        self.assertFalse(desks[2].left.disabled)

    def test_view_is_idempotent(self):
        snapshot = self.state.copy()
        first = build_desks(self.state, self.config)
        second = build_desks(self.state, self.config)

        self.assertEqual(first, second)
        self.assertEqual(self.state, snapshot)

    def test_out_of_grid_seats_not_shown(self):
        state = SeatState(current={"desk-5-5-L": person("Far")})
        desks = build_desks(state, SeatingConfig(rows=1, cols=1))
        self.assertEqual(len(desks), 1)
        self.assertIsNone(desks[0].left.occupant)


class TestRoster(unittest.TestCase):

    def test_normalize_gender(self):
        for token in ["m", "Male", " BOY ", "man", "男", "男生"]:
            self.assertEqual(normalize_gender(token), Gender.MALE)
        for token in ["F", "female", "girl", "Woman", "女", "女生"]:
            self.assertEqual(normalize_gender(token), Gender.FEMALE)
        for token in ["", "x", None, "mf"]:
            self.assertEqual(normalize_gender(token), Gender.UNKNOWN)

    def test_parse_roster(self):
        text = "Alice, F\n\n  Bob,男\nCarol，girl\nDan\n ,m\n"
        people = parse_roster(text)

        self.assertEqual([p.name for p in people], ["Alice", "Bob", "Carol", "Dan"])
        self.assertEqual([p.gender for p in people],
                         [Gender.FEMALE, Gender.MALE, Gender.FEMALE, Gender.UNKNOWN])
        self.assertEqual(people[1].raw_gender, "男")
        self.assertEqual(people[3].raw_gender, "")
        self.assertEqual(len({p.id for p in people}), 4)

    def test_parse_roster_custom_ids(self):
        counter = iter(range(100))
        people = parse_roster("A,m\nB,f", id_factory=lambda: f"p{next(counter)}")
        self.assertEqual([p.id for p in people], ["p0", "p1"])

    def test_strip_directives(self):
        roster = [person("A"), person("锁"), person("空"), person("B")]
        self.assertEqual([p.name for p in strip_directives(roster)], ["A", "B"])
        self.assertTrue(is_directive(roster[1]))
        self.assertFalse(is_directive(roster[0]))

    def test_rows_needed(self):
        self.assertEqual(rows_needed(10, 6, 5), 6)
        self.assertEqual(rows_needed(61, 6, 5), 7)
        self.assertEqual(rows_needed(5, 1, 1), 3)


class TestExporter(unittest.TestCase):

    def setUp(self):
        self.temp_dir = Path(tempfile.mkdtemp())
        self.config = SeatingConfig(rows=2, cols=1)
        self.state = SeatState(
            disabled={"desk-0-0-R", "desk-1-0-R"},
            current={"desk-0-0-L": person("Ann", Gender.FEMALE), "desk-1-0-L": None},
        )
        self.exporter = SeatingExporter()

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def test_records_and_trailing_markers_dropped(self):
        state = self.state.copy()
        state.current["desk-1-0-L"] = person("Bo", Gender.MALE)
        state.disabled.discard("desk-1-0-R")
        export = self.exporter.create_export(build_desks(state, self.config))

        self.assertEqual(self.exporter.export_lines(export), ["Ann,女", "锁", "Bo,男"])

    def test_only_tail_markers_trimmed(self):
        export = self.exporter.create_export(build_desks(self.state, self.config))
        self.assertEqual(self.exporter.export_lines(export), ["Ann,女"])

    def test_empty_room_exports_nothing(self):
        export = self.exporter.create_export(build_desks(SeatState(), self.config))
        self.assertEqual(export.records, [])

    def test_empty_marker_inside(self):
        config = SeatingConfig(rows=1, cols=2)
        state = SeatState(current={"desk-0-1-L": person("Sam")})
        lines = self.exporter.export_lines(self.exporter.create_export(build_desks(state, config)))

        self.assertEqual(lines, ["空", "空", "Sam,"])

    def test_export_lines_match_csv_file_for_quoted_names(self):
        config = SeatingConfig(rows=1, cols=1)
        state = SeatState(current={
            "desk-0-0-L": person("Lee, Ann", Gender.FEMALE),
            "desk-0-0-R": person('Bo "B"', Gender.MALE),
        })
        export = self.exporter.create_export(build_desks(state, config))
        path = self.exporter.export_csv(export, str(self.temp_dir / "quoted.csv"), bom=False)

        lines = self.exporter.export_lines(export)
        self.assertEqual(lines, ['"Lee, Ann",女', '"Bo ""B""",男'])
        self.assertEqual(lines, Path(path).read_text(encoding="utf-8").splitlines())

    def test_custom_labels(self):
        exporter = SeatingExporter(male_label="M", female_label="F")
        record = exporter.seat_record(build_desks(self.state, self.config)[0].left)
        self.assertEqual(record.as_row(), ["Ann", "F"])

    def test_seat_record_marker(self):
        record = SeatRecord(seat_id="desk-0-0-L", marker="空")
        self.assertTrue(record.is_marker)
        self.assertEqual(record.as_row(), ["空"])

    def test_export_csv_round_trips_through_roster(self):
        export = self.exporter.create_export(build_desks(self.state, self.config))
        path = self.exporter.export_csv(export, str(self.temp_dir / "out" / "seating.csv"))

        raw = Path(path).read_bytes()
        self.assertTrue(raw.startswith("\ufeff".encode("utf-8")))

        people = load_roster(path)
        self.assertEqual([(p.name, p.gender) for p in people], [("Ann", Gender.FEMALE)])

    def test_export_csv_without_bom(self):
        export = self.exporter.create_export(build_desks(self.state, self.config))
        path = self.exporter.export_csv(export, str(self.temp_dir / "plain.csv"), bom=False)

        self.assertEqual(Path(path).read_text(encoding="utf-8"), "Ann,女\n")


if __name__ == '__main__':
    unittest.main()
