import tempfile
import unittest
from datetime import timezone
from pathlib import Path

from partymgr.csv_io import (
    EXPORT_HEADER,
    export_winners_csv,
    parse_roster_csv,
    write_winners_csv,
)
from partymgr.exceptions import ImportFormatError
from partymgr.models import AppState, Employee, Prize, WinnerRecord

# 2024-01-01T12:34:56Z
NOON_MS = 1704112496000


class ParseRosterTestCase(unittest.TestCase):
    def test_english_headers(self):
        text = "staffId,name,department,title,gender\nE1,Ann,Ops,Lead,F\nE2,Ben,,,\n"
        rows = parse_roster_csv(text)
        self.assertEqual(
            rows[0],
            {"staff_id": "E1", "name": "Ann", "department": "Ops", "title": "Lead", "gender": "F"},
        )
        self.assertEqual(
            rows[1],
            {"staff_id": "E2", "name": "Ben", "department": None, "title": None, "gender": None},
        )

    def test_localized_headers_in_any_order(self):
        text = "姓名,部門,工號,職稱,性別\n王小明,研發部,A01,工程師,男\n"
        rows = parse_roster_csv(text)
        self.assertEqual(rows[0]["name"], "王小明")
        self.assertEqual(rows[0]["staff_id"], "A01")
        self.assertEqual(rows[0]["department"], "研發部")
        self.assertEqual(rows[0]["title"], "工程師")
        self.assertEqual(rows[0]["gender"], "男")

    def test_headers_match_case_insensitively_by_substring(self):
        text = "Full Name,Staff ID,Dept Name\nAnn,E1,Ops\n"
        rows = parse_roster_csv(text)
        self.assertEqual(rows[0]["name"], "Ann")
        self.assertEqual(rows[0]["staff_id"], "E1")
        self.assertEqual(rows[0]["department"], "Ops")

    def test_unmatched_headers_fall_back_to_position(self):
        rows = parse_roster_csv("a,b,c,d,e\nE1,Ann,Ops,Lead,F\n")
        self.assertEqual(rows[0]["staff_id"], "E1")
        self.assertEqual(rows[0]["name"], "Ann")
        self.assertEqual(rows[0]["gender"], "F")

    def test_quoted_fields_and_blank_lines(self):
        text = 'staffId,name,department\n\n"E1","Smith, Ann","R&D"\n  \n'
        rows = parse_roster_csv(text)
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0]["name"], "Smith, Ann")
        self.assertEqual(rows[0]["department"], "R&D")

    def test_rows_without_name_are_dropped(self):
        rows = parse_roster_csv("staffId,name\nE1,\nE2,Ben\n")
        self.assertEqual([r["staff_id"] for r in rows], ["E2"])

    def test_header_only_or_empty_input(self):
        self.assertEqual(parse_roster_csv(""), [])
        self.assertEqual(parse_roster_csv("staffId,name\n"), [])

    def test_bytes_with_bom(self):
        rows = parse_roster_csv("\ufeffstaffId,name\nE1,Ann\n".encode("utf-8"))
        self.assertEqual(rows[0]["staff_id"], "E1")

    def test_malformed_input_raises(self):
        with self.assertRaises(ImportFormatError):
            parse_roster_csv(b"\xff\xfe\x00garbage")
        with self.assertRaises(ImportFormatError):
            parse_roster_csv('staffId,name\nE1,"Ann"x\n')


class ExportWinnersTestCase(unittest.TestCase):
    def _state(self) -> AppState:
        return AppState(
            employees=(Employee(id="e1", staff_id="S1", name="Ann", department="Ops"),),
            prizes=(Prize(id="p1", name="Bike", count=1),),
            winners=(
                WinnerRecord(id="w1", employee_id="e1", prize_id="p1", timestamp=NOON_MS),
                WinnerRecord(id="w2", employee_id="gone", prize_id="gone", timestamp=NOON_MS),
            ),
        )

    def test_export_layout(self):
        text = export_winners_csv(self._state(), tz=timezone.utc)
        self.assertTrue(text.startswith("\ufeff"))
        lines = text[1:].splitlines()
        self.assertEqual(lines[0], ",".join(EXPORT_HEADER))
        self.assertEqual(lines[1], "Bike,S1,Ann,Ops,12:34:56")
        self.assertEqual(lines[2], "Unknown,,,,12:34:56")

    def test_export_empty_log_has_header_only(self):
        text = export_winners_csv(AppState.empty())
        self.assertEqual(text, "\ufeff" + ",".join(EXPORT_HEADER) + "\n")

    def test_write_winners_csv(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_winners_csv(self._state(), Path(tmpdir) / "winners.csv", tz=timezone.utc)
            content = path.read_text(encoding="utf-8")
            self.assertTrue(content.startswith("\ufeff"))
            self.assertIn("Bike,S1,Ann,Ops,12:34:56", content)


if __name__ == "__main__":
    unittest.main()
