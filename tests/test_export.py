"""
Tests for the export projection (one row per calendar day, column sums).
"""

import datetime
import sys
from pathlib import Path

import pytest

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# ruff: noqa: E402
from app.core.config import DEFAULT_EXPORT_COLUMN_NAMES
from app.core.time_utils import minutes_to_hours
from app.core.timesheet import (
    add_shift,
    build_export_table,
    clamp_column_index,
    export_title,
    new_month_doc,
    total_minutes,
    week_number,
)

COLUMNS = ["A", "B", "C", "D"]


class TestHelpers:
    @pytest.mark.parametrize(
        "index,expected",
        [(None, 0), (-1, 0), (0, 0), (2, 2), (3, 3), (5, 3)],
    )
    def test_clamp_column_index(self, index, expected):
        assert clamp_column_index(index, 4) == expected

    @pytest.mark.parametrize("day_index,expected", [(0, 1), (6, 1), (7, 2), (27, 4), (28, 5), (30, 5)])
    def test_week_number(self, day_index, expected):
        assert week_number(day_index) == expected

    def test_export_title(self):
        assert export_title(2026, 1) == "AN HY - BẢNG CHẤM CÔNG THÁNG 1 NĂM 2026"


class TestBuildExportTable:
    @pytest.mark.parametrize("year,month,days", [(2026, 1, 31), (2026, 2, 28), (2024, 2, 29), (2026, 4, 30)])
    def test_one_row_per_calendar_day(self, year, month, days):
        table = build_export_table(new_month_doc(year, month), COLUMNS)
        assert len(table["rows"]) == days
        assert [r["day"] for r in table["rows"]] == list(range(1, days + 1))

    def test_week_tags_are_day_blocks(self):
        rows = build_export_table(new_month_doc(2026, 1), COLUMNS)["rows"]
        assert [r["week"] for r in rows[:8]] == [1, 1, 1, 1, 1, 1, 1, 2]
        assert rows[-1]["week"] == 5

    def test_weeks_cover_all_rows(self):
        weeks = build_export_table(new_month_doc(2026, 1), COLUMNS)["weeks"]
        assert [(w["first_row"], w["last_row"]) for w in weeks] == [
            (0, 6),
            (7, 13),
            (14, 20),
            (21, 27),
            (28, 30),
        ]

    def test_weekday_labels(self):
        rows = build_export_table(new_month_doc(2026, 1), COLUMNS)["rows"]
        # 2026-01-01 is a Thursday, 2026-01-04 a Sunday
        assert rows[0]["weekday_label"] == "Năm"
        assert rows[3]["weekday_label"] == "CN"

    def test_empty_month(self):
        table = build_export_table(new_month_doc(2026, 2), COLUMNS)
        assert table["column_totals"] == [0.0, 0.0, 0.0, 0.0]
        assert table["column_counts"] == [0, 0, 0, 0]
        assert table["grand_total"] == 0.0
        assert table["details"] == []
        assert not any(r["has_shifts"] for r in table["rows"])

    def test_out_of_range_column_goes_to_last(self, make_shift):
        doc = add_shift(new_month_doc(2026, 1), datetime.date(2026, 1, 2), make_shift(column_index=5))
        table = build_export_table(doc, COLUMNS)

        assert table["rows"][1]["hours"] == [0.0, 0.0, 0.0, 9.0]
        assert table["column_counts"] == [0, 0, 0, 1]
        assert table["details"][0]["column_name"] == "D"

    def test_negative_and_missing_column_go_to_first(self, make_shift):
        day = datetime.date(2026, 1, 2)
        doc = add_shift(new_month_doc(2026, 1), day, make_shift("08:00", "10:00", column_index=-2))
        doc = add_shift(doc, day, make_shift("10:00", "11:00"))
        table = build_export_table(doc, COLUMNS)

        assert table["rows"][1]["hours"][0] == 3.0
        assert table["column_counts"][0] == 2

    def test_notes_joined(self, make_shift):
        day = datetime.date(2026, 1, 3)
        doc = add_shift(new_month_doc(2026, 1), day, make_shift(note="A"))
        doc = add_shift(doc, day, make_shift(note=""))
        doc = add_shift(doc, day, make_shift(note="B"))

        assert build_export_table(doc, COLUMNS)["rows"][2]["notes"] == "A; B"

    def test_grand_total_matches_total_minutes(self, make_shift):
        doc = new_month_doc(2026, 1)
        all_shifts = []
        for day in range(1, 11):
            shift = make_shift("08:10", "17:05", break_minutes=7, column_index=day % 4)
            all_shifts.append(shift)
            doc = add_shift(doc, datetime.date(2026, 1, day), shift)
        table = build_export_table(doc, COLUMNS)

        expected = minutes_to_hours(total_minutes(all_shifts))
        assert abs(table["grand_total"] - expected) <= 0.01 * len(all_shifts)
        assert abs(sum(table["column_totals"]) - table["grand_total"]) < 0.01
        assert sum(table["column_counts"]) == len(all_shifts)

    def test_empty_names_fall_back_to_default(self):
        table = build_export_table(new_month_doc(2026, 1), [])
        assert table["column_names"] == list(DEFAULT_EXPORT_COLUMN_NAMES)
        assert len(table["column_totals"]) == 4

    def test_detail_row(self, make_shift):
        shift = make_shift("22:00", "06:00", break_minutes=30, note="Đêm", location="Kho 2")
        doc = add_shift(new_month_doc(2026, 1), datetime.date(2026, 1, 9), shift)

        detail = build_export_table(doc, COLUMNS)["details"][0]

        assert detail["date"] == "09/01/2026"
        assert detail["hours"] == 7.5
        assert detail["type_label"] == "Làm việc"
        assert detail["location"] == "Kho 2"
        assert detail["column_name"] == "A"

    def test_does_not_modify_document(self, make_shift):
        doc = add_shift(new_month_doc(2026, 1), datetime.date(2026, 1, 2), make_shift(column_index=9))
        before = doc.model_dump()
        build_export_table(doc, COLUMNS)
        assert doc.model_dump() == before
