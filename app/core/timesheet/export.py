"""
Export projection: a month document and a column set become a row-oriented
table (one row per calendar day, per-column sums and counts, month total).

Pure: no I/O and no ambient configuration. The column labels are always
passed in by the caller.
"""

import logging

from app.core.config import DEFAULT_EXPORT_COLUMN_NAMES, EXPORT_NOTE_SEPARATOR, EXPORT_TITLE_PREFIX
from app.core.constants import DAYS_PER_WEEK, SHIFT_TYPE_LABELS, WEEKDAY_LABELS
from app.core.models import MonthDoc, Shift
from app.core.time_utils import minutes_to_hours, shift_duration_minutes
from app.core.types import ExportDetailRow, ExportRow, ExportTable, ExportWeek
from app.core.utils import all_dates_in_month, date_key

logger = logging.getLogger(__name__)


def clamp_column_index(column_index: int | None, num_columns: int) -> int:
    """
    Column a shift is attributed to.

    Missing -> 0; below range -> 0; above range -> last column. Never dropped.
    """
    if column_index is None or column_index < 0:
        return 0
    return min(column_index, num_columns - 1)


def week_number(day_index: int) -> int:
    """Week block of a 0-based day index: days 1-7 are week 1, regardless of weekday."""
    return day_index // DAYS_PER_WEEK + 1


def export_title(year: int, month: int) -> str:
    return f"{EXPORT_TITLE_PREFIX} - BẢNG CHẤM CÔNG THÁNG {month} NĂM {year}"


def _day_notes(shifts: list[Shift]) -> str:
    return EXPORT_NOTE_SEPARATOR.join(s.note for s in shifts if s.note)


def _build_weeks(num_days: int) -> list[ExportWeek]:
    weeks: list[ExportWeek] = []
    for first_row in range(0, num_days, DAYS_PER_WEEK):
        weeks.append(
            {
                "week": week_number(first_row),
                "first_row": first_row,
                "last_row": min(first_row + DAYS_PER_WEEK, num_days) - 1,
            }
        )
    return weeks


def build_export_table(doc: MonthDoc, column_names: list[str]) -> ExportTable:
    """
    Project a month into the export table.

    Args:
        doc: Month document
        column_names: Ordered export column labels (an empty list means the default set)

    Returns:
        ExportTable with one row per calendar day, column totals, column
        shift counts, grand total and a per-shift detail listing
    """
    names = list(column_names) or list(DEFAULT_EXPORT_COLUMN_NAMES)
    num_columns = len(names)

    rows: list[ExportRow] = []
    details: list[ExportDetailRow] = []
    column_totals = [0.0] * num_columns
    column_counts = [0] * num_columns

    dates = all_dates_in_month(doc.year, doc.month)
    for day_index, current_date in enumerate(dates):
        key = date_key(current_date)
        shifts = doc.days.get(key, [])
        hours = [0.0] * num_columns

        for shift in shifts:
            column = clamp_column_index(shift.column_index, num_columns)
            if shift.column_index is not None and column != shift.column_index:
                logger.debug("Shift %s column %s clamped to %s", shift.id, shift.column_index, column)
            shift_hours = minutes_to_hours(shift_duration_minutes(shift))
            hours[column] += shift_hours
            column_counts[column] += 1
            details.append(
                {
                    "date": current_date.strftime("%d/%m/%Y"),
                    "start": shift.start,
                    "end": shift.end,
                    "break_minutes": shift.break_minutes,
                    "hours": shift_hours,
                    "type_label": SHIFT_TYPE_LABELS[shift.type.value],
                    "note": shift.note,
                    "location": shift.location or "",
                    "column_name": names[column],
                }
            )

        hours = [round(h, 2) for h in hours]
        for column, value in enumerate(hours):
            column_totals[column] += value

        rows.append(
            {
                "day": current_date.day,
                "date_key": key,
                "weekday_label": WEEKDAY_LABELS[current_date.weekday()],
                "week": week_number(day_index),
                "hours": hours,
                "notes": _day_notes(shifts),
                "has_shifts": bool(shifts),
            }
        )

    column_totals = [round(total, 2) for total in column_totals]
    grand_total = round(sum(sum(row["hours"]) for row in rows), 2)

    return {
        "year": doc.year,
        "month": doc.month,
        "title": export_title(doc.year, doc.month),
        "column_names": names,
        "rows": rows,
        "weeks": _build_weeks(len(rows)),
        "column_totals": column_totals,
        "column_counts": column_counts,
        "grand_total": grand_total,
        "details": details,
    }
