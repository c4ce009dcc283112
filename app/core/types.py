# app/core/types.py

"""
Type definitions for summaries and the export table.

NewType wrappers keep date keys and month keys from being mixed up with
other strings.
"""

from typing import NewType, TypedDict

DateKey = NewType("DateKey", str)  # "2026-01-31"
MonthKey = NewType("MonthKey", str)  # "2026-01"
StoreKey = NewType("StoreKey", str)  # "month:2026-01"

Minutes = int
Hours = float


class DaySummary(TypedDict):
    """Aggregated totals for one day's shifts."""

    total_minutes: Minutes
    ot_minutes: Minutes
    total_hours: Hours
    ot_hours: Hours
    total_label: str
    num_shifts: int
    long_shift_ids: list[str]


class MonthSummary(TypedDict):
    """Aggregated totals for a whole month document."""

    year: int
    month: int
    total_minutes: Minutes
    ot_minutes: Minutes
    total_hours: Hours
    ot_hours: Hours
    total_label: str
    ot_label: str
    num_shifts: int
    days_worked: int
    minutes_by_type: dict[str, Minutes]
    days: dict[str, DaySummary]


class ExportRow(TypedDict):
    """One calendar day of the export table."""

    day: int
    date_key: DateKey
    weekday_label: str
    week: int
    hours: list[Hours]
    notes: str
    has_shifts: bool


class ExportDetailRow(TypedDict):
    """One shift in the detail listing."""

    date: str
    start: str
    end: str
    break_minutes: int
    hours: Hours
    type_label: str
    note: str
    location: str
    column_name: str


class ExportWeek(TypedDict):
    """Row span of one 7-day export block."""

    week: int
    first_row: int
    last_row: int


class ExportTable(TypedDict):
    """Row-oriented month summary ready for spreadsheet rendering."""

    year: int
    month: int
    title: str
    column_names: list[str]
    rows: list[ExportRow]
    weeks: list[ExportWeek]
    column_totals: list[Hours]
    column_counts: list[int]
    grand_total: Hours
    details: list[ExportDetailRow]
