"""Aggregation of shift durations for days and months."""

from collections.abc import Iterable

from app.core.models import MonthDoc, Shift, ShiftType
from app.core.time_utils import format_hours, is_long_shift, minutes_to_hours, shift_duration_minutes
from app.core.types import DaySummary, MonthSummary


def total_minutes(shifts: Iterable[Shift]) -> int:
    """Sum of effective durations. Empty input gives 0."""
    return sum(shift_duration_minutes(s) for s in shifts)


def ot_minutes(shifts: Iterable[Shift]) -> int:
    """Sum of effective durations of OT shifts only."""
    return sum(shift_duration_minutes(s) for s in shifts if s.type == ShiftType.OT)


def summarize_day(shifts: list[Shift]) -> DaySummary:
    """
    Totals for one day's shifts.

    Args:
        shifts: The day's shifts in display order

    Returns:
        Dict with total/OT minutes and hours, shift count and ids of shifts over 16h
    """
    total_m = total_minutes(shifts)
    ot_m = ot_minutes(shifts)
    return {
        "total_minutes": total_m,
        "ot_minutes": ot_m,
        "total_hours": minutes_to_hours(total_m),
        "ot_hours": minutes_to_hours(ot_m),
        "total_label": format_hours(total_m),
        "num_shifts": len(shifts),
        "long_shift_ids": [s.id for s in shifts if is_long_shift(s)],
    }


def summarize_month(doc: MonthDoc) -> MonthSummary:
    """
    Totals for a whole month document.

    Only days that actually hold shifts appear under "days"; an absent key
    and an empty list are treated the same.
    """
    minutes_by_type = {t.value: 0 for t in ShiftType}
    days: dict[str, DaySummary] = {}
    month_total = 0
    month_ot = 0
    num_shifts = 0

    for key in sorted(doc.days):
        shifts = doc.days[key]
        if not shifts:
            continue
        day = summarize_day(shifts)
        days[key] = day
        month_total += day["total_minutes"]
        month_ot += day["ot_minutes"]
        num_shifts += day["num_shifts"]
        for s in shifts:
            minutes_by_type[s.type.value] += shift_duration_minutes(s)

    return {
        "year": doc.year,
        "month": doc.month,
        "total_minutes": month_total,
        "ot_minutes": month_ot,
        "total_hours": minutes_to_hours(month_total),
        "ot_hours": minutes_to_hours(month_ot),
        "total_label": format_hours(month_total),
        "ot_label": format_hours(month_ot),
        "num_shifts": num_shifts,
        "days_worked": len(days),
        "minutes_by_type": minutes_by_type,
        "days": days,
    }
