"""
Month document operations.

Every operation takes the current snapshot and returns a new one; the input
is never modified. Persisting the result is the caller's job (see service.py).
"""

import datetime

from app.core.models import MonthDoc, Shift
from app.core.types import DateKey
from app.core.utils import month_key, parse_date_key, to_date_key


def new_month_doc(year: int, month: int) -> MonthDoc:
    """A month with no shifts."""
    return MonthDoc(year=year, month=month, days={})


def _key_in_month(doc: MonthDoc, date: datetime.date | str) -> DateKey:
    """
    Canonical key for a date that must fall inside the document's month.

    Raises:
        ValueError: If the date is invalid or belongs to another month
    """
    key = to_date_key(date)
    parsed = parse_date_key(key)
    if (parsed.year, parsed.month) != (doc.year, doc.month):
        raise ValueError(f"Date {key} is outside month {month_key(doc.year, doc.month)}")
    return key


def get_shifts_for_date(doc: MonthDoc, date: datetime.date | str) -> list[Shift]:
    """Shifts of one day in display order; an absent day gives an empty list."""
    return list(doc.days.get(to_date_key(date), ()))


def replace_shifts_for_date(doc: MonthDoc, date: datetime.date | str, shifts: list[Shift]) -> MonthDoc:
    """
    Overwrite one day's whole shift list.

    Used for bulk restore (undo). Duplicate ids are not checked.
    """
    key = _key_in_month(doc, date)
    days = dict(doc.days)
    days[key] = list(shifts)
    return doc.model_copy(update={"days": days})


def add_shift(doc: MonthDoc, date: datetime.date | str, shift: Shift) -> MonthDoc:
    """Append a shift to the end of the day's list."""
    current = get_shifts_for_date(doc, date)
    return replace_shifts_for_date(doc, date, [*current, shift])


def update_shift(doc: MonthDoc, date: datetime.date | str, shift: Shift) -> MonthDoc:
    """Replace the entry with the same id. An unknown id leaves the day unchanged."""
    current = get_shifts_for_date(doc, date)
    updated = [shift if s.id == shift.id else s for s in current]
    return replace_shifts_for_date(doc, date, updated)


def remove_shift(doc: MonthDoc, date: datetime.date | str, shift_id: str) -> MonthDoc:
    """
    Drop the shift with the given id.

    If the day ends up empty its key is removed from the map entirely.
    """
    key = _key_in_month(doc, date)
    remaining = [s for s in doc.days.get(key, ()) if s.id != shift_id]
    days = dict(doc.days)
    if remaining:
        days[key] = remaining
    else:
        days.pop(key, None)
    return doc.model_copy(update={"days": days})


def find_shift(doc: MonthDoc, date: datetime.date | str, shift_id: str) -> Shift | None:
    return next((s for s in get_shifts_for_date(doc, date) if s.id == shift_id), None)
