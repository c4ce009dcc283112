"""Quick-entry helpers: template day, duplicate shift, copy previous day."""

from app.core.constants import (
    COPY_NOTE_SUFFIX,
    DUPLICATE_NOTE,
    DUPLICATE_NOTE_SUFFIX,
    TEMPLATE_SHIFT_TIMES,
)
from app.core.models import Shift, ShiftType, new_shift_id


def template_shifts() -> list[Shift]:
    """Two half-day work shifts, 08:00-12:00 and 13:00-17:00 (8h together)."""
    return [
        Shift(start=start, end=end, break_minutes=0, type=ShiftType.WORK, note="")
        for start, end in TEMPLATE_SHIFT_TIMES
    ]


def duplicate_shift(shift: Shift) -> Shift:
    """Copy of a shift with a new id and a note marking it as a copy."""
    note = f"{shift.note}{DUPLICATE_NOTE_SUFFIX}" if shift.note else DUPLICATE_NOTE
    return shift.model_copy(update={"id": new_shift_id(), "note": note})


def copy_shifts(shifts: list[Shift]) -> list[Shift]:
    """Copies of another day's shifts with new ids; non-empty notes get a suffix."""
    return [
        s.model_copy(update={"id": new_shift_id(), "note": f"{s.note}{COPY_NOTE_SUFFIX}" if s.note else ""})
        for s in shifts
    ]
