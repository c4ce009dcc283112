# app/core/constants.py
from typing import Final

# ==========================
# Shift types
# ==========================

#: Code for a regular work shift.
SHIFT_TYPE_WORK: Final[str] = "Work"

#: Code for overtime. Only this type counts towards the OT total.
SHIFT_TYPE_OT: Final[str] = "OT"

#: Code for leave.
SHIFT_TYPE_LEAVE: Final[str] = "Leave"

#: Anything else.
SHIFT_TYPE_OTHER: Final[str] = "Other"

#: Display labels for shift types (detail sheet, API summaries).
SHIFT_TYPE_LABELS: Final[dict[str, str]] = {
    SHIFT_TYPE_WORK: "Làm việc",
    SHIFT_TYPE_OT: "OT",
    SHIFT_TYPE_LEAVE: "Nghỉ",
    SHIFT_TYPE_OTHER: "Khác",
}

# ==========================
# Week structure
# ==========================

#: Days per export week block. Week 1 is always days 1-7 of the month.
DAYS_PER_WEEK: Final[int] = 7

#: Short weekday labels indexed as datetime.weekday() (0=Monday, 6=Sunday).
WEEKDAY_LABELS: Final[tuple[str, ...]] = (
    "Hai",
    "Ba",
    "Tư",
    "Năm",
    "Sáu",
    "Bảy",
    "CN",
)

# ==========================
# Templates / shortcuts
# ==========================

#: The "two half-day shifts" template (start, end).
TEMPLATE_SHIFT_TIMES: Final[tuple[tuple[str, str], ...]] = (
    ("08:00", "12:00"),
    ("13:00", "17:00"),
)

#: Note given to a duplicated shift that had no note.
DUPLICATE_NOTE: Final[str] = "Bản sao"

#: Suffix appended to the note of a duplicated shift.
DUPLICATE_NOTE_SUFFIX: Final[str] = " (bản sao)"

#: Suffix appended to notes of shifts copied from the previous day.
COPY_NOTE_SUFFIX: Final[str] = " (copy)"
