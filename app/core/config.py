# app/core/config.py

import os
from typing import Final

# ==========================
# Time arithmetic
# ==========================

#: Minutes in one day. Used to unwrap shifts that cross midnight.
MINUTES_PER_DAY: Final[int] = 24 * 60

#: Minutes per hour, for minute -> decimal hour conversion.
MINUTES_PER_HOUR: Final[int] = 60

#: Shifts longer than this are flagged as a data-entry warning (16h).
WARN_SHIFT_HOURS: Final[int] = 16
WARN_SHIFT_MINUTES: Final[int] = WARN_SHIFT_HOURS * MINUTES_PER_HOUR

# ==========================
# Date and time formats
# ==========================

#: Canonical date key format for a month document's day map ("2026-01-31").
DATE_FORMAT_ISO: Final[str] = "%Y-%m-%d"

# ==========================
# Storage
# ==========================

#: Prefix for every month document key in the key-value store ("month:2026-01").
MONTH_KEY_PREFIX: Final[str] = "month:"

#: Store key holding the ordered export column labels.
EXPORT_COLUMN_NAMES_KEY: Final[str] = "settings:export_column_names"

#: Column labels used when nothing (or nothing usable) has been saved.
DEFAULT_EXPORT_COLUMN_NAMES: Final[tuple[str, ...]] = ("Bi", "Phú Quý", "Khôi", "Bo")

#: SQLAlchemy URL for the key-value table.
DATABASE_URL: Final[str] = os.getenv("DATABASE_URL", "sqlite:///./app/database/timesheet.db")

# ==========================
# Export
# ==========================

#: Prefix of the spreadsheet title row.
EXPORT_TITLE_PREFIX: Final[str] = "AN HY"

#: Separator between notes of the same day in the export.
EXPORT_NOTE_SEPARATOR: Final[str] = "; "

#: Workbook metadata author.
EXPORT_WORKBOOK_CREATOR: Final[str] = "ChamCong App"
