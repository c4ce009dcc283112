"""Wall-clock time arithmetic for shifts (naive HH:mm, no time zones)."""

import math
import re

from app.core.config import MINUTES_PER_DAY, MINUTES_PER_HOUR, WARN_SHIFT_MINUTES
from app.core.models import Shift

_STRICT_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def _to_int_or_zero(part: str | None) -> int:
    if part is None:
        return 0
    try:
        return int(part.strip())
    except ValueError:
        return 0


def time_to_minutes(time: str | None) -> int:
    """
    Parse "HH:mm" to minutes after midnight.

    Never raises on free-text input. A missing or
    unparseable component counts as 0, so "8" -> 480 and "abc" -> 0.
    Out-of-range values are not rejected (see parse_time_strict).
    """
    if not time:
        return 0
    parts = str(time).split(":")
    hours = _to_int_or_zero(parts[0])
    minutes = _to_int_or_zero(parts[1] if len(parts) > 1 else None)
    return hours * MINUTES_PER_HOUR + minutes


def parse_time_strict(time: str) -> int:
    """
    Validating variant of time_to_minutes.

    Accepts "H:MM" or "HH:MM" with hour 0-23 and minute 0-59.

    Raises:
        ValueError: If the value is not a valid wall-clock time
    """
    match = _STRICT_TIME_RE.match(time.strip()) if isinstance(time, str) else None
    if match is None:
        raise ValueError(f"Invalid time {time!r}, expected HH:MM")

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise ValueError(f"Time out of range: {time!r}")
    return hours * MINUTES_PER_HOUR + minutes


def normalize_time(time: str) -> str:
    """Strictly parse and re-format as zero-padded "HH:MM"."""
    total = parse_time_strict(time)
    return f"{total // MINUTES_PER_HOUR:02d}:{total % MINUTES_PER_HOUR:02d}"


def shift_duration_minutes(shift: Shift) -> int:
    """
    Effective duration of one shift in minutes, never negative.

    end < start means the shift crosses midnight exactly once; a break longer
    than the span yields 0.
    """
    start_m = time_to_minutes(shift.start)
    end_m = time_to_minutes(shift.end)
    if end_m < start_m:
        end_m += MINUTES_PER_DAY
    duration = end_m - start_m - (shift.break_minutes or 0)
    return max(0, duration)


def minutes_to_hours(minutes: int) -> float:
    """Minutes -> decimal hours, rounded half-up to 2 decimals."""
    return math.floor(minutes / MINUTES_PER_HOUR * 100 + 0.5) / 100


def is_long_shift(shift: Shift) -> bool:
    """True for shifts over 16 hours. A sanity warning, not a validation error."""
    return shift_duration_minutes(shift) > WARN_SHIFT_MINUTES


def format_hours(minutes: int) -> str:
    """480 -> '8h', 510 -> '8h30m'."""
    h, m = divmod(minutes, MINUTES_PER_HOUR)
    if m == 0:
        return f"{h}h"
    return f"{h}h{m}m"
