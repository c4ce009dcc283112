# app\core\utils.py
import calendar
import datetime

from app.core.config import DATE_FORMAT_ISO, MONTH_KEY_PREFIX
from app.core.types import DateKey, MonthKey, StoreKey

def month_key(year: int, month: int) -> MonthKey:
    """'2026-01' for (2026, 1)."""
    return MonthKey(f"{year}-{month:02d}")

def month_store_key(year: int, month: int) -> StoreKey:
    """Key-value store key for a month document, e.g. 'month:2026-01'."""
    return StoreKey(MONTH_KEY_PREFIX + month_key(year, month))

def date_key(date: datetime.date) -> DateKey:
    """Canonical zero-padded day key, e.g. '2026-01-05'."""
    return DateKey(f"{date.year}-{date.month:02d}-{date.day:02d}")

def parse_date_key(value: str) -> datetime.date:
    """
    Parse a 'YYYY-MM-DD' key.

    Raises:
        ValueError: If the value is not a valid calendar date
    """
    return datetime.datetime.strptime(value, DATE_FORMAT_ISO).date()

def to_date_key(date: datetime.date | str) -> DateKey:
    """Normalize a date or a date string to its canonical key."""
    if isinstance(date, datetime.date):
        return date_key(date)
    return date_key(parse_date_key(date))

def all_dates_in_month(year: int, month: int) -> list[datetime.date]:
    """Every calendar day of the month, day 1 first."""
    last_day = calendar.monthrange(year, month)[1]
    return [datetime.date(year, month, day) for day in range(1, last_day + 1)]

def get_prev_month(year: int, month: int) -> tuple[int, int]:
    if month == 1:
        return year - 1, 12
    return year, month - 1

def get_today() -> datetime.date:
    return datetime.date.today()
