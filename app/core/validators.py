import datetime

from fastapi import HTTPException, status

from app.core.utils import parse_date_key

MIN_YEAR = 1000
MAX_YEAR = 9999


def validate_year_month(year: int, month: int) -> tuple[int, int]:
    """
    Ensure year is four digits and month is 1-12.

    Returns (year, month) unchanged, otherwise raises 400.
    """
    if not MIN_YEAR <= year <= MAX_YEAR or not 1 <= month <= 12:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid year or month",
        )
    return year, month


def validate_date_in_month(year: int, month: int, date: str) -> datetime.date:
    """
    Parse a YYYY-MM-DD path parameter and check it belongs to the given month.

    Invalid dates and dates in another month give HTTP 400.
    """
    validate_year_month(year, month)
    try:
        parsed = parse_date_key(date)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid date",
        )
    if (parsed.year, parsed.month) != (year, month):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Date is outside the requested month",
        )
    return parsed
