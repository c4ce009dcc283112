# app/routes/months.py
"""
Month document routes - read a month, add/update/remove shifts, replace a day,
quick-entry shortcuts and month deletion.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.time_utils import is_long_shift
from app.core.timesheet import MonthService, get_shifts_for_date, summarize_day
from app.core.utils import date_key, month_store_key
from app.core.validators import validate_date_in_month, validate_year_month
from app.routes.shared import DayShiftsIn, ShiftIn, get_month_service, month_payload

router = APIRouter(prefix="/api/months", tags=["months"])

LONG_SHIFT_WARNING = "Shift is longer than 16 hours"


@router.get("/{year}/{month}")
async def get_month_view(year: int, month: int, service: MonthService = Depends(get_month_service)):
    """Whole month document with totals. A month never saved comes back empty."""
    validate_year_month(year, month)
    return month_payload(service.load_month(year, month))


@router.get("/{year}/{month}/days/{date}")
async def get_day_view(year: int, month: int, date: str, service: MonthService = Depends(get_month_service)):
    """One day's shifts and totals."""
    day = validate_date_in_month(year, month, date)
    shifts = get_shifts_for_date(service.load_month(year, month), day)
    return {
        "date": date_key(day),
        "shifts": [s.model_dump(mode="json", by_alias=True, exclude_none=True) for s in shifts],
        "summary": summarize_day(shifts),
    }


@router.post("/{year}/{month}/days/{date}/shifts", status_code=status.HTTP_201_CREATED)
async def add_shift(
    year: int,
    month: int,
    date: str,
    body: ShiftIn,
    service: MonthService = Depends(get_month_service),
):
    """Append a shift to the day. The id is always generated server-side."""
    day = validate_date_in_month(year, month, date)
    shift = body.to_shift()
    doc = service.add_shift(year, month, day, shift)
    warnings = [LONG_SHIFT_WARNING] if is_long_shift(shift) else []
    return {**month_payload(doc), "shift_id": shift.id, "warnings": warnings}


@router.put("/{year}/{month}/days/{date}/shifts/{shift_id}")
async def update_shift(
    year: int,
    month: int,
    date: str,
    shift_id: str,
    body: ShiftIn,
    service: MonthService = Depends(get_month_service),
):
    """Replace the shift with this id. An unknown id changes nothing."""
    day = validate_date_in_month(year, month, date)
    shift = body.to_shift(shift_id)
    doc = service.update_shift(year, month, day, shift)
    warnings = [LONG_SHIFT_WARNING] if is_long_shift(shift) else []
    return {**month_payload(doc), "warnings": warnings}


@router.delete("/{year}/{month}/days/{date}/shifts/{shift_id}")
async def remove_shift(
    year: int,
    month: int,
    date: str,
    shift_id: str,
    service: MonthService = Depends(get_month_service),
):
    """
    Remove a shift.

    The response carries "undo": the day's shifts before removal. PUT it back
    to /days/{date} to restore.
    """
    day = validate_date_in_month(year, month, date)
    doc, undo = service.remove_shift(year, month, day, shift_id)
    return {
        **month_payload(doc),
        "undo": [s.model_dump(mode="json", by_alias=True, exclude_none=True) for s in undo],
    }


@router.put("/{year}/{month}/days/{date}")
async def replace_day(
    year: int,
    month: int,
    date: str,
    body: DayShiftsIn,
    service: MonthService = Depends(get_month_service),
):
    """Overwrite the day's whole shift list (bulk edit or undo restore)."""
    day = validate_date_in_month(year, month, date)
    doc = service.replace_shifts_for_date(year, month, day, body.shifts)
    return month_payload(doc)


@router.post("/{year}/{month}/days/{date}/template")
async def add_template(year: int, month: int, date: str, service: MonthService = Depends(get_month_service)):
    """Add the two half-day template shifts (08:00-12:00, 13:00-17:00)."""
    day = validate_date_in_month(year, month, date)
    return month_payload(service.add_template_shifts(year, month, day))


@router.post("/{year}/{month}/days/{date}/duplicate-previous")
async def duplicate_previous_day(
    year: int, month: int, date: str, service: MonthService = Depends(get_month_service)
):
    """Copy the previous calendar day's shifts onto this day."""
    day = validate_date_in_month(year, month, date)
    doc, copied = service.duplicate_previous_day(year, month, day)
    return {**month_payload(doc), "copied": copied}


@router.post("/{year}/{month}/days/{date}/shifts/{shift_id}/duplicate")
async def duplicate_shift(
    year: int,
    month: int,
    date: str,
    shift_id: str,
    service: MonthService = Depends(get_month_service),
):
    """Append a copy of an existing shift to the same day."""
    day = validate_date_in_month(year, month, date)
    doc = service.duplicate_shift(year, month, day, shift_id)
    if doc is None:
        raise HTTPException(status_code=404, detail="Shift not found")
    return month_payload(doc)


@router.delete("/{year}/{month}")
async def delete_month(year: int, month: int, service: MonthService = Depends(get_month_service)):
    """Delete all data of a month."""
    validate_year_month(year, month)
    service.delete_month(year, month)
    return {"deleted": month_store_key(year, month)}
