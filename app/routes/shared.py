# app/routes/shared.py
"""
Shared dependencies and request/response schemas for route modules.
"""

from fastapi import Depends
from pydantic import BaseModel, ConfigDict, Field, field_validator
from sqlalchemy.orm import Session

from app.core.models import MonthDoc, Shift, ShiftType, new_shift_id
from app.core.storage import SqlKeyValueStore
from app.core.time_utils import normalize_time
from app.core.timesheet import MonthService, summarize_month
from app.database.database import get_db


def get_store(db: Session = Depends(get_db)) -> SqlKeyValueStore:
    """Dependency: key-value store bound to the request's session."""
    return SqlKeyValueStore(db)


def get_month_service(store: SqlKeyValueStore = Depends(get_store)) -> MonthService:
    return MonthService(store)


def month_payload(doc: MonthDoc) -> dict:
    """Stored document plus derived month summary."""
    return {"doc": doc.to_storage(), "summary": summarize_month(doc)}


# ============ Pydantic schemas ============


class ShiftIn(BaseModel):
    """
    Shift as sent by a client.

    Unlike stored documents, times here are validated strictly and
    normalized to zero-padded HH:MM. An "id" in the body is ignored; ids
    are assigned at creation.
    """

    model_config = ConfigDict(populate_by_name=True)

    start: str
    end: str
    break_minutes: int = Field(default=0, ge=0, alias="breakMinutes")
    type: ShiftType = ShiftType.WORK
    note: str = ""
    location: str | None = None
    column_index: int | None = Field(default=None, ge=0, alias="columnIndex")

    @field_validator("start", "end")
    @classmethod
    def _strict_time(cls, value: str) -> str:
        return normalize_time(value)

    @field_validator("note")
    @classmethod
    def _strip_note(cls, value: str) -> str:
        return value.strip()

    @field_validator("location")
    @classmethod
    def _blank_location_is_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None

    def to_shift(self, shift_id: str | None = None) -> Shift:
        return Shift(
            id=shift_id or new_shift_id(),
            start=self.start,
            end=self.end,
            break_minutes=self.break_minutes,
            type=self.type,
            note=self.note,
            location=self.location,
            column_index=self.column_index,
        )


class DayShiftsIn(BaseModel):
    """
    Full replacement list for one day (bulk edit / undo restore).

    Accepted as stored shifts so an undo snapshot always restores unchanged.
    """

    shifts: list[Shift]


class ExportColumnsIn(BaseModel):
    names: list[str]
