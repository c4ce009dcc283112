import enum
import uuid

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.constants import SHIFT_TYPE_LEAVE, SHIFT_TYPE_OT, SHIFT_TYPE_OTHER, SHIFT_TYPE_WORK


def new_shift_id() -> str:
    """Generate a fresh opaque shift id."""
    return str(uuid.uuid4())


class ShiftType(str, enum.Enum):
    """Shift classification. Only OT counts towards the overtime total."""

    WORK = SHIFT_TYPE_WORK
    OT = SHIFT_TYPE_OT
    LEAVE = SHIFT_TYPE_LEAVE
    OTHER = SHIFT_TYPE_OTHER


class Shift(BaseModel):
    """One recorded work/leave interval within a single day.

    Field aliases are the persisted (camelCase) names, so stored documents
    and backups keep the same JSON shape.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=new_shift_id)
    start: str  # HH:mm
    end: str  # HH:mm, may be earlier than start (crosses midnight)
    break_minutes: int = Field(default=0, ge=0, alias="breakMinutes")
    type: ShiftType = ShiftType.WORK
    note: str = ""
    location: str | None = None
    column_index: int | None = Field(default=None, alias="columnIndex")

    @field_validator("break_minutes", mode="before")
    @classmethod
    def _missing_break_is_zero(cls, value):
        return 0 if value is None else value

    @field_validator("note", mode="before")
    @classmethod
    def _missing_note_is_empty(cls, value):
        return "" if value is None else value


class MonthDoc(BaseModel):
    """All shifts of one calendar month, keyed by canonical date key (YYYY-MM-DD)."""

    model_config = ConfigDict(frozen=True)

    year: int
    month: int = Field(ge=1, le=12)
    days: dict[str, list[Shift]] = Field(default_factory=dict)

    def to_storage(self) -> dict:
        """Serialize to the persisted JSON shape (camelCase, no null optionals)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
