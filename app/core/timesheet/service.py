"""
Persistence-bound month operations.

Each mutation loads the latest stored snapshot, applies one month document
operation and persists the complete result before returning. There is no
in-memory-only state; concurrent writers to the same month are last-write-wins.
"""

import datetime
import logging

from app.core.models import MonthDoc, Shift
from app.core.storage import KeyValueStore, get_month, remove_month, set_month
from app.core.time_utils import is_long_shift
from app.core.utils import get_prev_month, month_store_key, parse_date_key, to_date_key

from . import month_doc as ops
from .shortcuts import copy_shifts, duplicate_shift, template_shifts

logger = logging.getLogger(__name__)


class MonthService:
    """Month document operations against a key-value store."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def load_month(self, year: int, month: int) -> MonthDoc:
        """Stored document, or a fresh empty one if the month was never saved."""
        doc = get_month(self.store, year, month)
        return doc if doc is not None else ops.new_month_doc(year, month)

    def _save(self, doc: MonthDoc, action: str) -> MonthDoc:
        set_month(self.store, doc)
        logger.info(
            "Month %s saved after %s",
            month_store_key(doc.year, doc.month),
            action,
            extra={"extra_fields": {"action": action, "days": len(doc.days)}},
        )
        return doc

    def add_shift(self, year: int, month: int, date: datetime.date | str, shift: Shift) -> MonthDoc:
        if is_long_shift(shift):
            logger.warning("Shift %s on %s is longer than 16 hours", shift.id, to_date_key(date))
        doc = ops.add_shift(self.load_month(year, month), date, shift)
        return self._save(doc, "add_shift")

    def update_shift(self, year: int, month: int, date: datetime.date | str, shift: Shift) -> MonthDoc:
        doc = ops.update_shift(self.load_month(year, month), date, shift)
        return self._save(doc, "update_shift")

    def remove_shift(
        self, year: int, month: int, date: datetime.date | str, shift_id: str
    ) -> tuple[MonthDoc, list[Shift]]:
        """
        Remove a shift.

        Returns:
            (new document, the day's shifts before removal). Pass the second
            value to replace_shifts_for_date to undo.
        """
        current = self.load_month(year, month)
        undo_snapshot = ops.get_shifts_for_date(current, date)
        doc = ops.remove_shift(current, date, shift_id)
        return self._save(doc, "remove_shift"), undo_snapshot

    def replace_shifts_for_date(
        self, year: int, month: int, date: datetime.date | str, shifts: list[Shift]
    ) -> MonthDoc:
        doc = ops.replace_shifts_for_date(self.load_month(year, month), date, shifts)
        return self._save(doc, "replace_day")

    def delete_month(self, year: int, month: int) -> None:
        remove_month(self.store, year, month)

    def add_template_shifts(self, year: int, month: int, date: datetime.date | str) -> MonthDoc:
        doc = self.load_month(year, month)
        for shift in template_shifts():
            doc = ops.add_shift(doc, date, shift)
        return self._save(doc, "add_template")

    def duplicate_shift(
        self, year: int, month: int, date: datetime.date | str, shift_id: str
    ) -> MonthDoc | None:
        """Append a copy of an existing shift. Returns None if the id is unknown."""
        doc = self.load_month(year, month)
        original = ops.find_shift(doc, date, shift_id)
        if original is None:
            return None
        doc = ops.add_shift(doc, date, duplicate_shift(original))
        return self._save(doc, "duplicate_shift")

    def duplicate_previous_day(self, year: int, month: int, date: datetime.date | str) -> tuple[MonthDoc, int]:
        """
        Append copies of the previous calendar day's shifts.

        The previous day of the 1st lives in the previous month's document.

        Returns:
            (document, number of shifts copied). Nothing is saved when the
            previous day is empty.
        """
        day = parse_date_key(to_date_key(date))
        yesterday = day - datetime.timedelta(days=1)
        doc = self.load_month(year, month)

        if (yesterday.year, yesterday.month) == (year, month):
            source = doc
        else:
            source = self.load_month(*get_prev_month(year, month))

        copies = copy_shifts(ops.get_shifts_for_date(source, yesterday))
        if not copies:
            return doc, 0

        for shift in copies:
            doc = ops.add_shift(doc, day, shift)
        return self._save(doc, "duplicate_previous_day"), len(copies)
