"""
Timesheet module - shift aggregation, month documents and export projection.

Exports the public functions of the submodules.
"""

from .export import build_export_table, clamp_column_index, export_title, week_number
from .month_doc import (
    add_shift,
    find_shift,
    get_shifts_for_date,
    new_month_doc,
    remove_shift,
    replace_shifts_for_date,
    update_shift,
)
from .service import MonthService
from .shortcuts import copy_shifts, duplicate_shift, template_shifts
from .summary import ot_minutes, summarize_day, summarize_month, total_minutes

__all__ = [
    # summary
    "total_minutes",
    "ot_minutes",
    "summarize_day",
    "summarize_month",
    # month_doc
    "new_month_doc",
    "get_shifts_for_date",
    "replace_shifts_for_date",
    "add_shift",
    "update_shift",
    "remove_shift",
    "find_shift",
    # shortcuts
    "template_shifts",
    "duplicate_shift",
    "copy_shifts",
    # service
    "MonthService",
    # export
    "build_export_table",
    "clamp_column_index",
    "week_number",
    "export_title",
]
