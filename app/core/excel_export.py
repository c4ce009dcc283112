"""Rendering of the month export table to an .xlsx workbook."""

import datetime
import io

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from app.core.config import EXPORT_WORKBOOK_CREATOR
from app.core.types import ExportTable

TIMESHEET_SHEET_TITLE = "Chấm công"
DETAIL_SHEET_TITLE = "Chi tiết"

COLUMN_TOTALS_LABEL = "TỔNG GIỜ HỌC MỖI TRẺ:"
COLUMN_COUNTS_LABEL = "SỐ CA MỖI CỘT:"
MONTH_TOTAL_LABEL = "TỔNG GIỜ LÀM TRONG THÁNG ="

DETAIL_HEADERS = [
    "Ngày",
    "Bắt đầu",
    "Kết thúc",
    "Nghỉ (phút)",
    "Giờ",
    "Loại",
    "Cột",
    "Địa điểm",
    "Ghi chú",
]
DETAIL_WIDTHS = [12, 10, 10, 12, 10, 12, 14, 16, 28]

HEADER_FILL = PatternFill(fill_type="solid", fgColor="FFE2E8F0")
DAY_WITH_SHIFTS_FILL = PatternFill(fill_type="solid", fgColor="FFE8F5E9")
WEEK_FILL = PatternFill(fill_type="solid", fgColor="FFB3E5FC")
COLUMN_TOTAL_FILL = PatternFill(fill_type="solid", fgColor="FFC8E6C9")
MONTH_TOTAL_FILL = PatternFill(fill_type="solid", fgColor="FFFFE0B2")

HOURS_FORMAT = "0.00"

# Sheet layout: A=week, B=day, C=weekday, D.. = export columns, then notes
COL_WEEK = 1
COL_DAY = 2
COL_WEEKDAY = 3
COL_FIRST_HOURS = 4
TITLE_ROW = 1
HEADER_ROW = 2
DATA_START_ROW = 3


def excel_file_name(year: int, month: int) -> str:
    return f"ChamCong_{year}-{month:02d}.xlsx"


def backup_file_name(today: datetime.date) -> str:
    return f"ChamCong_backup_{today.isoformat()}.json"


def _write_timesheet_sheet(ws: Worksheet, table: ExportTable) -> None:
    names = table["column_names"]
    num_columns = len(names)
    col_notes = COL_FIRST_HOURS + num_columns
    col_last_hours = col_notes - 1
    num_days = len(table["rows"])

    ws.freeze_panes = ws.cell(row=DATA_START_ROW, column=1)

    title_cell = ws.cell(row=TITLE_ROW, column=COL_WEEK, value=table["title"])
    title_cell.font = Font(bold=True, size=14)
    title_cell.alignment = Alignment(horizontal="center")
    ws.merge_cells(start_row=TITLE_ROW, start_column=COL_WEEK, end_row=TITLE_ROW, end_column=col_notes)

    for offset, header in enumerate(["Tuần", "Ngày", "Thứ", *names, "Ghi chú"]):
        cell = ws.cell(row=HEADER_ROW, column=COL_WEEK + offset, value=header)
        cell.font = Font(bold=True)
        cell.fill = HEADER_FILL

    for index, row in enumerate(table["rows"]):
        r = DATA_START_ROW + index
        values = [f"Tuần {row['week']}", row["day"], row["weekday_label"], *row["hours"], row["notes"]]
        for offset, value in enumerate(values):
            cell = ws.cell(row=r, column=COL_WEEK + offset, value=value)
            if row["has_shifts"]:
                cell.fill = DAY_WITH_SHIFTS_FILL
        ws.cell(row=r, column=COL_DAY).number_format = "0"
        for c in range(COL_FIRST_HOURS, col_notes):
            ws.cell(row=r, column=c).number_format = HOURS_FORMAT

    # Week column: one merged cell per 7-day block
    for week in table["weeks"]:
        start_r = DATA_START_ROW + week["first_row"]
        end_r = DATA_START_ROW + week["last_row"]
        if end_r > start_r:
            ws.merge_cells(start_row=start_r, start_column=COL_WEEK, end_row=end_r, end_column=COL_WEEK)
        cell = ws.cell(row=start_r, column=COL_WEEK)
        cell.fill = WEEK_FILL
        cell.alignment = Alignment(vertical="center", horizontal="center")

    totals_r = DATA_START_ROW + num_days
    ws.cell(row=totals_r, column=COL_WEEK, value=COLUMN_TOTALS_LABEL).font = Font(bold=True)
    for c, total in enumerate(table["column_totals"]):
        cell = ws.cell(row=totals_r, column=COL_FIRST_HOURS + c, value=total)
        cell.number_format = HOURS_FORMAT
        cell.fill = COLUMN_TOTAL_FILL

    counts_r = totals_r + 1
    ws.cell(row=counts_r, column=COL_WEEK, value=COLUMN_COUNTS_LABEL).font = Font(bold=True)
    for c, count in enumerate(table["column_counts"]):
        ws.cell(row=counts_r, column=COL_FIRST_HOURS + c, value=count)

    month_r = counts_r + 1
    ws.cell(row=month_r, column=COL_WEEK, value=MONTH_TOTAL_LABEL).font = Font(bold=True)
    total_cell = ws.cell(row=month_r, column=COL_DAY, value=table["grand_total"])
    total_cell.number_format = HOURS_FORMAT
    total_cell.fill = MONTH_TOTAL_FILL
    total_cell.alignment = Alignment(horizontal="center")
    ws.merge_cells(start_row=month_r, start_column=COL_DAY, end_row=month_r, end_column=col_last_hours)

    ws.column_dimensions[get_column_letter(COL_WEEK)].width = 10
    ws.column_dimensions[get_column_letter(COL_DAY)].width = 8
    ws.column_dimensions[get_column_letter(COL_WEEKDAY)].width = 8
    for c in range(COL_FIRST_HOURS, col_notes):
        ws.column_dimensions[get_column_letter(c)].width = 12
    ws.column_dimensions[get_column_letter(col_notes)].width = 28


def _write_detail_sheet(ws: Worksheet, table: ExportTable) -> None:
    ws.append(DETAIL_HEADERS)
    for cell in ws[1]:
        cell.font = Font(bold=True)
        cell.fill = HEADER_FILL
    ws.freeze_panes = "A2"

    for detail in table["details"]:
        ws.append(
            [
                detail["date"],
                detail["start"],
                detail["end"],
                detail["break_minutes"],
                detail["hours"],
                detail["type_label"],
                detail["column_name"],
                detail["location"],
                detail["note"],
            ]
        )
        for cell in ws[ws.max_row]:
            cell.fill = DAY_WITH_SHIFTS_FILL
        ws.cell(row=ws.max_row, column=5).number_format = HOURS_FORMAT

    for index, width in enumerate(DETAIL_WIDTHS, start=1):
        ws.column_dimensions[get_column_letter(index)].width = width


def build_month_workbook(table: ExportTable) -> Workbook:
    """Workbook with the timesheet sheet and the per-shift detail sheet."""
    wb = Workbook()
    wb.properties.creator = EXPORT_WORKBOOK_CREATOR

    ws = wb.active
    ws.title = TIMESHEET_SHEET_TITLE
    _write_timesheet_sheet(ws, table)

    _write_detail_sheet(wb.create_sheet(DETAIL_SHEET_TITLE), table)
    return wb


def render_month_workbook(table: ExportTable) -> bytes:
    """Serialize the export table to .xlsx bytes."""
    buffer = io.BytesIO()
    build_month_workbook(table).save(buffer)
    return buffer.getvalue()
