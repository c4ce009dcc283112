# app/routes/export.py
"""
Export routes - spreadsheet export, export column names and JSON backup.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import Response

from app.core.excel_export import backup_file_name, excel_file_name, render_month_workbook
from app.core.storage import (
    BackupImportError,
    SqlKeyValueStore,
    export_all_months_json,
    get_export_column_names,
    import_months_json,
    set_export_column_names,
)
from app.core.timesheet import MonthService, build_export_table
from app.core.utils import get_today
from app.core.validators import validate_year_month
from app.routes.shared import ExportColumnsIn, get_month_service, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["export"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.get("/months/{year}/{month}/export")
async def export_table(
    year: int,
    month: int,
    service: MonthService = Depends(get_month_service),
    store: SqlKeyValueStore = Depends(get_store),
):
    """Export table as JSON (what the spreadsheet is rendered from)."""
    validate_year_month(year, month)
    return build_export_table(service.load_month(year, month), get_export_column_names(store))


@router.get("/months/{year}/{month}/export.xlsx")
async def export_xlsx(
    year: int,
    month: int,
    service: MonthService = Depends(get_month_service),
    store: SqlKeyValueStore = Depends(get_store),
):
    """Download the month as an .xlsx file."""
    validate_year_month(year, month)
    table = build_export_table(service.load_month(year, month), get_export_column_names(store))
    content = render_month_workbook(table)
    logger.info(
        "Exported spreadsheet for %d-%02d",
        year,
        month,
        extra={"extra_fields": {"grand_total": table["grand_total"], "bytes": len(content)}},
    )
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{excel_file_name(year, month)}"'},
    )


@router.get("/settings/export-columns")
async def get_export_columns(store: SqlKeyValueStore = Depends(get_store)):
    return {"names": get_export_column_names(store)}


@router.put("/settings/export-columns")
async def put_export_columns(body: ExportColumnsIn, store: SqlKeyValueStore = Depends(get_store)):
    """Save column labels. Blank entries are dropped; nothing left means the default set."""
    return {"names": set_export_column_names(store, body.names)}


@router.get("/backup")
async def download_backup(store: SqlKeyValueStore = Depends(get_store)):
    """All month documents as one JSON file."""
    return Response(
        content=export_all_months_json(store),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{backup_file_name(get_today())}"'},
    )


@router.post("/backup")
async def upload_backup(request: Request, store: SqlKeyValueStore = Depends(get_store)):
    """
    Import a JSON backup (raw request body).

    Valid month entries are merged into the store; others are skipped.
    Returns the number of months imported.
    """
    payload = await request.body()
    try:
        count = import_months_json(store, payload)
    except BackupImportError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return {"count": count}
