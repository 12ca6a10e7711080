"""
app/api/routers/csv_import.py

On-demand time entry import from the server-side import directory.
"""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.api.dependencies import get_import_file
from app.schemas.csv_import import CSVImportIssueResponse, CSVImportSummaryResponse
from app.services.csv_import_service import (
    CSVImportService,
    CSVSourceNotFoundError,
    get_csv_import_service,
)
from db.session import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/imports", tags=["imports"])


@router.post("/time-entries", response_model=CSVImportSummaryResponse)
def import_time_entries(
    source: Path = Depends(get_import_file),
    username: str | None = Query(
        default=None,
        description="Owner for rows without a username column",
    ),
    dry_run: bool = Query(default=False, description="Count rows without writing anything"),
    db: Session = Depends(get_db),
    import_service: CSVImportService = Depends(get_csv_import_service),
) -> CSVImportSummaryResponse:
    """
    Import one CSV file of time entries.
    """

    try:
        result = import_service.import_csv(
            source_path=source,
            db=db,
            default_username=username,
            dry_run=dry_run,
        )
    except CSVSourceNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "File not found", "path": str(source)},
        ) from exc
    except Exception as exc:  # noqa: BLE001
        logger.error("CSV import via API failed file=%s: %s", source, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Import failed", "message": str(exc)},
        ) from exc

    return CSVImportSummaryResponse(
        file=str(source),
        imported=result.imported,
        skipped=result.skipped,
        errors=result.errors,
        synced_updated_at_rows=result.reconciled,
        dry_run=dry_run,
        issues=[
            CSVImportIssueResponse(
                row_number=issue.row_number,
                status=issue.status.value,
                reason=issue.reason,
            )
            for issue in result.issues
        ],
    )
