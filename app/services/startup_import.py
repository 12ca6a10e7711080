"""
app/services/startup_import.py

One-shot CSV import configured through the environment.

Runs when the API process boots (see ``app.main``) or from
``scripts/run_csv_import.py``. Does nothing unless IMPORT_CSV is set. A failed
run is logged and never stops the process.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from sqlalchemy.orm import Session

from app.config import CSVImportSettings, get_csv_import_settings
from app.domain.time_entry_import import ImportResult
from app.services.csv_import_service import CSVImportService, get_csv_import_service
from db.session import SessionLocal

logger = logging.getLogger(__name__)


def run_configured_import(
    *,
    settings: CSVImportSettings | None = None,
    service: CSVImportService | None = None,
    session_factory: Callable[[], Session] = SessionLocal,
) -> ImportResult | None:
    """
    Run the import named by IMPORT_CSV once and log the outcome.

    Returns the result, or None when no import was requested or the run failed.
    """

    settings = settings or get_csv_import_settings()
    if not settings.source_path:
        return None

    service = service or get_csv_import_service()
    try:
        with session_factory() as db:
            result = service.import_csv(
                source_path=settings.source_path,
                db=db,
                default_username=settings.default_username,
                dry_run=settings.dry_run,
            )
    except Exception as exc:  # noqa: BLE001
        logger.error("CSV import failed: %s", exc)
        return None

    logger.info(
        "CSV import finished%s: imported=%d, skipped=%d, errors=%d, synced=%d",
        " (dry-run)" if settings.dry_run else "",
        result.imported,
        result.skipped,
        result.errors,
        result.reconciled,
    )
    return result
