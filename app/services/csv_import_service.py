"""
app/services/csv_import_service.py

Bulk import of time entries from user-supplied CSV files.

The run reads the file top to bottom, one row at a time:

    1. every row is normalized and handed to CSVRowProcessor
    2. the row outcome (imported / skipped / errored) is counted
    3. after a real (non dry-run) run, updated_at is forced equal to
       created_at for every entry inserted by this run, in one transaction

A bad row never aborts the run. Only a missing or unreadable source file and a
failed reconciliation pass are fatal.
"""

from __future__ import annotations

import csv
import logging
import uuid
from collections.abc import Iterator
from functools import lru_cache
from pathlib import Path
from typing import IO

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import DEFAULT_MAX_FIELD_SIZE, get_csv_import_settings
from app.domain.time_entry_import import ImportResult, RowIssue, RowOutcome, RowStatus
from app.mappers.field_normalizer import normalize_row
from app.repositories.time_entry_repository import TimeEntryRepository
from app.services.csv_row_processor import CSVRowProcessor

logger = logging.getLogger(__name__)

# Data rows are numbered after the header line.
_FIRST_DATA_ROW_NUMBER = 2


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class CSVImportError(RuntimeError):
    """
    Base class for failures that abort a whole import run.
    """


class CSVSourceNotFoundError(CSVImportError):
    """
    Raised when the source file does not exist.
    """


class CSVSourceReadError(CSVImportError):
    """
    Raised when the source file cannot be opened, decoded or parsed as CSV.
    """


class ImportReconciliationError(CSVImportError):
    """
    Raised when the post-import timestamp reconciliation pass fails.
    """


# ---------------------------------------------------------------------------
# Row source
# ---------------------------------------------------------------------------


def iter_normalized_rows(text_stream: IO[str]) -> Iterator[tuple[int, dict[str, str | None]]]:
    """
    Lazily yield ``(row_number, normalized_row)`` for every data row.

    The stream is consumed once; reading again requires reopening the source.
    """

    reader = csv.DictReader(text_stream)
    if not reader.fieldnames:
        logger.warning("CSV source has no header line; nothing to import")
        return

    for row_number, raw_row in enumerate(reader, start=_FIRST_DATA_ROW_NUMBER):
        yield row_number, normalize_row(raw_row)


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class CSVImportService:
    """
    Coordinates CSV reading, per-row processing and timestamp reconciliation.
    """

    def __init__(
        self,
        *,
        max_reported_issues: int = 500,
        log_row_issues: bool = True,
        max_field_size: int = DEFAULT_MAX_FIELD_SIZE,
    ) -> None:
        self._max_reported_issues = max(0, max_reported_issues)
        self._log_row_issues = log_row_issues
        self._max_field_size = min(DEFAULT_MAX_FIELD_SIZE, max(1, max_field_size))

    def import_csv(
        self,
        *,
        source_path: str | Path,
        db: Session,
        default_username: str | None = None,
        dry_run: bool = False,
    ) -> ImportResult:
        """
        Import every row of one CSV file.

        Args:
            source_path:       File to import.
            db:                Active SQLAlchemy session (caller owns lifecycle).
            default_username:  Owner for rows that do not name one.
            dry_run:           Count what would be imported without writing
                               entries or creating accounts.

        Raises:
            CSVSourceNotFoundError:   the file does not exist.
            CSVSourceReadError:       the file cannot be read as UTF-8 CSV.
            ImportReconciliationError: the reconciliation pass failed.
        """

        path = Path(source_path)
        if not path.exists():
            raise CSVSourceNotFoundError(f"CSV file not found: {path}")

        processor = CSVRowProcessor(
            db=db,
            dry_run=dry_run,
            default_username=default_username,
        )

        counts = {status: 0 for status in RowStatus}
        issues: list[RowIssue] = []
        inserted_ids: list[uuid.UUID] = []

        # The csv module default is 128 KiB per field.
        csv.field_size_limit(self._max_field_size)

        try:
            with path.open("r", encoding="utf-8-sig", newline="") as text_stream:
                for row_number, row in iter_normalized_rows(text_stream):
                    outcome = self._process_row(
                        processor=processor,
                        db=db,
                        row=row,
                        dry_run=dry_run,
                    )
                    counts[outcome.status] += 1
                    if outcome.entry_id is not None:
                        inserted_ids.append(outcome.entry_id)
                    if outcome.reason is not None:
                        self._record_issue(
                            issues,
                            RowIssue(
                                row_number=row_number,
                                status=outcome.status,
                                reason=outcome.reason,
                            ),
                        )
        except UnicodeDecodeError as exc:
            raise CSVSourceReadError("CSV must be UTF-8 encoded.") from exc
        except csv.Error as exc:
            raise CSVSourceReadError(f"Invalid CSV format: {exc}") from exc
        except OSError as exc:
            raise CSVSourceReadError(f"Unable to read CSV file {path}: {exc}") from exc

        if dry_run:
            db.rollback()

        reconciled = 0
        if not dry_run and inserted_ids:
            reconciled = self._reconcile_timestamps(db=db, entry_ids=inserted_ids)

        result = ImportResult(
            imported=counts[RowStatus.IMPORTED],
            skipped=counts[RowStatus.SKIPPED],
            errors=counts[RowStatus.ERRORED],
            reconciled=reconciled,
            issues=tuple(issues),
        )
        logger.info(
            "CSV import completed path=%s dry_run=%s imported=%d skipped=%d errors=%d reconciled=%d",
            path,
            dry_run,
            result.imported,
            result.skipped,
            result.errors,
            result.reconciled,
        )
        return result

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _process_row(
        self,
        *,
        processor: CSVRowProcessor,
        db: Session,
        row: dict[str, str | None],
        dry_run: bool,
    ) -> RowOutcome:
        # Each row is its own unit of work: committed rows survive later errors.
        try:
            outcome = processor.process(row)
            if not dry_run:
                db.commit()
            return outcome
        except Exception as exc:  # noqa: BLE001
            db.rollback()
            return RowOutcome.errored(str(exc) or exc.__class__.__name__)

    def _reconcile_timestamps(self, *, db: Session, entry_ids: list[uuid.UUID]) -> int:
        """
        Set updated_at = created_at for the entries inserted by this run.
        """

        try:
            synced = TimeEntryRepository(db).sync_updated_at_to_created_at(entry_ids)
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            raise ImportReconciliationError(
                "Failed to reconcile timestamps of imported time entries."
            ) from exc
        return synced

    def _record_issue(self, issues: list[RowIssue], issue: RowIssue) -> None:
        if self._log_row_issues:
            if issue.status is RowStatus.ERRORED:
                logger.warning("Row %s error: %s", issue.row_number, issue.reason)
            else:
                logger.warning("Row %s skipped: %s", issue.row_number, issue.reason)

        if len(issues) < self._max_reported_issues:
            issues.append(issue)


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_csv_import_service() -> CSVImportService:
    """
    Build and cache the import service with env-driven settings.
    """

    settings = get_csv_import_settings()
    return CSVImportService(
        max_reported_issues=settings.max_reported_issues,
        log_row_issues=settings.log_row_issues,
        max_field_size=settings.max_field_size,
    )
