"""
Run a time entry CSV import from the command line.

Without --file the import configured through IMPORT_CSV / IMPORT_USERNAME /
IMPORT_DRY_RUN is run instead, exactly as at API startup.
"""

from __future__ import annotations

import argparse
import json
import logging

from app.logging_config import configure_logging
from app.services.csv_import_service import CSVImportError, get_csv_import_service
from app.services.startup_import import run_configured_import
from db.session import SessionLocal

logger = logging.getLogger(__name__)


def main() -> int:
    parser = argparse.ArgumentParser(description="Import time entries from a CSV file.")
    parser.add_argument("--file", dest="file", default=None, help="CSV file to import.")
    parser.add_argument(
        "--username",
        dest="username",
        default=None,
        help="Owner for rows without a username column.",
    )
    parser.add_argument(
        "--dry-run",
        dest="dry_run",
        action="store_true",
        help="Count rows that would be imported without writing anything.",
    )
    args = parser.parse_args()
    configure_logging()

    if args.file is None:
        run_configured_import()
        return 0

    service = get_csv_import_service()
    try:
        with SessionLocal() as db:
            result = service.import_csv(
                source_path=args.file,
                db=db,
                default_username=args.username,
                dry_run=args.dry_run,
            )
    except CSVImportError as exc:
        print(json.dumps({"error": "Import failed", "message": str(exc)}, indent=2))
        return 1
    except Exception as exc:  # noqa: BLE001
        logger.exception("CSV import failed")
        print(json.dumps({"error": "Import failed", "message": str(exc) or exc.__class__.__name__}, indent=2))
        return 1

    payload = {
        "file": args.file,
        "imported": result.imported,
        "skipped": result.skipped,
        "errors": result.errors,
        "synced_updated_at_rows": result.reconciled,
        "dry_run": args.dry_run,
    }
    print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
