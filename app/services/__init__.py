"""
app/services package marker.
"""

from app.services.account_service import AccountService
from app.services.csv_import_service import (
    CSVImportError,
    CSVImportService,
    CSVSourceNotFoundError,
    CSVSourceReadError,
    ImportReconciliationError,
    get_csv_import_service,
)
from app.services.csv_row_processor import CSVRowProcessor

__all__ = [
    "AccountService",
    "CSVImportError",
    "CSVImportService",
    "CSVRowProcessor",
    "CSVSourceNotFoundError",
    "CSVSourceReadError",
    "ImportReconciliationError",
    "get_csv_import_service",
]
