"""
app/schemas package marker.
"""

from app.schemas.csv_import import CSVImportIssueResponse, CSVImportSummaryResponse

__all__ = [
    "CSVImportIssueResponse",
    "CSVImportSummaryResponse",
]
