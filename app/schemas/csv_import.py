"""
app/schemas/csv_import.py

Response schemas for the CSV import endpoint.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class CSVImportIssueResponse(BaseModel):
    """
    API response model for one skipped or errored row.
    """

    row_number: int = Field(..., ge=1)
    status: Literal["skipped", "errored"]
    reason: str


class CSVImportSummaryResponse(BaseModel):
    """
    API response model for one finished import run.
    """

    file: str
    imported: int = Field(..., ge=0)
    skipped: int = Field(..., ge=0)
    errors: int = Field(..., ge=0)
    synced_updated_at_rows: int = Field(..., ge=0)
    dry_run: bool
    issues: list[CSVImportIssueResponse] = Field(default_factory=list)
