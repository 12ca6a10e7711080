"""
app/domain/time_entry_import.py

Domain models used by the time entry CSV import flow.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum


class RowStatus(str, Enum):
    IMPORTED = "imported"
    SKIPPED = "skipped"
    ERRORED = "errored"


@dataclass(frozen=True)
class TimeEntryInput:
    """
    Fully validated row, ready for the duplicate check and persistence.
    """

    user_id: uuid.UUID | None
    username: str
    subject: str
    description: str
    date_worked: date
    minutes_worked: int
    created_at: datetime
    updated_at: datetime

    def dedupe_key(self) -> tuple[str, str, date, int]:
        return (self.username, self.subject, self.date_worked, self.minutes_worked)


@dataclass(frozen=True)
class RowOutcome:
    """
    Decision taken for one CSV data row.

    reason is set for skipped and errored rows; entry_id only for rows that
    were actually written.
    """

    status: RowStatus
    reason: str | None = None
    entry_id: uuid.UUID | None = None

    @classmethod
    def imported(cls, entry_id: uuid.UUID | None = None) -> RowOutcome:
        return cls(status=RowStatus.IMPORTED, entry_id=entry_id)

    @classmethod
    def skipped(cls, reason: str) -> RowOutcome:
        return cls(status=RowStatus.SKIPPED, reason=reason)

    @classmethod
    def errored(cls, reason: str) -> RowOutcome:
        return cls(status=RowStatus.ERRORED, reason=reason)


@dataclass(frozen=True)
class RowIssue:
    """
    One skipped or errored row, as reported back to the caller.
    """

    row_number: int
    status: RowStatus
    reason: str


@dataclass(frozen=True)
class ImportResult:
    """
    End-of-run import summary.
    """

    imported: int
    skipped: int
    errors: int
    reconciled: int
    issues: tuple[RowIssue, ...] = ()
