"""
app/domain package marker.
"""

from app.domain.time_entry_import import (
    ImportResult,
    RowIssue,
    RowOutcome,
    RowStatus,
    TimeEntryInput,
)

__all__ = [
    "ImportResult",
    "RowIssue",
    "RowOutcome",
    "RowStatus",
    "TimeEntryInput",
]
