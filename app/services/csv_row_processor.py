"""
app/services/csv_row_processor.py

Turns one normalized CSV row into an import decision.

Expected data problems (missing owner, blank subject, bad date, bad duration,
duplicate) are reported as skipped outcomes. Unexpected exceptions are left to
propagate so the import engine can count them as row errors.
"""

from __future__ import annotations

from datetime import date
from typing import Mapping

from sqlalchemy.orm import Session

from app.domain.time_entry_import import RowOutcome, TimeEntryInput
from app.mappers.field_normalizer import (
    CREATED_AT_ALIASES,
    DATE_WORKED_ALIASES,
    DESCRIPTION_ALIASES,
    MINUTES_WORKED_ALIASES,
    SUBJECT_ALIASES,
    UPDATED_AT_ALIASES,
    USERNAME_ALIASES,
    first_non_blank,
)
from app.repositories.time_entry_repository import TimeEntryRepository
from app.services.account_service import AccountService
from app.validators.value_coercers import local_midnight, parse_date, parse_instant, parse_int


class CSVRowProcessor:
    """
    Per-run row processor.

    One instance is created for each import run. In dry-run mode it remembers
    the rows it would have written so that repeated rows inside the same file
    are skipped exactly as a real run would skip them.
    """

    def __init__(
        self,
        *,
        db: Session,
        dry_run: bool,
        default_username: str | None = None,
        accounts: AccountService | None = None,
        entries: TimeEntryRepository | None = None,
    ) -> None:
        self._dry_run = dry_run
        self._default_username = (default_username or "").strip() or None
        self._accounts = accounts or AccountService(db)
        self._entries = entries or TimeEntryRepository(db)
        self._simulated_keys: set[tuple[str, str, date, int]] = set()

    def process(self, row: Mapping[str, str | None]) -> RowOutcome:
        username = first_non_blank(row, USERNAME_ALIASES) or self._default_username
        if username is None:
            return RowOutcome.skipped("missing username and no default username provided")

        # Owners are never created during a dry run.
        owner = self._accounts.resolve_owner(username, create_missing=not self._dry_run)

        subject = first_non_blank(row, SUBJECT_ALIASES)
        if subject is None:
            return RowOutcome.skipped("missing subject")

        description = first_non_blank(row, DESCRIPTION_ALIASES) or ""

        date_worked = parse_date(first_non_blank(row, DATE_WORKED_ALIASES))
        if date_worked is None:
            return RowOutcome.skipped("invalid or missing date worked")

        minutes_worked = parse_int(first_non_blank(row, MINUTES_WORKED_ALIASES))
        if minutes_worked is None or minutes_worked <= 0:
            return RowOutcome.skipped("invalid minutes worked")

        created_at = parse_instant(first_non_blank(row, CREATED_AT_ALIASES))
        if created_at is None:
            created_at = local_midnight(date_worked)
        updated_at = parse_instant(first_non_blank(row, UPDATED_AT_ALIASES)) or created_at

        entry = TimeEntryInput(
            user_id=owner.id if owner is not None else None,
            username=username,
            subject=subject,
            description=description,
            date_worked=date_worked,
            minutes_worked=minutes_worked,
            created_at=created_at,
            updated_at=updated_at,
        )

        if self._is_duplicate(entry):
            return RowOutcome.skipped("duplicate time entry")

        if self._dry_run:
            self._simulated_keys.add(entry.dedupe_key())
            return RowOutcome.imported()

        return RowOutcome.imported(entry_id=self._entries.insert(entry))

    def _is_duplicate(self, entry: TimeEntryInput) -> bool:
        if entry.dedupe_key() in self._simulated_keys:
            return True
        if entry.user_id is None:
            # Owner does not exist yet, so it cannot own any entry.
            return False
        return self._entries.exists_duplicate(
            user_id=entry.user_id,
            subject=entry.subject,
            date_worked=entry.date_worked,
            minutes_worked=entry.minutes_worked,
        )
