"""
app/repositories/time_entry_repository.py

Persistence layer for time entries written by the CSV importer.
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from datetime import date
from typing import Any

from sqlalchemy import exists, select, update
from sqlalchemy.orm import Session

from app.domain.time_entry_import import TimeEntryInput
from db.models.time_entry import TimeEntry

# PostgreSQL caps a statement at 65535 bind parameters.
SYNC_CHUNK_SIZE = 10_000


class TimeEntryRepository:
    """
    Repository for owner-scoped time entry reads and writes.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def exists_duplicate(
        self,
        *,
        user_id: uuid.UUID,
        subject: str,
        date_worked: date,
        minutes_worked: int,
    ) -> bool:
        """
        True when the owner already has an entry with the same subject, date
        and duration. Import-time heuristic only; nothing enforces uniqueness.
        """

        stmt = select(
            exists().where(
                TimeEntry.user_id == user_id,
                TimeEntry.subject == subject,
                TimeEntry.date_worked == date_worked,
                TimeEntry.minutes_worked == minutes_worked,
            )
        )
        return bool(self._session.execute(stmt).scalar())

    def insert(self, row: TimeEntryInput) -> uuid.UUID:
        """
        Insert one entry with caller-supplied audit timestamps and return its id.
        """

        if row.user_id is None:
            raise ValueError("Cannot persist a time entry without an owner id.")

        entry = TimeEntry(
            user_id=row.user_id,
            subject=row.subject,
            description=row.description,
            date_worked=row.date_worked,
            minutes_worked=row.minutes_worked,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
        self._session.add(entry)
        self._session.flush()
        return entry.id

    def sync_updated_at_to_created_at(
        self,
        ids: Sequence[uuid.UUID],
        *,
        chunk_size: int = SYNC_CHUNK_SIZE,
    ) -> int:
        """
        Force updated_at = created_at for exactly the given entries.

        Ids are sent in IN-lists of at most ``chunk_size`` to stay under the
        driver's bind parameter limit. Every chunk runs in the caller's
        transaction, so the pass still commits or rolls back as one unit.
        """

        id_list = list(ids)
        if not id_list:
            return 0

        step = max(1, chunk_size)
        synced = 0
        for start in range(0, len(id_list), step):
            stmt = (
                update(TimeEntry)
                .where(TimeEntry.id.in_(id_list[start : start + step]))
                .values(updated_at=TimeEntry.created_at)
                .execution_options(synchronize_session=False)
            )
            result: Any = self._session.execute(stmt)
            synced += int(result.rowcount or 0)
        return synced

    def list_for_user(self, user_id: uuid.UUID) -> list[TimeEntry]:
        """
        All entries of one owner, newest work date first.
        """

        stmt = (
            select(TimeEntry)
            .where(TimeEntry.user_id == user_id)
            .order_by(TimeEntry.date_worked.desc(), TimeEntry.created_at.desc())
        )
        return list(self._session.execute(stmt).scalars().all())
