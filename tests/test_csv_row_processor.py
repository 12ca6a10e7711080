from __future__ import annotations

from datetime import datetime

from sqlalchemy import select

from app.domain.time_entry_import import RowStatus
from app.services.csv_row_processor import CSVRowProcessor
from db.models.time_entry import TimeEntry
from db.models.user import User


def _row(**values: str) -> dict[str, str | None]:
    row: dict[str, str | None] = {
        "username": "alice",
        "subject": "Report",
        "dateworked": "2024-05-01",
        "minutesworked": "90",
    }
    row.update(values)
    return row


def _stored(db_session, entry_id) -> TimeEntry:
    """Reload an entry from the database; SQLite hands timestamps back as naive wall-clock values."""
    db_session.commit()
    db_session.expire_all()
    return db_session.get(TimeEntry, entry_id)


def test_defaults_for_optional_fields(db_session) -> None:
    processor = CSVRowProcessor(db=db_session, dry_run=False)

    outcome = processor.process(_row())

    assert outcome.status is RowStatus.IMPORTED
    entry = _stored(db_session, outcome.entry_id)
    assert entry.description == ""
    assert entry.created_at == datetime(2024, 5, 1, 0, 0)
    assert entry.updated_at == entry.created_at


def test_updated_defaults_to_explicit_created(db_session) -> None:
    processor = CSVRowProcessor(db=db_session, dry_run=False)

    outcome = processor.process(_row(created="2024-05-01T09:15:00Z", notes=" call notes "))

    entry = _stored(db_session, outcome.entry_id)
    assert entry.description == "call notes"
    assert entry.created_at == datetime(2024, 5, 1, 9, 15)
    assert entry.updated_at == entry.created_at


def test_skip_reasons(db_session) -> None:
    processor = CSVRowProcessor(db=db_session, dry_run=False)

    assert processor.process(_row(username="")).reason == "missing username and no default username provided"
    assert processor.process(_row(subject="  ")).reason == "missing subject"
    assert processor.process(_row(dateworked="someday")).reason == "invalid or missing date worked"
    assert processor.process(_row(minutesworked="-10")).reason == "invalid minutes worked"
    assert processor.process(_row(minutesworked="ninety")).reason == "invalid minutes worked"


def test_blank_default_username_is_ignored(db_session) -> None:
    processor = CSVRowProcessor(db=db_session, dry_run=False, default_username="   ")

    outcome = processor.process(_row(username=""))

    assert outcome.status is RowStatus.SKIPPED


def test_dry_run_never_creates_owner_or_entry(db_session) -> None:
    processor = CSVRowProcessor(db=db_session, dry_run=True)

    first = processor.process(_row())
    second = processor.process(_row())

    assert first.status is RowStatus.IMPORTED
    assert first.entry_id is None
    assert second.status is RowStatus.SKIPPED
    assert db_session.execute(select(User)).scalars().all() == []
    assert db_session.execute(select(TimeEntry)).scalars().all() == []
