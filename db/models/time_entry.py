"""
db/models/time_entry.py

One tracked unit of work: who worked on what, on which day, for how long.
"""

from __future__ import annotations

import uuid
from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import Date, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base, TimestampMixin

if TYPE_CHECKING:
    from db.models.user import User


class TimeEntry(Base, TimestampMixin):
    __tablename__ = "time_entries"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    subject: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    date_worked: Mapped[date] = mapped_column(Date, nullable=False)
    minutes_worked: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Duration in whole minutes, always > 0",
    )

    user: Mapped[User] = relationship("User", back_populates="time_entries")

    __table_args__ = (
        Index("ix_time_entries_user_id", "user_id"),
        Index("ix_time_entries_user_date", "user_id", "date_worked"),
        Index(
            "ix_time_entries_dedupe_lookup",
            "user_id",
            "subject",
            "date_worked",
            "minutes_worked",
        ),
    )

    def __repr__(self) -> str:
        return (
            f"<TimeEntry id={self.id} user_id={self.user_id} subject={self.subject!r} "
            f"date_worked={self.date_worked} minutes_worked={self.minutes_worked}>"
        )
