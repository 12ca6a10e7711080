"""
db/models/user.py

Account that owns time entries. Accounts created by the CSV importer carry a
random placeholder credential and cannot log in until it is reset.
"""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base, TimestampMixin

if TYPE_CHECKING:
    from db.models.time_entry import TimeEntry


class User(Base, TimestampMixin):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    username: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="Login name, matched case-sensitively",
    )

    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    role: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default="USER",
    )

    # ── Relationships ──────────────────────────────────────────────────────────

    time_entries: Mapped[list["TimeEntry"]] = relationship(
        "TimeEntry",
        back_populates="user",
        passive_deletes=True,
    )

    __table_args__ = (
        Index("ix_users_role", "role"),
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r}>"
