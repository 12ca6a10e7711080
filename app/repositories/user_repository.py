"""
app/repositories/user_repository.py

Lookup and creation of owning accounts.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from db.models.user import User


class UserRepository:
    """
    Repository for account lookups by exact username.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def find_by_username(self, username: str) -> User | None:
        """
        Return the account with exactly this username (case-sensitive), if any.
        """

        stmt = select(User).where(User.username == username)
        return self._session.execute(stmt).scalars().first()

    def create(self, *, username: str, password_hash: str, role: str = "USER") -> User:
        """
        Insert one account and flush so its id is available to the caller.
        """

        user = User(username=username, password_hash=password_hash, role=role)
        self._session.add(user)
        self._session.flush()
        return user
