"""
app/services/account_service.py

Owner resolution for imported time entries.
"""

from __future__ import annotations

import hashlib
import logging
import secrets
import uuid

from sqlalchemy.orm import Session

from app.repositories.user_repository import UserRepository
from db.models.user import User

logger = logging.getLogger(__name__)

_PBKDF2_ALGORITHM = "sha256"
_PBKDF2_ITERATIONS = 390_000
IMPORTED_USER_ROLE = "USER"


def hash_password(password: str, *, salt: str | None = None) -> str:
    """
    Hash a password as ``pbkdf2_sha256$<iterations>$<salt>$<hex digest>``.
    """

    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac(
        _PBKDF2_ALGORITHM,
        password.encode("utf-8"),
        salt.encode("utf-8"),
        _PBKDF2_ITERATIONS,
    ).hex()
    return f"pbkdf2_{_PBKDF2_ALGORITHM}${_PBKDF2_ITERATIONS}${salt}${digest}"


def generate_placeholder_password() -> str:
    return f"imported-{uuid.uuid4()}"


class AccountService:
    """
    Finds owners by name and creates missing ones on demand.
    """

    def __init__(self, session: Session) -> None:
        self._users = UserRepository(session)

    def resolve_owner(self, username: str, *, create_missing: bool = True) -> User | None:
        """
        Return the owner named ``username``.

        When no such account exists and ``create_missing`` is set, a new one is
        created with a random placeholder credential that nobody knows; only
        its hash is stored.
        """

        user = self._users.find_by_username(username)
        if user is not None or not create_missing:
            return user

        user = self._users.create(
            username=username,
            password_hash=hash_password(generate_placeholder_password()),
            role=IMPORTED_USER_ROLE,
        )
        logger.info("Created account for imported time entries username=%r", username)
        return user
