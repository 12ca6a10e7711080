"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.time_entry import TimeEntry
from db.models.user import User

__all__ = [
    "TimeEntry",
    "User",
]
