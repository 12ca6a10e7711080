"""
app/repositories package marker.
"""

from app.repositories.time_entry_repository import TimeEntryRepository
from app.repositories.user_repository import UserRepository

__all__ = [
    "TimeEntryRepository",
    "UserRepository",
]
