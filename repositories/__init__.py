"""
SQLAlchemy-based Repositories

This package provides async repository pattern using SQLAlchemy ORM.

Usage:
    from repositories import EntryRepository
    from database import Database
    
    async with database.session() as session:
        repo = EntryRepository(session)
        entry_id = await repo.persist(author_id=1, body="Hello", parent_id=forum_id)
        tree = await repo.descendant_entries(forum_id)
"""

from .base import BaseRepository
from .accounts import AccountRepository, AccountValidationError
from .entries import EntryRepository, EntryValidationError, EntryNotFoundError, ThreadTooLargeError
from .votes import VoteRepository, VoteValidationError

__all__ = [
    "BaseRepository",
    # Accounts
    "AccountRepository",
    "AccountValidationError",
    # Entries
    "EntryRepository",
    "EntryValidationError",
    "EntryNotFoundError",
    "ThreadTooLargeError",
    # Votes
    "VoteRepository",
    "VoteValidationError",
]
