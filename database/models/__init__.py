"""
SQLAlchemy ORM Models

This module defines all database models using SQLAlchemy ORM.
"""

from .base import Base, CreatedAtMixin
from .forum import Account, EntryRecord, EntryClosure, VoteRecord

__all__ = [
    # Base
    "Base",
    "CreatedAtMixin",
    # Forum
    "Account",
    "EntryRecord",
    "EntryClosure",
    "VoteRecord",
]
