"""
Database Module - Forum Ranking

Structure:
    database/
    ├── __init__.py      # This file - public API
    ├── session.py       # Database context (async engine + sessions)
    ├── init.py          # Migration utilities
    └── models/          # SQLAlchemy ORM models

Usage:
    from database import Database
    from database.models import EntryRecord
    
    database = Database("sqlite+aiosqlite:///data/forum.db")
    async with database.session() as session:
        result = await session.execute(select(EntryRecord))
        entries = result.scalars().all()
"""

from .models import (
    Base,
    CreatedAtMixin,
    Account,
    EntryRecord,
    EntryClosure,
    VoteRecord,
)
from .session import Database, get_session_dependency
from .init import get_alembic_config, run_migrations

__all__ = [
    # Models
    "Base",
    "CreatedAtMixin",
    "Account",
    "EntryRecord",
    "EntryClosure",
    "VoteRecord",
    # Session
    "Database",
    "get_session_dependency",
    # Init utilities
    "get_alembic_config",
    "run_migrations",
]
