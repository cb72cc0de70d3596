"""
SQLAlchemy Base Model and Mixins

Declarative base shared by the forum tables.
"""
from datetime import datetime
from typing import Any, Dict

from sqlalchemy import DateTime, func, inspect
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all forum models."""
    
    def to_dict(self) -> Dict[str, Any]:
        """Column values keyed by column name, datetimes as ISO strings."""
        data = {}
        for column in self.__table__.columns:
            value = getattr(self, column.key)
            data[column.name] = value.isoformat() if isinstance(value, datetime) else value
        return data
    
    def __repr__(self) -> str:
        # Composite keys (votes, closure rows) show every key column
        keys = ", ".join(
            f"{column.key}={getattr(self, column.key)}"
            for column in inspect(type(self)).primary_key
        )
        return f"<{type(self).__name__}({keys})>"


class CreatedAtMixin:
    """Row creation time, stored as naive UTC."""
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=func.now(),
        nullable=False
    )
