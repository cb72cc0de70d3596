"""
Forum Models

Models for accounts, entries, their closure table, and votes.

Entries form a tree through the closure table: every entry has a row
pointing at itself (depth 0) and one row per ancestor (depth >= 1).
"""
from typing import Optional, List

from sqlalchemy import String, Integer, Boolean, Text, Index, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, CreatedAtMixin


class Account(Base, CreatedAtMixin):
    """A user who can author entries and cast votes."""
    __tablename__ = "account"
    
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    handle: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    
    entries: Mapped[List["EntryRecord"]] = relationship("EntryRecord", back_populates="author")


class EntryRecord(Base, CreatedAtMixin):
    """
    A forum, post or comment.
    
    Body and url are mutually exclusive; an entry with neither is a forum.
    """
    __tablename__ = "entry"
    
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    
    # Content
    title: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    body: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    
    # Authorship
    author_id: Mapped[Optional[int]] = mapped_column(ForeignKey("account.id"), nullable=True)
    
    author: Mapped[Optional["Account"]] = relationship("Account", back_populates="entries")
    votes: Mapped[List["VoteRecord"]] = relationship(
        "VoteRecord",
        back_populates="entry",
        cascade="all, delete-orphan"
    )


class EntryClosure(Base):
    """One (ancestor, descendant, depth) fact of entry ancestry."""
    __tablename__ = "entry_closures"
    
    ancestor: Mapped[int] = mapped_column(ForeignKey("entry.id"), primary_key=True)
    descendant: Mapped[int] = mapped_column(ForeignKey("entry.id"), primary_key=True)
    depth: Mapped[int] = mapped_column(Integer, nullable=False)
    
    __table_args__ = (
        Index("idx_entry_closures_descendant", "descendant"),
        Index("idx_entry_closures_ancestor_depth", "ancestor", "depth"),
    )
    
    def __repr__(self) -> str:
        return f"<EntryClosure({self.ancestor} -> {self.descendant}, depth={self.depth})>"


class VoteRecord(Base, CreatedAtMixin):
    """The single vote one account holds on one entry."""
    __tablename__ = "vote"
    
    user_id: Mapped[int] = mapped_column(ForeignKey("account.id"), primary_key=True)
    entry_id: Mapped[int] = mapped_column(ForeignKey("entry.id"), primary_key=True)
    upvote: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    downvote: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    
    entry: Mapped["EntryRecord"] = relationship("EntryRecord", back_populates="votes")
    
    __table_args__ = (
        Index("idx_vote_entry", "entry_id"),
    )
    