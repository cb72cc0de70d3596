"""
Data models for the forum module.

An Entry can represent a forum, a post, or a comment depending on its
attributes. Tree links are not stored here; they live in the EntryTree
that holds the entry.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from .config import utcnow


@dataclass
class Vote:
    """How one user voted on one entry."""
    entry_id: int
    user_id: int
    upvote: bool = False
    downvote: bool = False
    created: Optional[datetime] = None
    
    @property
    def value(self) -> int:
        """+1 for an upvote, -1 for a downvote, 0 otherwise."""
        return int(self.upvote) - int(self.downvote)
    
    def to_dict(self) -> dict:
        return {
            "entry_id": self.entry_id,
            "user_id": self.user_id,
            "upvote": self.upvote,
            "downvote": self.downvote,
            "created": self.created.isoformat() if self.created else None,
        }


@dataclass
class Entry:
    """
    A node of a threaded discussion.
    
    Body and url are mutually exclusive. An entry with neither is a pure
    container (a forum). Vote counts are a snapshot taken at fetch time.
    """
    id: int
    title: Optional[str] = None
    body: Optional[str] = None
    url: Optional[str] = None
    author_id: Optional[int] = None
    created: datetime = field(default_factory=utcnow)
    upvotes: int = 0
    downvotes: int = 0
    
    # Not persisted with the entry itself
    author_handle: Optional[str] = None
    user_vote: Optional[Vote] = None
    
    def __post_init__(self):
        if self.body and self.url:
            raise ValueError(f"Entry {self.id} cannot have both a body and a url")
        if self.upvotes < 0 or self.downvotes < 0:
            raise ValueError(f"Entry {self.id} has a negative vote count")
    
    @property
    def points(self) -> int:
        """User-visible upvotes minus downvotes."""
        return self.upvotes - self.downvotes
    
    @property
    def is_forum(self) -> bool:
        return not self.body and not self.url
    
    @property
    def is_link(self) -> bool:
        return bool(self.url)
    
    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "body": self.body,
            "url": self.url,
            "author_id": self.author_id,
            "author_handle": self.author_handle,
            "created": self.created.isoformat(),
            "upvotes": self.upvotes,
            "downvotes": self.downvotes,
            "points": self.points,
            "forum": self.is_forum,
            "user_vote": self.user_vote.value if self.user_vote else 0,
        }
