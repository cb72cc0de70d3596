"""
Vote Repository

Handles storing and looking up the vote an account holds on an entry.
"""
from typing import Optional

from loguru import logger

from database.models import EntryRecord, VoteRecord
from forum import Vote
from .base import BaseRepository
from .entries import EntryNotFoundError


class VoteValidationError(ValueError):
    """Raised when a vote is both an upvote and a downvote."""
    pass


class VoteRepository(BaseRepository[VoteRecord]):
    """Repository for vote operations."""
    
    model = VoteRecord
    
    async def upsert(self, entry_id: int, user_id: int, upvote: bool, downvote: bool) -> Vote:
        """
        Store an account's vote on an entry, replacing any earlier vote.
        
        Args:
            entry_id: Entry being voted on
            user_id: Account casting the vote
            upvote: Whether this is an upvote
            downvote: Whether this is a downvote
            
        Returns:
            The stored vote
        """
        if upvote and downvote:
            raise VoteValidationError("A vote cannot be both an upvote and a downvote.")
        
        if await self.session.get(EntryRecord, entry_id) is None:
            raise EntryNotFoundError(f"Entry {entry_id} does not exist")
        
        record = await self.get((user_id, entry_id))
        if record is None:
            record = await self.add(VoteRecord(
                user_id=user_id,
                entry_id=entry_id,
                upvote=upvote,
                downvote=downvote,
                created_at=self.now(),
            ))
            logger.info(f"Stored vote of user {user_id} on entry {entry_id}")
        else:
            record.upvote = upvote
            record.downvote = downvote
            await self.session.flush()
            logger.info(f"Updated vote of user {user_id} on entry {entry_id}")
        
        return self._to_vote(record)
    
    async def find(self, entry_id: int, user_id: int) -> Optional[Vote]:
        """
        Get an account's vote on an entry.
        
        Returns:
            The vote, or None if the account has not voted
        """
        record = await self.get((user_id, entry_id))
        return self._to_vote(record) if record else None
    
    @staticmethod
    def _to_vote(record: VoteRecord) -> Vote:
        return Vote(
            entry_id=record.entry_id,
            user_id=record.user_id,
            upvote=record.upvote,
            downvote=record.downvote,
            created=record.created_at,
        )
