"""
Account Repository

Handles database operations for accounts.
"""
from typing import Optional

from loguru import logger
from sqlalchemy import select

from database.models import Account
from .base import BaseRepository


class AccountValidationError(ValueError):
    """Raised when an account cannot be created as requested."""
    pass


class AccountRepository(BaseRepository[Account]):
    """Repository for account operations."""
    
    model = Account
    
    async def create(self, handle: str) -> Account:
        """
        Create an account with a unique handle.
        
        Args:
            handle: Display name, trimmed before storing
            
        Returns:
            Created account
        """
        handle = (handle or "").strip()
        if not handle:
            raise AccountValidationError("The handle must not be empty or consist solely of whitespace.")
        
        if await self.get_by_handle(handle) is not None:
            raise AccountValidationError(f"The handle '{handle}' is already taken.")
        
        account = await self.add(Account(handle=handle, created_at=self.now()))
        logger.info(f"Created account {account.id} ({handle})")
        return account
    
    async def get_by_handle(self, handle: str) -> Optional[Account]:
        """Get account by its handle."""
        stmt = select(Account).where(Account.handle == handle)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
