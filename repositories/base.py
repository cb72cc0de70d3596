"""
Base Repository Pattern with SQLAlchemy

Provides common async operations for all repositories.
"""
from datetime import datetime, timezone
from typing import TypeVar, Generic, Optional, Type, Any

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from database.models.base import Base


# Generic type for model classes
ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """
    Base repository with common async database operations.
    
    Subclasses should set the `model` class attribute to their specific
    SQLAlchemy model class.
    
    Example:
        class AccountRepository(BaseRepository[Account]):
            model = Account
    """
    
    model: Type[ModelT]
    
    def __init__(self, session: AsyncSession):
        """
        Initialize repository with database session.
        
        Args:
            session: SQLAlchemy async session
        """
        self.session = session
    
    # ============================================
    # READ OPERATIONS
    # ============================================
    
    async def get(self, entity_id: Any) -> Optional[ModelT]:
        """
        Get entity by primary key.
        
        Args:
            entity_id: Primary key value (a tuple for composite keys)
            
        Returns:
            Entity or None if not found
        """
        return await self.session.get(self.model, entity_id)
    
    async def count(self) -> int:
        """Count all entities."""
        stmt = select(func.count()).select_from(self.model)
        result = await self.session.execute(stmt)
        return result.scalar_one()
    
    async def exists(self, entity_id: int) -> bool:
        """
        Check if entity exists.
        
        Args:
            entity_id: Primary key value
            
        Returns:
            True if exists, False otherwise
        """
        stmt = select(func.count()).select_from(self.model).where(
            self.model.id == entity_id
        )
        result = await self.session.execute(stmt)
        return result.scalar_one() > 0
    
    # ============================================
    # WRITE OPERATIONS
    # ============================================
    
    async def add(self, entity: ModelT) -> ModelT:
        """
        Add a new entity.
        
        Args:
            entity: Entity to add
            
        Returns:
            Added entity with any auto-generated values
        """
        self.session.add(entity)
        await self.session.flush()
        return entity
    
    # ============================================
    # UTILITY METHODS
    # ============================================
    
    @staticmethod
    def now() -> datetime:
        """Get current UTC datetime, naive, as stored in the database."""
        return datetime.now(timezone.utc).replace(tzinfo=None)
