"""
Database Session Management

Provides the Database context: an async SQLAlchemy engine and session
factory for one database URL. Whatever performs I/O is handed a Database
explicitly; nothing here is module-global.
"""
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from loguru import logger

from .models import Base


class Database:
    """
    Engine and session factory for one database.
    
    Usage:
        database = Database("sqlite+aiosqlite:///data/forum.db")
        await database.connect()
        async with database.session() as session:
            result = await session.execute(...)
        await database.close()
    """
    
    def __init__(self, url: str, echo: bool = False):
        """
        Initialize the database context.
        
        Args:
            url: Async SQLAlchemy database URL
            echo: Log every SQL statement
        """
        self.url = url
        self.echo = echo
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None
    
    @classmethod
    def from_settings(cls, settings) -> "Database":
        """Create a database context from application settings."""
        return cls(settings.database_url, echo=settings.LOG_LEVEL == "DEBUG")
    
    @property
    def is_memory(self) -> bool:
        return self.url.startswith("sqlite") and (":memory:" in self.url or self.url.endswith("://"))
    
    async def connect(self) -> AsyncEngine:
        """
        Create the engine and session factory.
        
        Safe to call more than once.
        """
        if self._engine is not None:
            return self._engine
        
        logger.info(f"Initializing database engine: {self.url}")
        
        engine_args = {"echo": self.echo}
        if self.url.startswith("sqlite"):
            engine_args["connect_args"] = {"check_same_thread": False}
        if self.is_memory:
            # One shared connection, otherwise every session sees an empty database
            engine_args["poolclass"] = StaticPool
        
        self._engine = create_async_engine(self.url, **engine_args)
        self._session_factory = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
        
        logger.info("Database engine initialized successfully")
        return self._engine
    
    async def close(self) -> None:
        """Close the database engine."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Database engine closed")
    
    async def create_tables(self) -> None:
        """
        Create all tables in the database.
        
        Note: This is for development/testing only.
        Use Alembic migrations for production.
        """
        engine = await self.connect()
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created")
    
    async def drop_tables(self) -> None:
        """
        Drop all tables in the database.
        
        Warning: This will delete all data!
        """
        engine = await self.connect()
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        logger.warning("Database tables dropped")
    
    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Get a database session as async context manager.
        
        The session is committed on success, or rolled back on exception.
        """
        if self._session_factory is None:
            await self.connect()
        
        session = self._session_factory()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def get_session_dependency(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for getting a session of the app's database.
    
    Usage in FastAPI:
        @router.get("/items")
        async def get_items(session: AsyncSession = Depends(get_session_dependency)):
            ...
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session
