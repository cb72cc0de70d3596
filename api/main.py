"""
FastAPI Application - Forum Ranking API
"""
import asyncio
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import settings, ensure_directories
from database import Database, run_migrations
from utils import logger, init_logging
from .routes import router


def create_app(database: Optional[Database] = None, use_migrations: bool = True) -> FastAPI:
    """
    Create the API application.
    
    Args:
        database: Database to serve (defaults to the one in settings)
        use_migrations: Apply Alembic migrations on startup; when False the
                        tables are created directly from the models
    """
    database = database or Database.from_settings(settings)
    
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup and shutdown events."""
        init_logging(app_name="api")
        logger.info("Starting API server")
        
        if use_migrations:
            ensure_directories()
            # Alembic drives its own event loop
            await asyncio.to_thread(run_migrations, database.url)
        else:
            await database.create_tables()
        await database.connect()
        yield
        
        logger.info("Shutting down API server")
        await database.close()
    
    app = FastAPI(
        title="Forum Ranking",
        description="API for ranked threaded discussions",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.database = database
    
    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    
    app.include_router(router, prefix="/api")
    
    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "name": "Forum Ranking",
            "version": "1.0.0",
            "status": "running"
        }
    
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    
    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)
