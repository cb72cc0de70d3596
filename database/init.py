"""
Database Initialization and Utilities

Functions for initializing and migrating the forum database.
"""
from typing import Optional

from loguru import logger


def get_alembic_config(database_url: Optional[str] = None):
    """
    Build the Alembic configuration for this project.
    
    Args:
        database_url: Overrides the URL from settings
    """
    from alembic.config import Config
    from config import settings
    
    alembic_cfg = Config(str(settings.BASE_DIR / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(settings.BASE_DIR / "migrations"))
    alembic_cfg.set_main_option("sqlalchemy.url", database_url or settings.database_url)
    return alembic_cfg


def run_migrations(database_url: Optional[str] = None) -> None:
    """
    Run pending Alembic migrations.
    
    This is a convenience wrapper around Alembic upgrade command.
    """
    from alembic import command
    
    command.upgrade(get_alembic_config(database_url), "head")
    logger.info("Database migrations completed")
