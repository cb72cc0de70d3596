"""
Forum Ranking - Configuration
"""
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    # Paths
    BASE_DIR: Path = Path(__file__).parent
    DATA_DIR: Path = Field(default_factory=lambda: Path(__file__).parent / "data")
    DATABASE_PATH: Path = Field(default_factory=lambda: Path(__file__).parent / "data" / "forum.db")
    DATABASE_URL: Optional[str] = Field(default=None, description="Overrides DATABASE_PATH when set")
    
    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_DIR: Optional[Path] = Field(default=None, description="File logging is disabled when unset")
    
    # Threads
    MAX_THREAD_ENTRIES: int = Field(default=5000, description="Largest thread a single fetch may build")
    
    # API
    API_HOST: str = Field(default="0.0.0.0")
    API_PORT: int = Field(default=8000)
    
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"
    
    @property
    def database_url(self) -> str:
        """Async SQLAlchemy URL of the forum database."""
        return self.DATABASE_URL or f"sqlite+aiosqlite:///{self.DATABASE_PATH}"


# Global settings instance
settings = Settings()


def ensure_directories():
    """Ensure all required directories exist."""
    dirs = [settings.DATA_DIR]
    if settings.LOG_DIR:
        dirs.append(settings.LOG_DIR)
    for dir_path in dirs:
        dir_path.mkdir(parents=True, exist_ok=True)
