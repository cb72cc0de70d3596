"""
Utilities module for Forum Ranking.
"""
from .logger import logger, init_logging

__all__ = ["logger", "init_logging"]
