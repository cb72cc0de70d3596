"""
Configuration and utilities for thread ranking.

Contains:
- Decay and gravity constants
- Score truncation
- Age calculation
"""
import math
from datetime import datetime, timezone
from typing import Optional


# ============================================
# SCORING CONFIGURATION
# ============================================

DECAY = 0.5             # Share of a subtree's points that reaches the level above
EPS = 1e-3              # Keeps a zero-point numerator above zero
GRAVITY = 1.8           # Age exponent
AGE_OFFSET_HOURS = 2    # Added to the age before applying gravity
SCORE_DIGITS = 8        # Scores are truncated to this many decimal digits


# ============================================
# UTILITY FUNCTIONS
# ============================================

def truncate(value: float, digits: int = SCORE_DIGITS) -> float:
    """
    Truncate a value toward zero to a fixed number of decimal digits.
    
    Args:
        value: Value to truncate
        digits: Number of decimal digits to keep
        
    Returns:
        Truncated value
    """
    exp = 10 ** digits
    return math.trunc(value * exp) / exp


def utcnow() -> datetime:
    """Get current timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps are stored as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def age_hours(created: datetime, now: Optional[datetime] = None) -> float:
    """
    Get the age of an entry in hours.
    
    Args:
        created: Creation timestamp (naive values are read as UTC)
        now: Reference time (defaults to current UTC time)
        
    Returns:
        Hours since creation, never negative
    """
    now = now or utcnow()
    seconds = (_as_utc(now) - _as_utc(created)).total_seconds()
    if seconds < 0:
        return 0.0
    return seconds / 3600
