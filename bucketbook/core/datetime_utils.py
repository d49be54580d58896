"""
Datetime utilities for handling timezone-aware datetimes
"""

from datetime import datetime, timezone
from typing import Optional

def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Convert a timezone-aware datetime to naive UTC for the DateTime columns
    
    Args:
        value: datetime from a request body, aware or naive, or None
    
    Returns:
        Naive UTC datetime, the naive input unchanged, or None
    """
    if value is not None and value.tzinfo:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value
