#!/usr/bin/env python3
"""
Conversions used when turning ORM rows into response models.
"""

from typing import Optional, Any
from datetime import datetime


def safe_str(value: Optional[Any], default: str = "") -> str:
    """``str(value)``, or ``default`` for None (UUID columns, optional text)."""
    if value is None:
        return default
    return str(value)


def safe_datetime_iso(dt: Optional[datetime]) -> Optional[str]:
    """ISO-8601 text for a timestamp column; None stays None."""
    return dt.isoformat() if dt is not None else None
