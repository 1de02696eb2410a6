"""
Field-level constraint functions shared by the request schemas.
"""
from datetime import datetime, timezone
from typing import Optional


def require_text(value: str) -> str:
    """Reject blank strings; surrounding whitespace is trimmed."""
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


def optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return require_text(value)


def utc_naive(value: Optional[datetime]) -> Optional[datetime]:
    """Timestamps are stored as naive UTC; aware values are converted first."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
