"""
Centralized DateTime Utilities
==============================

Provides consistent datetime handling across the entire application.
All datetime operations use the timezone configured in lending.core.config.

Functions:
- now(): Returns timezone-aware datetime object
- today(): Returns the current calendar date in the application timezone
- parse_iso(): Safely parse ISO 8601 string to datetime
- parse_date(): Safely parse a calendar date (or ISO datetime) to a date
- ensure_aware(): Attach UTC to naive datetimes read back from MongoDB
- to_iso(): Convert datetime object to ISO 8601 string
"""
import logging
import zoneinfo
from datetime import date, datetime, timezone as dt_timezone
from typing import Optional

from lending.core.config import get_settings

logger = logging.getLogger(__name__)


def _get_app_timezone() -> dt_timezone:
    """
    Get the application timezone from config.
    Returns timezone object (defaults to UTC if invalid).
    """
    tz_str = get_settings().timezone
    
    # Handle UTC explicitly
    if tz_str.upper() == "UTC":
        return dt_timezone.utc
    
    try:
        return zoneinfo.ZoneInfo(tz_str)
    except (zoneinfo.ZoneInfoNotFoundError, ValueError):
        logger.warning("Invalid timezone '%s', falling back to UTC", tz_str)
        return dt_timezone.utc


def now() -> datetime:
    """
    Get current datetime with application-configured timezone.
    
    Returns:
        timezone-aware datetime object
    """
    return datetime.now(_get_app_timezone())


def today() -> date:
    """Current calendar date in the application timezone."""
    return now().date()


def parse_iso(dt_str: Optional[str]) -> Optional[datetime]:
    """
    Parse ISO 8601 string to datetime object.
    Handles both timezone-aware and naive strings.
    If string is naive, assumes application timezone.
    
    Args:
        dt_str: ISO 8601 string (e.g., "2025-12-24T10:30:00Z" or "2025-12-24T10:30:00+05:30")
    
    Returns:
        timezone-aware datetime object, or None if parsing fails
    """
    if not dt_str:
        return None
    
    try:
        # Replace 'Z' with '+00:00' for parsing
        dt = datetime.fromisoformat(dt_str.strip().replace("Z", "+00:00"))
    except (TypeError, ValueError):
        return None
    
    # If timezone-naive, assume application timezone
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=_get_app_timezone())
    return dt


def parse_date(value: Optional[str]) -> Optional[date]:
    """
    Parse a calendar date.
    
    Accepts plain dates ("2025-12-24") as well as full ISO 8601 datetimes,
    which are converted to the application timezone before the date is taken.
    
    Returns:
        date object, or None if parsing fails
    """
    if not value:
        return None
    
    try:
        return date.fromisoformat(value.strip())
    except (TypeError, ValueError):
        pass
    
    dt = parse_iso(value)
    if dt is None:
        return None
    return dt.astimezone(_get_app_timezone()).date()


def ensure_aware(dt: Optional[datetime]) -> Optional[datetime]:
    """
    MongoDB hands back naive datetimes (UTC) unless the client is tz_aware.
    Normalize them so comparisons and serialization stay consistent.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=dt_timezone.utc)
    return dt


def to_iso(dt: Optional[datetime]) -> Optional[str]:
    """
    Convert datetime object to ISO 8601 string.
    If datetime is naive, assumes application timezone.
    
    Args:
        dt: datetime object (timezone-aware or naive)
    
    Returns:
        ISO 8601 formatted string, or None if dt is None
    """
    if dt is None:
        return None
    
    # If naive, assume application timezone
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=_get_app_timezone())
    
    # Format with timezone offset, or 'Z' if UTC
    if dt.utcoffset() == dt_timezone.utc.utcoffset(None):
        return dt.replace(microsecond=0).isoformat().replace("+00:00", "Z")
    return dt.replace(microsecond=0).isoformat()
