"""Timestamp utilities for UTC handling and upstream date parsing.

Listings keep their dates as the strings the source provided. This module
turns those strings into comparable UTC datetimes when the recency window or
the ranking needs them:
- ISO 8601 with 'Z', offset, or no timezone (treated as UTC)
- Date-only ISO (2025-09-01)
- Spanish day-first dates (01/09/2025)
- RFC 2822 dates as emitted by syndication feeds
"""

from datetime import datetime, timedelta, timezone
from email.utils import parsedate_to_datetime
from typing import Optional

DAY_FIRST_FORMATS = ("%d/%m/%Y", "%d/%m/%Y %H:%M", "%d/%m/%Y %H:%M:%S")


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime.

    Returns:
        Current UTC time with timezone info
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Ensure a datetime is timezone-aware and in UTC.

    If the datetime is timezone-naive, it's treated as UTC.
    If the datetime has a different timezone, it's converted to UTC.

    Args:
        dt: Datetime to convert (can be None)

    Returns:
        Timezone-aware datetime in UTC, or None if input is None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def parse_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse an upstream date string to a UTC datetime.

    Tries ISO 8601 first, then day-first formats, then RFC 2822.

    Args:
        value: Date string as provided by the source

    Returns:
        Timezone-aware datetime in UTC, or None if the string is empty,
        matches no supported format, or falls outside the representable
        range once converted to UTC

    Example:
        >>> parse_datetime("2025-09-01").isoformat()
        '2025-09-01T00:00:00+00:00'
        >>> parse_datetime("not a date") is None
        True
    """
    if not value or not str(value).strip():
        return None

    parsed = _parse_local(str(value).strip())
    if parsed is None:
        return None

    try:
        return ensure_utc(parsed)
    except OverflowError:
        # e.g. 0001-01-01T00:00:00+01:00 has no UTC equivalent
        return None


def _parse_local(cleaned: str) -> Optional[datetime]:
    """Parse a date string without converting it to UTC."""
    iso_candidate = cleaned[:-1] + "+00:00" if cleaned.endswith(("Z", "z")) else cleaned
    try:
        return datetime.fromisoformat(iso_candidate)
    except ValueError:
        pass

    for fmt in DAY_FIRST_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt)
        except ValueError:
            continue

    try:
        return parsedate_to_datetime(cleaned)
    except (TypeError, ValueError, IndexError):
        return None


def window_start(days: int, now: Optional[datetime] = None) -> datetime:
    """Return the start of a trailing window of `days` days ending at `now`.

    Args:
        days: Window length in days
        now: End of the window (defaults to utc_now())

    Returns:
        UTC datetime marking the oldest instant still inside the window
    """
    end = ensure_utc(now) if now is not None else utc_now()
    return end - timedelta(days=days)
