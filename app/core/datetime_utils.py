"""Centralized datetime utilities for consistent timezone handling.

Usage:
    from app.core.datetime_utils import iso_timestamp, local_now

    # Response timestamps (UTC, ISO 8601 with milliseconds)
    body["timestamp"] = iso_timestamp()

    # Human-readable time for the email body
    stamp = format_display_timestamp(local_now(settings.display_timezone))
"""

from datetime import UTC, datetime
from zoneinfo import ZoneInfo


def utc_now() -> datetime:
    """Get current UTC time as an aware datetime."""
    return datetime.now(UTC)


def iso_timestamp(dt: datetime | None = None) -> str:
    """Format a datetime as ISO 8601 UTC with millisecond precision.

    Matches the `2024-05-01T12:30:00.123Z` shape browsers produce, so
    frontends can parse response timestamps with `new Date(...)`.

    Args:
        dt: Datetime to format (defaults to now). Naive values are assumed UTC.
    """
    dt = dt or utc_now()
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def is_valid_timezone(tz_name: str) -> bool:
    """Check if a timezone name is valid IANA identifier.

    Args:
        tz_name: Timezone string (e.g., "Asia/Kolkata")

    Returns:
        True if valid IANA timezone
    """
    try:
        ZoneInfo(tz_name)
        return True
    except (KeyError, ValueError):
        return False


def local_now(timezone: str = "") -> datetime:
    """Get current time in the given timezone.

    Args:
        timezone: IANA timezone string. Empty means the server's local zone.

    Returns:
        Aware datetime
    """
    if not timezone:
        return datetime.now().astimezone()

    try:
        tz = ZoneInfo(timezone)
    except (KeyError, ValueError):
        # Fallback to server local time for invalid timezone
        return datetime.now().astimezone()

    return datetime.now(tz)


def format_display_timestamp(dt: datetime) -> str:
    """Format an aware datetime for humans, e.g. 'Monday, 6 May 2024, 14:05:09 IST'."""
    return f"{dt.strftime('%A')}, {dt.day} {dt.strftime('%B %Y, %H:%M:%S')} {dt.tzname() or ''}".rstrip()
