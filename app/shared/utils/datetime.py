"""
Datetime utilities for consistent timezone handling.

All datetime values in the system should be timezone-aware UTC.
Use these helpers instead of datetime.now() or datetime.utcnow().
"""

from datetime import UTC, date, datetime, time, timedelta
from zoneinfo import ZoneInfo


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Use this instead of:
        - datetime.now() - naive, uses local timezone
        - datetime.utcnow() - naive, deprecated in Python 3.12
        - datetime.now(UTC) - correct but verbose

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC

    Use at repository/persistence boundaries to normalize datetimes
    (SQLite hands back naive values even for timezone-aware columns).

    Args:
        dt: A datetime that may be naive or aware

    Returns:
        UTC-aware datetime or None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


def parse_iso_day(value: str) -> date:
    """
    Parse a YYYY-MM-DD calendar day.

    Raises:
        ValueError: If value is not a valid YYYY-MM-DD date
    """
    return date.fromisoformat(value.strip())


def local_day_bounds(day: date, tz_name: str) -> tuple[datetime, datetime]:
    """
    Return the UTC bounds of a calendar day in the given zone.

    The start is local midnight of day (inclusive) and the end is local
    midnight of the next day (exclusive), so DST days are 23 or 25 hours.

    Args:
        day: Calendar day
        tz_name: IANA time zone name (e.g. "Asia/Manila")

    Returns:
        (start, end) as UTC-aware datetimes
    """
    tz = ZoneInfo(tz_name)
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz)
    return start.astimezone(UTC), end.astimezone(UTC)
