"""
Time utilities for grant deadline filtering.
Converts day offsets relative to "now" into absolute ISO-8601 timestamps.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

EARLIEST_INSTANT = datetime.min.replace(tzinfo=timezone.utc)
LATEST_INSTANT = datetime.max.replace(tzinfo=timezone.utc)


def utc_now() -> datetime:
    """Get the current instant as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def resolve_deadline_offset(days: float, now: Optional[datetime] = None) -> datetime:
    """
    Convert a deadline offset in days to an absolute instant.

    Negative offsets point into the past (overdue), positive into the future.
    When ``now`` is omitted the clock is read on every call. Offsets that
    land outside the representable range clamp to the earliest or latest
    instant.
    """
    if now is None:
        now = utc_now()
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    try:
        return now + timedelta(days=days)
    except OverflowError:
        return LATEST_INSTANT if days > 0 else EARLIEST_INSTANT


def to_iso_timestamp(value: datetime) -> str:
    """
    Format a datetime as ISO-8601 UTC with millisecond precision.

    Examples:
        >>> to_iso_timestamp(datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc))
        '2025-01-15T12:00:00.000Z'
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    # strftime does not zero-pad years below 1000 on every platform
    return f"{value.year:04d}-" + value.strftime("%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def parse_iso_timestamp(value: str) -> datetime:
    """Parse a timestamp produced by to_iso_timestamp (or any ISO-8601 string)."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
