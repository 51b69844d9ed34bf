from datetime import datetime, time, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo


def utc_now() -> datetime:
    """Return a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize a datetime to aware UTC.

    Naive values are taken to already be UTC; SQLite hands stored timestamps
    back without their offset.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def resolve_timezone(name: str) -> tzinfo:
    """Timezone by IANA name; "UTC" never needs the tz database."""
    if not name or name.upper() in ("UTC", "Z"):
        return timezone.utc
    return ZoneInfo(name)


def parse_hhmm(value: str) -> time:
    """Parse "HH:MM" into a time."""
    hours, minutes = value.strip().split(":")
    return time(int(hours), int(minutes))


def overlaps(start: datetime, end: datetime, other_start: datetime, other_end: datetime) -> bool:
    """Half-open interval test: [start, end) intersects [other_start, other_end)."""
    return start < other_end and other_start < end
